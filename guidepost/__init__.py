"""
Guidepost: a guided-task engine.

Guidepost ingests a semi-structured instructional document, splits it into
numbered steps, tracks one learner's progress through them, and runs a
monitoring loop that compares what is on screen with what the current step
expects and emits de-duplicated advice.

- models:    projects, steps, observations, guidance records.
- parsing:   step parser, payload normalization, optional enrichment.
- progress:  the progression tracker.
- guidance:  observation sources, matching, generators, the orchestrator.
- session:   LearningSession, the host-facing facade.

Rendering, transport, persistence and screen capture stay with the host.
"""

from .errors import (
    ConfigError,
    DocumentNotFoundError,
    DocumentSourceError,
    GenerationError,
    GuidepostError,
    ObservationError,
)
from .models import (
    GuidanceEvent,
    MatchResult,
    Observation,
    Project,
    Step,
)
from .parsing import parse_steps
from .progress import ProgressTracker
from .guidance import GuidanceOrchestrator, match_step
from .session import LearningSession

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # errors
    "ConfigError",
    "DocumentNotFoundError",
    "DocumentSourceError",
    "GenerationError",
    "GuidepostError",
    "ObservationError",
    # core
    "GuidanceEvent",
    "MatchResult",
    "Observation",
    "Project",
    "Step",
    "parse_steps",
    "ProgressTracker",
    "GuidanceOrchestrator",
    "match_step",
    "LearningSession",
]
