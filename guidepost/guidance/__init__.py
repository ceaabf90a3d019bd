"""
Guidance package.

Framework-agnostic building blocks of the live guidance loop:

- Observation source interface and simple sources.
- Heuristic labelling of raw detections.
- Criteria matching of a step against an observation.
- Guidance generator interface, a local template generator and an HTTP
  client generator.
- Bounded histories, the repeating task, and the orchestrator that ties
  everything together.

Nothing here renders UI or talks to the learner directly.
"""

from .observation_interface import (
    NullObservationSource,
    ObservationError,
    ObservationSource,
    StaticObservationSource,
)
from .inference import (
    infer_application_context,
    infer_user_activity,
    observation_from_detections,
)
from .matching import match_criteria, match_elements, match_step
from .generator_interface import (
    GenerationError,
    GuidanceGenerator,
    TemplateGuidanceGenerator,
)
from .http_generator import HttpGeneratorConfig, HttpGuidanceGenerator
from .history import (
    GUIDANCE_HISTORY_CAPACITY,
    OBSERVATION_HISTORY_CAPACITY,
    BoundedHistory,
)
from .scheduler import RepeatingTask
from .orchestrator import GuidanceOrchestrator, OrchestratorConfig

__all__ = [
    # observation_interface
    "NullObservationSource",
    "ObservationError",
    "ObservationSource",
    "StaticObservationSource",
    # inference
    "infer_application_context",
    "infer_user_activity",
    "observation_from_detections",
    # matching
    "match_criteria",
    "match_elements",
    "match_step",
    # generators
    "GenerationError",
    "GuidanceGenerator",
    "TemplateGuidanceGenerator",
    "HttpGeneratorConfig",
    "HttpGuidanceGenerator",
    # history / scheduling
    "GUIDANCE_HISTORY_CAPACITY",
    "OBSERVATION_HISTORY_CAPACITY",
    "BoundedHistory",
    "RepeatingTask",
    # orchestrator
    "GuidanceOrchestrator",
    "OrchestratorConfig",
]
