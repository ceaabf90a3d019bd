"""
Guidance orchestrator.

This module ties together:

- the ProgressTracker (which step is current),
- an ObservationSource (what is on screen),
- the criteria matcher (matching.py),
- a GuidanceGenerator (what to tell the learner),

into a polling loop that emits de-duplicated GuidanceEvents.

Each cycle:

1) Gets the freshest observation (a cached one is reused while younger
   than the freshness threshold).
2) Skips quietly when there is no current step.
3) Matches the step against the observation.
4) Asks the generator for advisory text.
5) Emits a GuidanceEvent unless the text repeats the last emitted one.
6) Records the cycle's observation (fresh or cached) in the observation
   history, whatever happened in step 5.

Collaborator failures never escape a cycle: they are logged, published as
ERROR notices, and the loop carries on. At most one cycle runs at a time.

The orchestrator performs no UI work. Hosts subscribe to its notices or
poll its histories and render them however they like.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from guidepost.guidance.generator_interface import GuidanceGenerator
from guidepost.guidance.history import (
    GUIDANCE_HISTORY_CAPACITY,
    OBSERVATION_HISTORY_CAPACITY,
    BoundedHistory,
)
from guidepost.guidance.matching import match_step
from guidepost.guidance.observation_interface import ObservationSource
from guidepost.guidance.scheduler import RepeatingTask
from guidepost.models.guidance import (
    GuidanceEvent,
    GuidanceKind,
    GuidanceNotice,
    GuidancePriority,
    GuidanceStatus,
    NoticeKind,
    OrchestratorState,
)
from guidepost.models.observation import DEFAULT_FRESHNESS_SECONDS, Observation
from guidepost.models.project import Step
from guidepost.progress.tracker import ProgressTracker

LOG = logging.getLogger(__name__)


NoticeListener = Callable[[GuidanceNotice], None]

DEFAULT_HISTORY_LIMIT = 10


@dataclass
class OrchestratorConfig:
    """
    Configuration for the GuidanceOrchestrator.

    - interval_seconds:
        Time between cycle starts while running.
    - freshness_seconds:
        Maximum age of a cached observation before it is re-captured.
    - guidance_history_size / observation_history_size:
        Capacities of the bounded histories.
    - default_priority:
        Priority tag given to emitted events.
    - stop_timeout_seconds:
        How long `stop(wait=True)` waits for an in-flight cycle.
    """

    interval_seconds: float = 2.0
    freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS
    guidance_history_size: int = GUIDANCE_HISTORY_CAPACITY
    observation_history_size: int = OBSERVATION_HISTORY_CAPACITY
    default_priority: GuidancePriority = GuidancePriority.NORMAL
    stop_timeout_seconds: float = 5.0


class GuidanceOrchestrator:
    """
    Single-flight polling loop producing guidance for the current step.

    Typical usage:

        orchestrator = GuidanceOrchestrator(
            tracker=tracker,
            observation_source=my_source,
            generator=TemplateGuidanceGenerator(),
        )
        unsubscribe = orchestrator.subscribe(print)
        orchestrator.start()
        ...
        orchestrator.stop(wait=True)

    Hosts that own their own scheduling can call `run_cycle()` directly
    instead of `start()`; the single-flight guarantee holds either way.
    """

    def __init__(
        self,
        tracker: ProgressTracker,
        observation_source: ObservationSource,
        generator: GuidanceGenerator,
        config: Optional[OrchestratorConfig] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._tracker = tracker
        self._source = observation_source
        self._generator = generator
        self._config = config or OrchestratorConfig()
        self._clock = clock

        self._guidance_history: BoundedHistory[GuidanceEvent] = BoundedHistory(
            self._config.guidance_history_size
        )
        self._observation_history: BoundedHistory[Observation] = BoundedHistory(
            self._config.observation_history_size
        )

        self._state = OrchestratorState.STOPPED
        self._state_lock = threading.Lock()
        self._cycle_lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._task: Optional[RepeatingTask] = None

        self._cached_observation: Optional[Observation] = None
        self._last_emitted: Optional[GuidanceEvent] = None
        self._last_error: Optional[str] = None

        self._cycles_run = 0
        self._cycles_skipped = 0

        self._listeners: List[NoticeListener] = []
        self._listeners_lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    def start(self) -> bool:
        """Start the loop. Returns False (and does nothing) if already running."""
        with self._state_lock:
            if self._state == OrchestratorState.RUNNING:
                LOG.info("Guidance loop already running")
                return False
            # Each run gets its own stop event; cycles left over from a previous
            # run keep checking the old, already-set one.
            self._stop_requested = threading.Event()
            self._task = RepeatingTask(
                functools.partial(self._run_cycle, self._stop_requested),
                self._config.interval_seconds,
                name="guidance-loop",
            )
            self._state = OrchestratorState.RUNNING
            self._task.start()

        LOG.info(
            "Started guidance loop (interval=%.2fs)", self._config.interval_seconds
        )
        self._publish(GuidanceNotice(kind=NoticeKind.STARTED, timestamp=self._clock()))
        return True

    def stop(self, wait: bool = False) -> bool:
        """
        Stop the loop. Returns False if it was not running.

        An in-flight cycle finishes its current external call but emits
        nothing afterwards. With `wait=True`, block until the worker exits.
        """
        with self._state_lock:
            if self._state == OrchestratorState.STOPPED:
                LOG.debug("Guidance loop already stopped")
                return False
            self._stop_requested.set()
            self._state = OrchestratorState.STOPPED
            task, self._task = self._task, None

        if task is not None:
            task.stop(wait=wait, timeout=self._config.stop_timeout_seconds)
        LOG.info("Stopped guidance loop")
        self._publish(GuidanceNotice(kind=NoticeKind.STOPPED, timestamp=self._clock()))
        return True

    # ------------------------------------------------------------------ #
    # Subscription channel
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        """
        Register `listener` for GuidanceNotices.

        Listeners are called on the loop thread and should return quickly.
        Returns a callable that removes the listener.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, notice: GuidanceNotice) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(notice)
            except Exception:  # noqa: BLE001
                LOG.exception("Guidance listener failed on %s notice", notice.kind.value)

    # ------------------------------------------------------------------ #
    # Cycle
    # ------------------------------------------------------------------ #

    def run_cycle(self) -> Optional[GuidanceEvent]:
        """
        Run one monitoring cycle.

        Returns the emitted GuidanceEvent, or None when the cycle produced
        no new guidance (skipped, no step, failure, duplicate text).
        """
        return self._run_cycle(self._stop_requested)

    def _run_cycle(self, stop_requested: threading.Event) -> Optional[GuidanceEvent]:
        if stop_requested.is_set():
            return None
        if not self._cycle_lock.acquire(blocking=False):
            self._cycles_skipped += 1
            LOG.debug("Previous guidance cycle still running; skipping tick")
            return None
        try:
            return self._run_cycle_locked(stop_requested)
        finally:
            self._cycle_lock.release()

    def _run_cycle_locked(
        self, stop_requested: threading.Event
    ) -> Optional[GuidanceEvent]:
        self._cycles_run += 1

        try:
            observation = self._fresh_observation()
        except Exception as exc:  # noqa: BLE001
            self._report_error("observe", exc)
            return None

        step = self._tracker.current_step()
        if step is None:
            return None

        match = match_step(step, observation)
        LOG.debug(
            "Step %d match: matched=%s confidence=%.2f",
            step.step_number,
            match.matched,
            match.confidence,
        )

        event: Optional[GuidanceEvent] = None
        try:
            text = self._generator.generate(step, observation, match)
        except Exception as exc:  # noqa: BLE001
            self._report_error("generate", exc)
        else:
            text = (text or "").strip()
            if text and not stop_requested.is_set():
                event = self._emit(text, step)

        self._observation_history.append(observation)
        return event

    def _fresh_observation(self) -> Observation:
        cached = self._cached_observation
        if cached is not None and not cached.is_stale(
            self._config.freshness_seconds, now=self._clock()
        ):
            return cached

        LOG.debug("Capturing fresh observation")
        observation = self._source.capture()
        if observation is None:
            raise ValueError("observation source returned no observation")
        self._cached_observation = observation
        return observation

    def _emit(self, text: str, step: Step) -> Optional[GuidanceEvent]:
        last = self._last_emitted
        if last is not None and last.text == text:
            LOG.debug("Suppressing repeated guidance for step %d", step.step_number)
            return None

        event = GuidanceEvent(
            text=text,
            timestamp=self._clock(),
            kind=GuidanceKind.GUIDANCE,
            priority=self._config.default_priority,
            step_number=step.step_number,
        )
        self._guidance_history.append(event)
        self._last_emitted = event
        LOG.info("Showing guidance: %s", text[:100])
        self._publish(
            GuidanceNotice(kind=NoticeKind.GUIDANCE, timestamp=event.timestamp, event=event)
        )
        return event

    def _report_error(self, stage: str, exc: BaseException) -> None:
        message = f"{type(exc).__name__}: {exc}"
        self._last_error = f"{stage}: {message}"
        LOG.warning("Guidance cycle failed during %s: %s", stage, message, exc_info=exc)
        self._publish(
            GuidanceNotice(
                kind=NoticeKind.ERROR,
                timestamp=self._clock(),
                stage=stage,
                error=message,
            )
        )

    # ------------------------------------------------------------------ #
    # Read side
    # ------------------------------------------------------------------ #

    @property
    def last_guidance(self) -> Optional[GuidanceEvent]:
        return self._last_emitted

    def status(self) -> GuidanceStatus:
        last = self._last_emitted
        return GuidanceStatus(
            state=self._state,
            current_guidance=last.text if last else None,
            guidance_count=len(self._guidance_history),
            observation_count=len(self._observation_history),
            cycles_run=self._cycles_run,
            cycles_skipped=self._cycles_skipped,
            last_error=self._last_error,
            interval_seconds=self._config.interval_seconds,
        )

    def guidance_history(self, limit: Optional[int] = DEFAULT_HISTORY_LIMIT) -> List[GuidanceEvent]:
        """Most recent `limit` events, oldest first (None for all)."""
        return self._guidance_history.snapshot(limit)

    def observation_history(
        self, limit: Optional[int] = DEFAULT_HISTORY_LIMIT
    ) -> List[Observation]:
        """Most recent `limit` observations, oldest first (None for all)."""
        return self._observation_history.snapshot(limit)

    def clear_guidance_history(self) -> None:
        """
        Drop past guidance events.

        The last emitted text is still remembered, so the message currently
        on screen is not shown again.
        """
        self._guidance_history.clear()
        LOG.info("Guidance history cleared")


__all__ = [
    "OrchestratorConfig",
    "GuidanceOrchestrator",
]
