"""
Command-line entry point for Guidepost.

    guidepost parse lesson.md [--enrich]
        Print the parsed steps as JSON.

    guidepost [-c guidepost.yml] run lesson.md [--observation screen.yml]
                  [--duration 30] [--interval 1]
        Load the lesson, run the guidance loop against a fixed observation
        (or the null source), and print guidance as it is emitted.

This is a reference / demo tool: real hosts embed LearningSession and plug
in a live observation source.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from guidepost.config import GuidepostConfig, load_config
from guidepost.errors import ConfigError, GuidepostError
from guidepost.guidance.inference import observation_from_detections
from guidepost.guidance.observation_interface import (
    NullObservationSource,
    ObservationSource,
    StaticObservationSource,
)
from guidepost.logging_utils import configure_logging
from guidepost.models.guidance import GuidanceNotice, NoticeKind
from guidepost.models.observation import UNKNOWN_ACTIVITY, Observation
from guidepost.parsing.enrichment import enrich_steps
from guidepost.parsing.step_parser import parse_steps
from guidepost.session import LearningSession


# --------------------------------------------------------------------------- #
# Loading helpers
# --------------------------------------------------------------------------- #


def read_document(path: Path) -> str:
    if not path.is_file():
        raise SystemExit(f"Document not found: {path}")
    return path.read_text(encoding="utf-8")


def load_observation(path: Path) -> Observation:
    """
    Read an observation from YAML.

    The file may hold the observation at the root or under an
    `observation` key. When it carries detections but no labels, the
    labels are inferred.
    """
    if not path.is_file():
        raise SystemExit(f"Observation file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise SystemExit(f"Observation file must contain a mapping: {path}")
    data = data.get("observation", data)

    observation = Observation.from_dict(data)
    if observation.user_activity == UNKNOWN_ACTIVITY and (
        observation.elements or observation.text_fragments
    ):
        observation = observation_from_detections(
            observation.elements,
            observation.text_fragments,
            **observation.metadata,
        )
    return observation


def print_notice(notice: GuidanceNotice) -> None:
    stamp = time.strftime("%H:%M:%S", time.localtime(notice.timestamp))
    if notice.kind == NoticeKind.GUIDANCE and notice.event is not None:
        print(f"[{stamp}] step {notice.event.step_number}: {notice.event.text}")
    elif notice.kind == NoticeKind.ERROR:
        print(f"[{stamp}] error during {notice.stage}: {notice.error}", file=sys.stderr)
    else:
        print(f"[{stamp}] guidance {notice.kind.value}")


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


def cmd_parse(args: argparse.Namespace) -> int:
    steps = parse_steps(read_document(args.document))
    if args.enrich:
        steps = enrich_steps(steps)
    print(json.dumps([s.to_dict() for s in steps], indent=2))
    return 0


def cmd_run(args: argparse.Namespace, config: GuidepostConfig) -> int:
    if args.interval is not None:
        config.guidance.interval_seconds = args.interval

    source: ObservationSource
    if args.observation is not None:
        source = StaticObservationSource(load_observation(args.observation))
    else:
        source = NullObservationSource()

    session = LearningSession.from_config(config, observation_source=source)
    project = session.load_project(args.document.stem, read_document(args.document))

    print(f"=== {project.title} ===")
    print(f"Steps : {project.step_count}")
    step = session.get_current_step()
    if step is not None:
        print(f"Start : step {step.step_number} - {step.title}")
    print()

    session.subscribe(print_notice)
    session.start_guidance()
    deadline = time.monotonic() + args.duration if args.duration else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.2)
    except KeyboardInterrupt:
        print("\n[info] Interrupted by user.", file=sys.stderr)
    finally:
        session.stop_guidance(wait=True)

    status = session.get_guidance_status()
    summary = session.get_summary()
    print()
    print(json.dumps(
        {
            "status": status.to_dict(),
            "summary": summary.to_dict() if summary else None,
        },
        indent=2,
        sort_keys=True,
    ))
    return 0


# --------------------------------------------------------------------------- #
# Entry point
# --------------------------------------------------------------------------- #


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guidepost",
        description="Step-by-step guidance for instructional documents.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a guidepost YAML config (default: built-in defaults)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse a document and print its steps.")
    p_parse.add_argument("document", type=Path)
    p_parse.add_argument(
        "--enrich",
        action="store_true",
        help="Fill expected elements from quoted labels.",
    )

    p_run = sub.add_parser("run", help="Run the guidance loop against a document.")
    p_run.add_argument("document", type=Path)
    p_run.add_argument(
        "--observation",
        type=Path,
        default=None,
        help="YAML file with a fixed observation (default: no screen data).",
    )
    p_run.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Seconds to run before stopping (default: until Ctrl-C).",
    )
    p_run.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Override guidance.interval_seconds.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "interval", None) is not None and args.interval <= 0:
        parser.error("--interval must be positive")

    try:
        config = load_config(args.config) if args.config else GuidepostConfig()
    except ConfigError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 2

    configure_logging(config.logging.level, config.logging.format)

    try:
        if args.command == "parse":
            return cmd_parse(args)
        return cmd_run(args, config)
    except GuidepostError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
