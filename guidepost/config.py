"""
Configuration loading.

Guidepost reads a YAML file with a single `guidepost` root key:

    guidepost:
      guidance:
        interval_seconds: 2.0
        freshness_seconds: 5.0
        guidance_history_size: 50
        observation_history_size: 20
      generator:
        type: template          # or "http"
        url: http://localhost:8090/guidance
        api_key: null
        timeout: 10
        options: {max_tokens: 200}
      documents:
        directory: ./projects
        enrich_expected_elements: false
      logging:
        level: INFO

Every key is optional; missing keys keep the defaults below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from guidepost.errors import ConfigError
from guidepost.guidance.history import (
    GUIDANCE_HISTORY_CAPACITY,
    OBSERVATION_HISTORY_CAPACITY,
)
from guidepost.guidance.orchestrator import OrchestratorConfig
from guidepost.models.observation import DEFAULT_FRESHNESS_SECONDS

LOG = logging.getLogger(__name__)


ROOT_KEY = "guidepost"
GENERATOR_TYPES = ("template", "http")


@dataclass
class GuidanceConfig:
    interval_seconds: float = 2.0
    freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS
    guidance_history_size: int = GUIDANCE_HISTORY_CAPACITY
    observation_history_size: int = OBSERVATION_HISTORY_CAPACITY


@dataclass
class GeneratorConfig:
    """
    Which guidance generator to build.

    `url`, `api_key`, `api_key_header`, `timeout` and `options` only apply
    to the "http" type.
    """

    type: str = "template"
    url: Optional[str] = None
    api_key: Optional[str] = None
    api_key_header: str = "X-API-Key"
    timeout: float = 10.0
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DocumentsConfig:
    directory: Optional[Path] = None
    enrich_expected_elements: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: Optional[str] = None


@dataclass
class GuidepostConfig:
    guidance: GuidanceConfig = field(default_factory=GuidanceConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    documents: DocumentsConfig = field(default_factory=DocumentsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def orchestrator_config(self) -> OrchestratorConfig:
        return OrchestratorConfig(
            interval_seconds=self.guidance.interval_seconds,
            freshness_seconds=self.guidance.freshness_seconds,
            guidance_history_size=self.guidance.guidance_history_size,
            observation_history_size=self.guidance.observation_history_size,
        )


# --------------------------------------------------------------------------- #
# Parsing helpers
# --------------------------------------------------------------------------- #


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{ROOT_KEY}.{key}' must be a mapping")
    return value


def _positive_number(section: str, key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{section}.{key}' must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"'{section}.{key}' must be positive, got {value!r}")
    return number


def _positive_int(section: str, key: str, value: Any) -> int:
    number = _positive_number(section, key, value)
    if number != int(number):
        raise ConfigError(f"'{section}.{key}' must be an integer, got {value!r}")
    return int(number)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> GuidepostConfig:
    """Build a GuidepostConfig from the mapping under the root key."""
    data = data or {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"'{ROOT_KEY}' must be a mapping")

    defaults = GuidepostConfig()

    g = _section(data, "guidance")
    guidance = GuidanceConfig(
        interval_seconds=_positive_number(
            "guidance", "interval_seconds",
            g.get("interval_seconds", defaults.guidance.interval_seconds),
        ),
        freshness_seconds=_positive_number(
            "guidance", "freshness_seconds",
            g.get("freshness_seconds", defaults.guidance.freshness_seconds),
        ),
        guidance_history_size=_positive_int(
            "guidance", "guidance_history_size",
            g.get("guidance_history_size", defaults.guidance.guidance_history_size),
        ),
        observation_history_size=_positive_int(
            "guidance", "observation_history_size",
            g.get("observation_history_size", defaults.guidance.observation_history_size),
        ),
    )

    gen = _section(data, "generator")
    gen_type = str(gen.get("type") or defaults.generator.type).lower()
    if gen_type not in GENERATOR_TYPES:
        raise ConfigError(
            f"'generator.type' must be one of {', '.join(GENERATOR_TYPES)}, got {gen_type!r}"
        )
    if gen_type == "http" and not gen.get("url"):
        raise ConfigError("'generator.url' is required when generator.type is 'http'")
    options = gen.get("options") or {}
    if not isinstance(options, Mapping):
        raise ConfigError("'generator.options' must be a mapping")
    generator = GeneratorConfig(
        type=gen_type,
        url=gen.get("url"),
        api_key=gen.get("api_key"),
        api_key_header=str(gen.get("api_key_header") or defaults.generator.api_key_header),
        timeout=_positive_number(
            "generator", "timeout", gen.get("timeout", defaults.generator.timeout)
        ),
        options=dict(options),
    )

    docs = _section(data, "documents")
    directory = docs.get("directory")
    documents = DocumentsConfig(
        directory=Path(directory) if directory else None,
        enrich_expected_elements=bool(docs.get("enrich_expected_elements", False)),
    )

    log = _section(data, "logging")
    level = str(log.get("level") or defaults.logging.level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"'logging.level' is not a logging level: {level!r}")
    logging_cfg = LoggingConfig(level=level, format=log.get("format"))

    return GuidepostConfig(
        guidance=guidance,
        generator=generator,
        documents=documents,
        logging=logging_cfg,
    )


def load_config(path: Union[str, Path]) -> GuidepostConfig:
    """Load and validate a YAML config file."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, Mapping) or ROOT_KEY not in data:
        raise ConfigError(f"Config root must contain a '{ROOT_KEY}' key")

    LOG.debug("Loaded config from %s", path)
    return config_from_dict(data[ROOT_KEY])


__all__ = [
    "GuidanceConfig",
    "GeneratorConfig",
    "DocumentsConfig",
    "LoggingConfig",
    "GuidepostConfig",
    "config_from_dict",
    "load_config",
]
