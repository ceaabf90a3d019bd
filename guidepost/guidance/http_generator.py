"""
HTTP-backed guidance generator.

Posts the structured step / observation / match payload to a text service
and returns the advisory text from its JSON reply:

    POST {url}
    {
      "step": {...},
      "observation": {...},
      "match": {...},
      "options": {...}
    }

    200 {"text": "Click the Run button to execute your code."}

How the service phrases guidance (prompting, model choice) is its own
business; this client only moves data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from guidepost.errors import GenerationError
from guidepost.guidance.generator_interface import GuidanceGenerator
from guidepost.models.guidance import MatchResult
from guidepost.models.observation import Observation
from guidepost.models.project import Step

LOG = logging.getLogger(__name__)


JSONDict = Dict[str, Any]


@dataclass
class HttpGeneratorConfig:
    """
    Configuration for HttpGuidanceGenerator.

    Attributes:
        url:
            Full URL of the generation endpoint.
        api_key:
            Optional API key sent in `api_key_header`.
        api_key_header:
            Header name for the API key.
        timeout:
            Request timeout (seconds).
        options:
            Free-form generation options forwarded as-is (max tokens,
            temperature, ...).
    """

    url: str
    api_key: Optional[str] = None
    api_key_header: str = "X-API-Key"
    timeout: float = 10.0
    options: JSONDict = field(default_factory=dict)


class HttpGuidanceGenerator(GuidanceGenerator):
    """GuidanceGenerator that delegates to a remote HTTP service."""

    def __init__(
        self,
        config: HttpGeneratorConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._cfg = config
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self._cfg.api_key:
            headers[self._cfg.api_key_header] = self._cfg.api_key
        return headers

    def build_payload(
        self,
        step: Step,
        observation: Observation,
        match: MatchResult,
    ) -> JSONDict:
        return {
            "step": step.to_dict(),
            "observation": observation.to_dict(),
            "match": match.to_dict(),
            "options": dict(self._cfg.options),
        }

    def generate(
        self,
        step: Step,
        observation: Observation,
        match: MatchResult,
    ) -> str:
        try:
            resp = self._session.post(
                self._cfg.url,
                json=self.build_payload(step, observation, match),
                headers=self._headers(),
                timeout=self._cfg.timeout,
            )
        except requests.RequestException as exc:
            raise GenerationError(f"Guidance request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise GenerationError(
                f"Guidance service error: {resp.text[:200]}",
                status=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise GenerationError(f"Non-JSON response from {self._cfg.url}") from exc

        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise GenerationError("Guidance response has no 'text' field")

        LOG.debug("Received %d chars of guidance for step %d", len(text), step.step_number)
        return text


__all__ = [
    "HttpGeneratorConfig",
    "HttpGuidanceGenerator",
]
