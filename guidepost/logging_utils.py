"""Process-wide logging setup for Guidepost entry points."""

from __future__ import annotations

import logging
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Library modules only ever call `logging.getLogger(__name__)`; this is
    meant for CLIs and hosts that have no logging setup of their own.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(level=level, format=fmt or DEFAULT_FORMAT)


__all__ = ["DEFAULT_FORMAT", "configure_logging"]
