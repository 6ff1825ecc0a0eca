"""Logging setup shared by the server and the watcher client."""

from __future__ import annotations

import logging

from social_timer.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger from settings unless already configured."""
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("social_timer").setLevel(resolved)
