"""Dependency container for application services."""

from __future__ import annotations

from typing import Any

import structlog

from books_api.config.settings import Settings


class ServiceContainer:
    """Hold the settings and the process-wide logger handle."""

    def __init__(self, settings: Settings, logger: Any | None = None) -> None:
        self.settings = settings
        self.logger = logger if logger is not None else structlog.get_logger(settings.app_name)
