"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class StartupProbe(Protocol):
    """Domain probe for process start-up and shutdown.

    Captures the two-phase initialization: configuration validation, then
    construction of the long-lived client handles.
    """

    def configuration_invalid(self, setting: str, reason: str) -> None:
        """Record that a required setting is missing or invalid."""
        ...

    def services_configured(
        self, environment: str, database_host: str, functions_base_url: str
    ) -> None:
        """Record that all client handles were built."""
        ...

    def services_disposed(self) -> None:
        """Record that the client handles were released."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def configuration_invalid(self, setting: str, reason: str) -> None:
        """Record that a required setting is missing or invalid."""
        self._logger.error(
            "configuration_invalid",
            setting=setting,
            reason=reason,
        )

    def services_configured(
        self, environment: str, database_host: str, functions_base_url: str
    ) -> None:
        """Record that all client handles were built."""
        self._logger.info(
            "services_configured",
            environment=environment,
            database_host=database_host,
            functions_base_url=functions_base_url,
        )

    def services_disposed(self) -> None:
        """Record that the client handles were released."""
        self._logger.info("services_disposed")
