"""Domain probe for job function invocations."""

from __future__ import annotations

from typing import Protocol

import structlog


class JobClientProbe(Protocol):
    """Domain probe for HTTP calls to job functions."""

    def job_invoked(self, function_name: str, status_code: int) -> None:
        """Record that a job function answered (any status)."""
        ...

    def job_unreachable(self, function_name: str, error: str) -> None:
        """Record that a job function could not be reached."""
        ...

    def job_body_not_json(self, function_name: str, status_code: int) -> None:
        """Record that a job answered with a body that is not JSON."""
        ...


class DefaultJobClientProbe:
    """Default implementation of JobClientProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def job_invoked(self, function_name: str, status_code: int) -> None:
        self._logger.info(
            "job_function_invoked",
            function_name=function_name,
            status_code=status_code,
        )

    def job_unreachable(self, function_name: str, error: str) -> None:
        self._logger.error(
            "job_function_unreachable",
            function_name=function_name,
            error=error,
        )

    def job_body_not_json(self, function_name: str, status_code: int) -> None:
        self._logger.warning(
            "job_function_body_not_json",
            function_name=function_name,
            status_code=status_code,
        )
