"""Job function port.

Job functions are deployed independently on the platform; the bridge
invokes them and relays whatever they answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class JobResponse:
    """Raw answer of a job function.

    Attributes:
        status_code: HTTP status returned by the job
        body: Parsed JSON, ``{"raw": text}`` for non-JSON text, or None when empty
    """

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        """Whether the job answered with a 2xx status."""
        return 200 <= self.status_code < 300


@runtime_checkable
class IJobClient(Protocol):
    """Invokes named job functions with a bearer credential."""

    async def invoke(
        self,
        function_name: str,
        token: str,
        payload: dict[str, Any],
    ) -> JobResponse:
        """POST a JSON payload to a job function.

        Args:
            function_name: Name of the job function
            token: Scoped credential sent as ``Authorization: Bearer``
            payload: JSON body

        Returns:
            The job's status and body, relayed without interpretation

        Raises:
            JobDispatchError: If the job function cannot be reached
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP connections."""
        ...
