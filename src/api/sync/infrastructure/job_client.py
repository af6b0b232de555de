"""HTTP client for platform job functions.

Each call is a single POST carrying the scoped credential as a bearer
token. The job's status and body are relayed without interpretation:
non-2xx answers are returned, not raised.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from sync.domain.exceptions import JobDispatchError
from sync.infrastructure.observability import DefaultJobClientProbe, JobClientProbe
from sync.ports.jobs import IJobClient, JobResponse


class HttpJobClient(IJobClient):
    """Invokes job functions at ``{base_url}/{function_name}`` with httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        probe: JobClientProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Job function base URL, e.g. ``https://x.example/functions/v1``
            timeout: Per-call timeout in seconds
            probe: Optional domain probe for observability
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        """
        self._base_url = base_url.rstrip("/")
        self._probe = probe or DefaultJobClientProbe()
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def invoke(
        self,
        function_name: str,
        token: str,
        payload: dict[str, Any],
    ) -> JobResponse:
        url = f"{self._base_url}/{function_name}"
        try:
            response = await self._client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TransportError as e:
            self._probe.job_unreachable(function_name=function_name, error=repr(e))
            raise JobDispatchError(
                f"Could not reach job function '{function_name}'",
                details=repr(e),
            ) from e

        self._probe.job_invoked(
            function_name=function_name, status_code=response.status_code
        )
        return JobResponse(
            status_code=response.status_code,
            body=self._decode_body(function_name, response),
        )

    def _decode_body(self, function_name: str, response: httpx.Response) -> Any:
        """Decode the body: None when empty, JSON when parseable, else ``{"raw": text}``."""
        text = response.text
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            self._probe.job_body_not_json(
                function_name=function_name, status_code=response.status_code
            )
            return {"raw": text}

    async def aclose(self) -> None:
        await self._client.aclose()
