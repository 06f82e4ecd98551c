"""Provider client: one outbound attempt with one credential.

A :class:`ProviderClient` knows a single upstream URL and the response shape
that URL produces.  It never retries; ordering and fallback across
credentials belong to :class:`imagegate.core.fallback.FallbackCoordinator`.

Failure signalling
------------------
- non-2xx status -> :class:`UpstreamFailure` with ``upstream_status`` and the
  raw body (for the log only)
- transport error (DNS, connection reset, timeout) -> :class:`UpstreamFailure`
  with ``upstream_status=None``
- 2xx with a body that is not JSON -> :class:`MalformedResponseError`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from .errors import MalformedResponseError, UpstreamFailure
from .unwrap import ResponseShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderCredential:
    """An API key and its position in the fallback order."""

    key: str
    rank: Literal["primary", "backup"] = "primary"

    def __repr__(self) -> str:
        # Keys must never end up in logs or tracebacks.
        return f"ProviderCredential(rank={self.rank!r})"


class ProviderClient:
    """Issue single POST requests to one upstream endpoint.

    Args:
        url: Endpoint URL.
        http_client: Shared ``httpx.AsyncClient``; the caller owns its lifecycle.
        shape: Response shape produced by this endpoint, used by the unwrapper.
        name: Label used in log lines.
        timeout: Per-attempt timeout in seconds; ``None`` disables it.
    """

    def __init__(
        self,
        url: str,
        http_client: httpx.AsyncClient,
        shape: ResponseShape,
        name: str = "provider",
        timeout: float | None = None,
    ) -> None:
        self.url = url
        self.http_client = http_client
        self.shape = shape
        self.name = name
        self.timeout = timeout

    async def send(self, payload: dict[str, Any], credential: ProviderCredential) -> dict[str, Any]:
        """Send ``payload`` once using ``credential``.

        Returns:
            The decoded JSON body of a 2xx response.

        Raises:
            UpstreamFailure: Non-2xx status or transport error.
            MalformedResponseError: 2xx response that is not a JSON object.
        """
        headers = {
            "Authorization": f"Bearer {credential.key}",
            "Content-Type": "application/json",
        }
        try:
            response = await self.http_client.post(
                self.url, headers=headers, json=payload, timeout=self.timeout
            )
        except httpx.HTTPError as e:
            raise UpstreamFailure(
                f"{self.name} transport error: {type(e).__name__}: {e}"
            ) from e

        if not response.is_success:
            raise UpstreamFailure(
                f"{self.name} returned HTTP {response.status_code}",
                upstream_status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.name} returned a non-JSON body",
                upstream_status=response.status_code,
                body=response.text[:500],
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"{self.name} returned JSON {type(data).__name__}, expected an object",
                upstream_status=response.status_code,
            )
        return data
