"""Ordered credential fallback.

The coordinator tries one credential at a time, primary first, and returns as
soon as one attempt succeeds.  Attempts are sequential with no backoff.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .errors import AllProvidersFailedError, ConfigurationError, UpstreamFailure
from .providers import ProviderClient, ProviderCredential

logger = logging.getLogger(__name__)


class FallbackCoordinator:
    """Run a payload against an ordered list of credentials.

    Args:
        credentials: Credentials in attempt order.  May be empty, in which
            case :meth:`run` raises :class:`ConfigurationError` without
            touching the network.
        client: The provider client used for every attempt.
    """

    def __init__(self, credentials: Sequence[ProviderCredential], client: ProviderClient) -> None:
        self.credentials = list(credentials)
        self.client = client

    async def run(self, payload: dict[str, Any]) -> tuple[dict[str, Any], ProviderCredential]:
        """Send ``payload`` with each credential until one succeeds.

        Returns:
            Tuple of (success envelope, credential that produced it).

        Raises:
            ConfigurationError: No credentials are configured.
            AllProvidersFailedError: Every credential failed; carries the
                last failure.
        """
        if not self.credentials:
            raise ConfigurationError(f"No API credentials configured for {self.client.name}")

        failures: list[UpstreamFailure] = []
        total = len(self.credentials)
        for attempt, credential in enumerate(self.credentials, start=1):
            try:
                envelope = await self.client.send(payload, credential)
            except UpstreamFailure as e:
                failures.append(e)
                logger.warning(
                    f"{self.client.name}: attempt {attempt}/{total} "
                    f"({credential.rank} key) failed: {e}"
                )
                if e.body:
                    logger.debug(f"{self.client.name}: upstream body: {e.body[:500]}")
                continue

            logger.info(
                f"{self.client.name}: attempt {attempt}/{total} ({credential.rank} key) succeeded"
            )
            return envelope, credential

        raise AllProvidersFailedError(total, failures[-1])
