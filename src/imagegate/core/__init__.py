"""Core request shaping and fallback components.

Architecture Overview
---------------------
The core follows the request path from leaves to root:

1. **Configuration** (config.py): Pydantic Settings, IMAGEGATE_ prefix.
2. **Validation** (validation.py): field checks, no network access.
3. **Parameter mapping** (parameters.py, prompt_builder.py): UI tags and
   purposes to vendor parameters and instruction text.
4. **Provider client** (providers.py): one POST, one credential.
5. **Fallback** (fallback.py): ordered credential attempts.
6. **Unwrapping** (unwrap.py): named response shapes to a single artifact.
7. **Pipeline** (pipeline.py): :class:`ImageGateway`, one coroutine per
   handler.

Usage Example
-------------
    import httpx
    from imagegate.core import GatewayConfig, ImageGateway

    async with httpx.AsyncClient(timeout=None) as http:
        gateway = ImageGateway(GatewayConfig(), http)
        result = await gateway.enhance_prompt("a cat in space", "generate")
        print(result.artifact)
"""

from imagegate.core.config import GatewayConfig, config
from imagegate.core.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    GatewayError,
    MalformedResponseError,
    UpstreamFailure,
    ValidationError,
)
from imagegate.core.fallback import FallbackCoordinator
from imagegate.core.pipeline import ImageGateway, NormalizedResult
from imagegate.core.providers import ProviderClient, ProviderCredential

__all__ = [
    "AllProvidersFailedError",
    "ConfigurationError",
    "FallbackCoordinator",
    "GatewayConfig",
    "GatewayError",
    "ImageGateway",
    "MalformedResponseError",
    "NormalizedResult",
    "ProviderClient",
    "ProviderCredential",
    "UpstreamFailure",
    "ValidationError",
    "config",
]
