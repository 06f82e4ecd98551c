"""imagegate - request shaping and credential fallback for generative-AI APIs."""

__version__ = "0.1.0"

from imagegate.core.config import GatewayConfig, config
from imagegate.core.pipeline import ImageGateway

__all__ = [
    "GatewayConfig",
    "ImageGateway",
    "config",
]
