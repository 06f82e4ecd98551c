"""Configuration management for the imagegate request gateway.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the IMAGEGATE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (IMAGEGATE_* prefix)
2. .env file in the project root
3. Default values defined in GatewayConfig

Example .env file:
    IMAGEGATE_API_KEY=sk-primary
    IMAGEGATE_BACKUP_API_KEY=sk-backup
    IMAGEGATE_CHAT_URL=https://ai.gateway.example/v1/chat/completions
    IMAGEGATE_IMAGES_URL=https://inference.example/v1/images/generations

Credentials
-----------
Provider credentials are never cached by the application.  Route handlers
build a fresh ``GatewayConfig`` per request (see
:func:`imagegate.api.main.get_config`), so rotating a key in the environment
takes effect on the next request.  :meth:`GatewayConfig.credentials` turns the
configured keys into the ordered list consumed by the fallback coordinator.

Global Configuration Instance
------------------------------
A global `config` instance is created at import time for server-level settings
(bind address, port, log level).

Usage Example
-------------
    from imagegate.core.config import config

    print(config.chat_url)
    print(config.server_port)
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers import ProviderCredential

# 10 MiB, the decoded size ceiling for uploaded images.
DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


class GatewayConfig(BaseSettings):
    """Main configuration for the imagegate service.

    Attributes
    ----------
    Upstream Endpoints:
        chat_url : str
            OpenAI-compatible chat completions endpoint of the AI gateway.
            Used for editing, remixing, prompt enhancement and chat.
        images_url : str
            Image generation endpoint returning ``data[0].url`` or
            ``data[0].b64_json``.  Used for text-to-image generation.

    Models:
        text_model : str
            Model used for prompt enhancement.
        vision_model : str
            Model used for image analysis and per-model prompt writing.
        image_model : str
            Multimodal model that returns images (editing, remixing).
        generation_model : str
            Model name sent to ``images_url``.
        chat_model : str
            Default model for the chat assistant.

    Credentials:
        api_key : SecretStr | None
            Primary provider credential.
        backup_api_key : SecretStr | None
            Backup credential, tried only after the primary fails.

    Limits:
        max_prompt_length : int
            Maximum prompt length in characters.
        max_image_bytes : int
            Maximum decoded image size in bytes.
        max_remix_images : int
            Maximum number of images in one remix.
        request_timeout : float | None
            Per-attempt HTTP timeout in seconds.  ``None`` disables the local
            timeout so the surrounding runtime decides.

    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level used by the CLI entry point.

    Examples
    --------
        >>> custom = GatewayConfig(api_key="sk-test", _env_file=None)
        >>> [c.rank for c in custom.credentials()]
        ['primary']
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGEGATE_",
        case_sensitive=False,
    )

    # Upstream endpoints
    chat_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="OpenAI-compatible chat completions endpoint",
    )
    images_url: str = Field(
        default="https://api.openai.com/v1/images/generations",
        description="Image generation endpoint (data[0].url / data[0].b64_json)",
    )

    # Models
    text_model: str = Field(
        default="google/gemini-2.5-pro",
        description="Model used to enhance prompts",
    )
    vision_model: str = Field(
        default="google/gemini-2.5-flash",
        description="Model used for image analysis and per-model prompts",
    )
    image_model: str = Field(
        default="google/gemini-2.5-flash-image-preview",
        description="Multimodal image model for edit and remix",
    )
    generation_model: str = Field(
        default="flux-schnell",
        description="Model name sent to the image generation endpoint",
    )
    chat_model: str = Field(
        default="google/gemini-2.5-flash",
        description="Default chat assistant model",
    )

    # Credentials
    api_key: SecretStr | None = Field(
        default=None,
        description="Primary provider API key",
    )
    backup_api_key: SecretStr | None = Field(
        default=None,
        description="Backup provider API key (used after a primary failure)",
    )

    # Limits
    max_prompt_length: int = Field(default=5000, ge=1)
    max_image_bytes: int = Field(default=DEFAULT_MAX_IMAGE_BYTES, ge=1)
    max_remix_images: int = Field(default=4, ge=1)
    request_timeout: float | None = Field(
        default=None,
        description="Per-attempt HTTP timeout in seconds (None = no local timeout)",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    def credentials(self) -> list[ProviderCredential]:
        """Return configured credentials in attempt order (primary first).

        Blank keys are skipped, so a deployment with only a backup key still
        gets a single-element list.

        Returns:
            Ordered list of credentials; empty when nothing is configured.
        """
        ordered: list[ProviderCredential] = []
        for rank, secret in (("primary", self.api_key), ("backup", self.backup_api_key)):
            if secret is None:
                continue
            key = secret.get_secret_value().strip()
            if key:
                ordered.append(ProviderCredential(key=key, rank=rank))
        return ordered


# Global configuration instance for server-level settings.
config = GatewayConfig()
