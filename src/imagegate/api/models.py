"""Pydantic request and response models for the gateway API.

Field names on the wire are camelCase (``aspectRatio``, ``imageBase64``) to
match the existing frontend; Python attributes are snake_case.  Both forms
are accepted on input.

Every request field is optional at the schema level; presence and length are
checked by :mod:`imagegate.core.validation`.  Pydantic still rejects wrong JSON types
(e.g. a number where a string is expected); the API maps that to 400 as well.

Models
------
GenerateImageRequest, EditImageRequest, EnhancePromptRequest,
ImageToPromptRequest, RemixImagesRequest, ChatRequest
    Request bodies, one per handler.
ImageResponse, EnhancePromptResponse, ImageToPromptResponse, ChatResponse,
ErrorResponse
    Response bodies.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateImageRequest(_CamelModel):
    """Request body for ``POST /api/generate-image``.

    Attributes:
        prompt: Text description of the image.
        style: Style tag (``"cinematic"``, ``"anime"``...); ``"none"`` or
            unknown values add no suffix.
        aspect_ratio: Aspect ratio tag (``"16:9"``...); unknown means 1:1.
        quality: ``draft`` / ``medium`` / ``high`` / ``ultra``.
        seed: Optional random seed.
        negative_prompt: Optional text describing what to avoid.
    """

    prompt: str | None = Field(default=None, description="Text description of the image.")
    style: str | None = Field(default=None, description="Style tag, or 'none'.")
    aspect_ratio: str | None = Field(default=None, description="Aspect ratio tag, e.g. '16:9'.")
    quality: str | None = Field(default=None, description="Quality tier.")
    seed: int | None = Field(default=None, description="Optional random seed.")
    negative_prompt: str | None = Field(default=None, description="What to avoid.")


class EditImageRequest(_CamelModel):
    """Request body for ``POST /api/edit-image``."""

    prompt: str | None = Field(default=None, description="Editing instruction.")
    image_base64: str | None = Field(
        default=None,
        description="Base64-encoded source image without a data: prefix.",
    )


class EnhancePromptRequest(_CamelModel):
    """Request body for ``POST /api/enhance-prompt``.

    ``type`` selects the instruction template: ``generate`` (default),
    ``edit`` or ``prompt-to-prompt``.
    """

    prompt: str | None = Field(default=None, description="Prompt to enhance.")
    type: str = Field(default="generate", description="Purpose tag.")


class ImageToPromptRequest(_CamelModel):
    """Request body for ``POST /api/image-to-prompt``.

    At least one of ``image_base64`` or ``text_input`` is required.
    """

    image_base64: str | None = Field(default=None, description="Image to describe.")
    text_input: str | None = Field(default=None, description="Rough text idea.")
    style: str | None = Field(default=None, description="Optional style hint.")
    mood: str | None = Field(default=None, description="Optional mood hint.")
    negative_prompt: str | None = Field(default=None, description="What to avoid.")


class RemixImagesRequest(_CamelModel):
    """Request body for ``POST /api/remix-images``."""

    images: list[Any] | None = Field(
        default=None,
        description="1 to 4 image references (URLs or data URIs).",
    )
    prompt: str | None = Field(default=None, description="Optional remix instruction.")


class ChatRequest(_CamelModel):
    """Request body for ``POST /api/chat``."""

    messages: list[Any] | None = Field(
        default=None,
        description="Conversation as a list of {role, content} objects.",
    )
    model: str | None = Field(default=None, description="Optional model override.")


class ImageResponse(_CamelModel):
    """Response body carrying one image reference (URL or data URI)."""

    image_url: str


class EnhancePromptResponse(_CamelModel):
    enhanced_prompt: str


class ImageToPromptResponse(_CamelModel):
    """Mapping of target model name to prompt text or ``{prompt, negative_prompt}``."""

    prompts: dict[str, Any]


class ChatResponse(_CamelModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
