"""Validation utilities for gateway request fields.

Every validator either returns its input unchanged or raises
:class:`~imagegate.core.errors.ValidationError` with a message that is safe
to show to the user.  Validators never touch the network, so a rejected
request costs no upstream call.
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

from .errors import ValidationError
from .prompt_builder import PURPOSES

logger = logging.getLogger(__name__)

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")

CHAT_ROLES = ("system", "user", "assistant")


def validate_prompt(prompt: Any, max_length: int = 5000, field: str = "Prompt") -> str:
    """Validate prompt text.

    Args:
        prompt: Raw prompt value from the request body.
        max_length: Maximum allowed length in characters.
        field: Name used in error messages.

    Returns:
        The prompt, unchanged.

    Raises:
        ValidationError: If the prompt is missing, blank, not a string, or
            longer than ``max_length``.
    """
    if prompt is None or (isinstance(prompt, str) and not prompt.strip()):
        raise ValidationError(f"{field} is required")

    if not isinstance(prompt, str):
        raise ValidationError(f"Invalid {field.lower()} format")

    if len(prompt) > max_length:
        raise ValidationError(
            f"{field} exceeds maximum length of {max_length} characters"
        )

    return prompt


def estimated_decoded_size(image_b64: str) -> int:
    """Estimate the decoded byte size of a base64 string.

    ``len * 3 / 4`` minus one byte per trailing ``=`` pad character.
    """
    padding = min(len(image_b64) - len(image_b64.rstrip("=")), 2)
    return max((len(image_b64) * 3) // 4 - padding, 0)


def validate_image_payload(image_b64: Any, max_bytes: int = 10 * 1024 * 1024) -> str:
    """Validate a base64-encoded image payload.

    Size is checked before the base64 alphabet.

    Args:
        image_b64: Raw base64 text (no ``data:`` prefix).
        max_bytes: Maximum decoded size in bytes.

    Returns:
        The payload, unchanged.

    Raises:
        ValidationError: If the payload is missing, not a string, too large,
            or contains characters outside the base64 alphabet.
    """
    if image_b64 is None or image_b64 == "":
        raise ValidationError("Image is required")

    if not isinstance(image_b64, str):
        raise ValidationError("Invalid image format")

    size = estimated_decoded_size(image_b64)
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        logger.warning(f"Rejected image payload of ~{size} bytes (limit {max_bytes})")
        raise ValidationError(f"Image size exceeds {limit_mb}MB limit")

    if not _BASE64_RE.match(image_b64):
        raise ValidationError("Invalid image format")

    return image_b64


def validate_purpose(purpose: Any) -> str:
    """Validate a prompt-enhancement purpose tag.

    Raises:
        ValidationError: If ``purpose`` is not one of the known purposes.
    """
    if purpose not in PURPOSES:
        raise ValidationError("Invalid type parameter")
    return purpose


def validate_image_refs(images: Any, max_images: int = 4) -> list[str]:
    """Validate the image references of a remix request.

    Each reference is a URL or data URI; it is forwarded as-is.

    Raises:
        ValidationError: If the list is missing or empty, has more than
            ``max_images`` entries, or contains a non-string/blank entry.
    """
    if not isinstance(images, list) or len(images) < 1:
        raise ValidationError("At least one image is required")

    if len(images) > max_images:
        raise ValidationError(f"Maximum {max_images} images can be remixed at once")

    for i, image in enumerate(images):
        if not isinstance(image, str) or not image.strip():
            raise ValidationError(f"Invalid image reference at position {i + 1}")

    return images


def validate_messages(messages: Any) -> list[dict[str, str]]:
    """Validate a chat transcript.

    Raises:
        ValidationError: If ``messages`` is not a non-empty list of
            ``{"role", "content"}`` mappings with a known role.
    """
    if not isinstance(messages, list) or not messages:
        raise ValidationError("Messages array is required")

    for message in messages:
        if not isinstance(message, dict):
            raise ValidationError("Invalid message format")
        if message.get("role") not in CHAT_ROLES:
            raise ValidationError(f"Invalid message role: {message.get('role')!r}")
        if not isinstance(message.get("content"), str):
            raise ValidationError("Invalid message format")

    return messages


def validate_prompt_source(image_b64: Any, text_input: Any) -> None:
    """Require at least one of an image or a text idea.

    Raises:
        ValidationError: If both are missing or blank.
    """
    has_image = isinstance(image_b64, str) and bool(image_b64)
    has_text = isinstance(text_input, str) and bool(text_input.strip())
    if not has_image and not has_text:
        raise ValidationError("Please provide an image or text description")


def check_lengths(values: Sequence[tuple[str, Any]], max_length: int) -> None:
    """Apply the prompt length limit to optional free-text fields.

    ``None`` and blank strings are skipped; anything else goes through
    :func:`validate_prompt` with the given field name.
    """
    for field, value in values:
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        validate_prompt(value, max_length=max_length, field=field)
