"""Response unwrapping for the upstream envelopes the gateway talks to.

Each upstream returns its artifact at a different JSON path.  The provider
that was called names its :class:`ResponseShape` and :func:`unwrap`
dispatches to the matching extractor; no other path is tried.

Shapes
------
``chat_image``
    ``choices[0].message.images[0].image_url.url`` (multimodal chat gateway)
``images_data``
    ``data[0].url``, or ``data[0].b64_json`` wrapped as a PNG data URI
``chat_text``
    ``choices[0].message.content`` (text/vision completion)
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from .errors import MalformedResponseError

PNG_DATA_URI_PREFIX = "data:image/png;base64,"

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ResponseShape(str, Enum):
    CHAT_IMAGE = "chat_image"
    IMAGES_DATA = "images_data"
    CHAT_TEXT = "chat_text"


def _first(items: Any, what: str) -> Any:
    if not isinstance(items, list) or not items:
        raise MalformedResponseError(f"Response has no {what}")
    return items[0]


def _message(envelope: dict) -> dict:
    choice = _first(envelope.get("choices"), "choices")
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict):
        raise MalformedResponseError("Response choice has no message")
    return message


def extract_chat_image(envelope: dict) -> str:
    """Return ``choices[0].message.images[0].image_url.url``.

    A missing image usually means the model refused or answered with text only.
    """
    image = _first(_message(envelope).get("images"), "image data")
    url = None
    if isinstance(image, dict) and isinstance(image.get("image_url"), dict):
        url = image["image_url"].get("url")
    if not isinstance(url, str) or not url:
        raise MalformedResponseError("No image data in response")
    return url


def extract_images_data(envelope: dict) -> str:
    """Return ``data[0].url`` if present, else ``data[0].b64_json`` as a data URI."""
    item = _first(envelope.get("data"), "image data")
    if not isinstance(item, dict):
        raise MalformedResponseError("No image data in response")
    url = item.get("url")
    if isinstance(url, str) and url:
        return url
    b64 = item.get("b64_json")
    if isinstance(b64, str) and b64:
        return PNG_DATA_URI_PREFIX + b64
    raise MalformedResponseError("No image data in response")


def extract_chat_text(envelope: dict) -> str:
    """Return ``choices[0].message.content`` stripped of surrounding whitespace."""
    content = _message(envelope).get("content")
    if not isinstance(content, str) or not content.strip():
        raise MalformedResponseError("No text content in response")
    return content.strip()


_EXTRACTORS = {
    ResponseShape.CHAT_IMAGE: extract_chat_image,
    ResponseShape.IMAGES_DATA: extract_images_data,
    ResponseShape.CHAT_TEXT: extract_chat_text,
}


def unwrap(shape: ResponseShape, envelope: dict) -> str:
    """Extract the artifact from ``envelope`` using the extractor for ``shape``.

    Raises:
        MalformedResponseError: If the expected field path is absent.
    """
    return _EXTRACTORS[shape](envelope)


def parse_json_content(text: str) -> dict[str, Any]:
    """Parse the JSON object returned by a JSON-mode completion.

    Some models wrap JSON in a Markdown code fence even in JSON mode; the
    fence is stripped before parsing.

    Raises:
        MalformedResponseError: If the text is not a JSON object.
    """
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        stripped = match.group(1)
    try:
        parsed = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Completion is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise MalformedResponseError("Completion JSON is not an object")
    return parsed
