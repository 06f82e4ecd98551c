"""Gateway operations: validate, shape, call with fallback, unwrap.

:class:`ImageGateway` is the single object the API layer talks to.  Each
public coroutine implements one handler end to end::

    validate -> shape payload -> FallbackCoordinator.run -> unwrap

Upstream contracts
------------------
``generate_image``
    Image generation endpoint (``config.images_url``), ``images_data`` shape.
``edit_image`` / ``remix_images``
    Multimodal chat gateway (``config.chat_url``) with
    ``modalities=["image", "text"]``, ``chat_image`` shape.
``enhance_prompt`` / ``image_to_prompt`` / ``chat``
    Chat gateway text/vision completion, ``chat_text`` shape.

Credentials are taken from the gateway's config every time an operation
runs, never cached on the instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import GatewayConfig
from .fallback import FallbackCoordinator
from .parameters import GenerationParameters, map_generation_parameters
from .prompt_builder import (
    CHAT_SYSTEM_PROMPT,
    DEFAULT_PURPOSE,
    build_analysis_content,
    build_enhance_messages,
    build_idea_instruction,
    build_model_prompts_instruction,
    build_remix_prompt,
    image_data_uri,
)
from .providers import ProviderClient
from .unwrap import ResponseShape, parse_json_content, unwrap
from .validation import (
    check_lengths,
    validate_image_payload,
    validate_image_refs,
    validate_messages,
    validate_prompt,
    validate_prompt_source,
    validate_purpose,
)

logger = logging.getLogger(__name__)


@dataclass
class NormalizedResult:
    """The single artifact produced by one gateway operation.

    Attributes:
        artifact: Image URL, ``data:`` URI, text, or a mapping of
            model name to prompt (image-to-prompt).
        shape: Name of the response shape the artifact was extracted from.
        credential_rank: ``"primary"`` or ``"backup"``.
        metadata: Optional diagnostics (e.g. mapped generation parameters).
    """

    artifact: Any
    shape: str
    credential_rank: str
    metadata: dict[str, Any] = field(default_factory=dict)


class ImageGateway:
    """Stateless request transformer between the UI and AI providers.

    Args:
        config: Gateway configuration; credentials are read from it per call.
        http_client: Shared ``httpx.AsyncClient``.  The caller owns it.
    """

    def __init__(self, config: GatewayConfig, http_client: httpx.AsyncClient) -> None:
        self.config = config
        self.http_client = http_client

    # ------------------------------------------------------------------
    # Plumbing.
    # ------------------------------------------------------------------

    def _client(self, shape: ResponseShape, name: str) -> ProviderClient:
        url = self.config.images_url if shape is ResponseShape.IMAGES_DATA else self.config.chat_url
        return ProviderClient(
            url, self.http_client, shape, name=name, timeout=self.config.request_timeout
        )

    async def _call(self, name: str, shape: ResponseShape, payload: dict[str, Any]) -> NormalizedResult:
        coordinator = FallbackCoordinator(self.config.credentials(), self._client(shape, name))
        envelope, credential = await coordinator.run(payload)
        artifact = unwrap(shape, envelope)
        return NormalizedResult(artifact=artifact, shape=shape.value, credential_rank=credential.rank)

    # ------------------------------------------------------------------
    # Image operations.
    # ------------------------------------------------------------------

    async def generate_image(
        self,
        prompt: Any,
        *,
        style: str | None = None,
        aspect_ratio: str | None = None,
        quality: str | None = None,
        seed: int | None = None,
        negative_prompt: str | None = None,
    ) -> NormalizedResult:
        """Generate an image from text.

        Style, aspect ratio and quality are mapped through
        :func:`~imagegate.core.parameters.map_generation_parameters`; unknown
        tags fall back to neutral defaults.
        """
        validate_prompt(prompt, self.config.max_prompt_length)
        check_lengths([("Negative prompt", negative_prompt)], self.config.max_prompt_length)

        params = map_generation_parameters(
            prompt,
            style=style,
            aspect_ratio=aspect_ratio,
            quality=quality,
            seed=seed,
            negative_prompt=negative_prompt,
        )
        logger.info(
            f"generate-image: {params.width}x{params.height}, {params.steps} steps, "
            f"style={style or 'none'}, prompt={prompt[:50]!r}"
        )
        result = await self._call(
            "generate-image", ResponseShape.IMAGES_DATA, self._generation_payload(params)
        )
        result.metadata = {
            "width": params.width,
            "height": params.height,
            "steps": params.steps,
            "seed": params.seed,
        }
        return result

    def _generation_payload(self, params: GenerationParameters) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.config.generation_model,
            "prompt": params.prompt,
            "n": 1,
            "size": f"{params.width}x{params.height}",
            "width": params.width,
            "height": params.height,
            "num_inference_steps": params.steps,
        }
        if params.seed is not None:
            payload["seed"] = params.seed
        if params.negative_prompt:
            payload["negative_prompt"] = params.negative_prompt
        return payload

    async def edit_image(self, prompt: Any, image_b64: Any) -> NormalizedResult:
        """Edit a base64-encoded image following ``prompt``."""
        validate_image_payload(image_b64, self.config.max_image_bytes)
        validate_prompt(prompt, self.config.max_prompt_length)

        logger.info(f"edit-image: prompt={prompt[:50]!r}")
        payload = {
            "model": self.config.image_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_data_uri(image_b64)}},
                    ],
                }
            ],
            "modalities": ["image", "text"],
        }
        return await self._call("edit-image", ResponseShape.CHAT_IMAGE, payload)

    async def remix_images(self, images: Any, prompt: str | None = None) -> NormalizedResult:
        """Blend 1 to ``max_remix_images`` image references into one image."""
        validate_image_refs(images, self.config.max_remix_images)
        check_lengths([("Prompt", prompt)], self.config.max_prompt_length)

        instruction = build_remix_prompt(prompt, len(images))
        logger.info(f"remix-images: {len(images)} image(s)")
        content: list[dict] = [{"type": "text", "text": instruction}]
        content.extend({"type": "image_url", "image_url": {"url": ref}} for ref in images)
        payload = {
            "model": self.config.image_model,
            "messages": [{"role": "user", "content": content}],
            "modalities": ["image", "text"],
        }
        return await self._call("remix-images", ResponseShape.CHAT_IMAGE, payload)

    # ------------------------------------------------------------------
    # Text operations.
    # ------------------------------------------------------------------

    async def enhance_prompt(self, prompt: Any, purpose: Any = DEFAULT_PURPOSE) -> NormalizedResult:
        """Rewrite ``prompt`` with the instruction template chosen by ``purpose``."""
        validate_prompt(prompt, self.config.max_prompt_length)
        validate_purpose(purpose)

        logger.info(f"enhance-prompt: purpose={purpose}")
        payload = {
            "model": self.config.text_model,
            "messages": build_enhance_messages(prompt, purpose),
        }
        return await self._call("enhance-prompt", ResponseShape.CHAT_TEXT, payload)

    async def image_to_prompt(
        self,
        image_b64: str | None = None,
        text_input: str | None = None,
        *,
        style: str | None = None,
        mood: str | None = None,
        negative_prompt: str | None = None,
    ) -> NormalizedResult:
        """Produce prompts for several target models from an image or an idea.

        Step 1 describes the image (vision) or expands the text idea; step 2
        asks for a JSON object mapping model names to prompts.  The image
        wins when both are given.
        """
        validate_prompt_source(image_b64, text_input)
        if image_b64:
            validate_image_payload(image_b64, self.config.max_image_bytes)
        check_lengths(
            [("Text input", text_input), ("Negative prompt", negative_prompt)],
            self.config.max_prompt_length,
        )

        if image_b64:
            logger.info("image-to-prompt: analysing image")
            step_one = {
                "model": self.config.vision_model,
                "messages": [{"role": "user", "content": build_analysis_content(image_b64)}],
            }
        else:
            logger.info("image-to-prompt: expanding text idea")
            step_one = {
                "model": self.config.vision_model,
                "messages": [
                    {"role": "user", "content": build_idea_instruction(text_input, style, mood)}
                ],
            }
        described = await self._call("image-to-prompt", ResponseShape.CHAT_TEXT, step_one)

        step_two = {
            "model": self.config.vision_model,
            "messages": [
                {
                    "role": "user",
                    "content": build_model_prompts_instruction(described.artifact, negative_prompt),
                }
            ],
            "response_format": {"type": "json_object"},
        }
        result = await self._call("image-to-prompt", ResponseShape.CHAT_TEXT, step_two)
        result.artifact = parse_json_content(result.artifact)
        result.metadata = {"description": described.artifact}
        return result

    async def chat(self, messages: Any, model: str | None = None) -> NormalizedResult:
        """Answer a chat transcript with the assistant system prompt prepended."""
        validate_messages(messages)

        payload = {
            "model": model or self.config.chat_model,
            "messages": [{"role": "system", "content": CHAT_SYSTEM_PROMPT}, *messages],
            "stream": False,
        }
        logger.info(f"chat: {len(messages)} message(s), model={payload['model']}")
        return await self._call("chat", ResponseShape.CHAT_TEXT, payload)
