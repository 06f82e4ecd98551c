"""Tests for the Pydantic request/response models in imagegate.api.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from imagegate.api.models import (
    ChatRequest,
    EditImageRequest,
    EnhancePromptRequest,
    EnhancePromptResponse,
    GenerateImageRequest,
    ImageResponse,
    ImageToPromptRequest,
    RemixImagesRequest,
)


class TestRequestAliases:
    """Request bodies use camelCase on the wire."""

    def test_generate_image_camel_case(self):
        req = GenerateImageRequest.model_validate(
            {
                "prompt": "a fox",
                "aspectRatio": "16:9",
                "negativePrompt": "blur",
                "quality": "high",
                "seed": 7,
            }
        )
        assert req.aspect_ratio == "16:9"
        assert req.negative_prompt == "blur"
        assert req.seed == 7

    def test_snake_case_also_accepted(self):
        req = EditImageRequest.model_validate({"prompt": "p", "image_base64": "AAAA"})
        assert req.image_base64 == "AAAA"

    def test_image_to_prompt_fields(self):
        req = ImageToPromptRequest.model_validate({"textInput": "idea", "mood": "calm"})
        assert req.text_input == "idea"
        assert req.image_base64 is None


class TestRequestDefaults:
    def test_everything_optional(self):
        """Missing fields are reported by the gateway's validators, not the schema."""
        req = GenerateImageRequest.model_validate({})
        assert req.prompt is None
        assert RemixImagesRequest.model_validate({}).images is None
        assert ChatRequest.model_validate({}).messages is None

    def test_enhance_default_purpose(self):
        assert EnhancePromptRequest.model_validate({"prompt": "x"}).type == "generate"

    def test_wrong_json_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            GenerateImageRequest.model_validate({"prompt": "x", "seed": "not-a-number"})


class TestResponseAliases:
    def test_image_response_dumps_camel_case(self):
        dumped = ImageResponse(image_url="https://cdn.test/a.png").model_dump(by_alias=True)
        assert dumped == {"imageUrl": "https://cdn.test/a.png"}

    def test_enhance_response_dumps_camel_case(self):
        dumped = EnhancePromptResponse(enhanced_prompt="better").model_dump(by_alias=True)
        assert dumped == {"enhancedPrompt": "better"}
