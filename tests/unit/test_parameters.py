"""Tests for imagegate.core.parameters: style, quality and aspect ratio mapping."""

from __future__ import annotations

import pytest

from imagegate.core.parameters import (
    ASPECT_RATIO_DIMENSIONS,
    QUALITY_STEPS,
    STYLE_SUFFIXES,
    GenerationParameters,
    apply_style,
    dimensions,
    inference_steps,
    list_presets,
    map_generation_parameters,
    style_suffix,
)


class TestStyleMapping:
    """Style tags become literal prompt suffixes."""

    def test_cinematic_suffix(self):
        assert style_suffix("cinematic") == (
            "cinematic lighting, dramatic atmosphere, movie quality, epic scene"
        )

    @pytest.mark.parametrize("style", list(STYLE_SUFFIXES))
    def test_every_documented_style_has_suffix(self, style):
        assert style_suffix(style)

    @pytest.mark.parametrize("style", [None, "", "none", "vaporwave", "CINEMATIC"])
    def test_unknown_style_is_neutral(self, style):
        """Unknown styles add nothing rather than failing."""
        assert style_suffix(style) == ""
        assert apply_style("a cat", style) == "a cat"

    def test_apply_style_joins_with_comma(self):
        assert apply_style("a cat", "anime") == (
            "a cat, anime style, vibrant colors, detailed line art, studio quality"
        )


class TestQualityMapping:
    def test_ultra_steps(self):
        assert inference_steps("ultra") == QUALITY_STEPS["ultra"] == 50

    def test_steps_increase_with_quality(self):
        ordered = [inference_steps(q) for q in ("draft", "medium", "high", "ultra")]
        assert ordered == sorted(ordered)
        assert len(set(ordered)) == 4

    @pytest.mark.parametrize("quality", [None, "", "insane"])
    def test_unknown_quality_uses_baseline(self, quality):
        assert inference_steps(quality) == QUALITY_STEPS["medium"]


class TestAspectRatioMapping:
    def test_widescreen(self):
        assert dimensions("16:9") == (1344, 768)

    def test_portrait_is_transposed_widescreen(self):
        width, height = dimensions("9:16")
        assert (height, width) == dimensions("16:9")

    @pytest.mark.parametrize("ratio", list(ASPECT_RATIO_DIMENSIONS))
    def test_dimensions_are_multiples_of_64(self, ratio):
        width, height = dimensions(ratio)
        assert width % 64 == 0
        assert height % 64 == 0

    @pytest.mark.parametrize("ratio", [None, "", "21:9", "square"])
    def test_unknown_ratio_is_square(self, ratio):
        assert dimensions(ratio) == (1024, 1024)


class TestMapGenerationParameters:
    def test_full_mapping(self):
        params = map_generation_parameters(
            "a lighthouse",
            style="watercolor",
            aspect_ratio="3:2",
            quality="high",
            seed=1234,
            negative_prompt="blurry, text",
        )
        assert isinstance(params, GenerationParameters)
        assert params.prompt.startswith("a lighthouse, watercolor painting")
        assert (params.width, params.height) == (1216, 832)
        assert params.steps == 40
        assert params.seed == 1234
        assert params.negative_prompt == "blurry, text"

    def test_defaults(self):
        params = map_generation_parameters("a lighthouse")
        assert params == GenerationParameters(
            prompt="a lighthouse", width=1024, height=1024, steps=30
        )

    def test_blank_negative_prompt_dropped(self):
        assert map_generation_parameters("x", negative_prompt="   ").negative_prompt is None


class TestListPresets:
    def test_presets_cover_tables(self):
        presets = list_presets()
        assert presets["styles"][0] == "none"
        assert set(presets["styles"][1:]) == set(STYLE_SUFFIXES)
        assert {q["id"] for q in presets["qualities"]} == set(QUALITY_STEPS)
        assert {"id": "16:9", "width": 1344, "height": 768} in presets["aspect_ratios"]
