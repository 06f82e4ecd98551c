"""Parameter mapping from UI choices to vendor request parameters.

The UI offers three abstract selectors: style, quality and aspect ratio.
This module turns them into concrete values with fixed lookup tables:

========  =====================================================
Selector  Vendor parameter
========  =====================================================
style     literal keyword suffix appended to the prompt
quality   number of inference steps
aspect    explicit pixel width and height (multiples of 64)
========  =====================================================

Unknown or missing tags map to a neutral default instead of raising: no
style suffix, the ``medium`` step count, and a square 1024x1024 canvas.
Every function here is pure.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Lookup tables.
# ---------------------------------------------------------------------------

STYLE_SUFFIXES: dict[str, str] = {
    "photorealistic": "photorealistic, ultra detailed, 8k resolution, professional photography",
    "anime": "anime style, vibrant colors, detailed line art, studio quality",
    "fantasy": "fantasy art, magical atmosphere, epic scene, concept art quality",
    "vintage": "vintage style, retro aesthetic, film grain, classic composition",
    "cinematic": "cinematic lighting, dramatic atmosphere, movie quality, epic scene",
    "abstract": "abstract art, creative interpretation, artistic style, unique perspective",
    "watercolor": "watercolor painting, soft colors, artistic brushstrokes, traditional art",
    "oil-painting": "oil painting style, rich textures, classical art, museum quality",
}

QUALITY_STEPS: dict[str, int] = {
    "draft": 15,
    "medium": 30,
    "high": 40,
    "ultra": 50,
}
DEFAULT_QUALITY = "medium"

ASPECT_RATIO_DIMENSIONS: dict[str, tuple[int, int]] = {
    "1:1": (1024, 1024),
    "16:9": (1344, 768),
    "9:16": (768, 1344),
    "4:3": (1152, 896),
    "3:2": (1216, 832),
}
DEFAULT_ASPECT_RATIO = "1:1"


@dataclass(frozen=True)
class GenerationParameters:
    """Vendor-ready parameters for one text-to-image request."""

    prompt: str
    width: int
    height: int
    steps: int
    seed: int | None = None
    negative_prompt: str | None = None


def style_suffix(style: str | None) -> str:
    """Return the keyword suffix for ``style`` (empty for none/unknown)."""
    if not style:
        return ""
    return STYLE_SUFFIXES.get(style, "")


def apply_style(prompt: str, style: str | None) -> str:
    """Append the style suffix to ``prompt``, separated by ``", "``."""
    suffix = style_suffix(style)
    if not suffix:
        return prompt
    return f"{prompt}, {suffix}"


def inference_steps(quality: str | None) -> int:
    """Return the inference step count for ``quality`` (baseline if unknown)."""
    return QUALITY_STEPS.get(quality or DEFAULT_QUALITY, QUALITY_STEPS[DEFAULT_QUALITY])


def dimensions(aspect_ratio: str | None) -> tuple[int, int]:
    """Return ``(width, height)`` for ``aspect_ratio`` (square if unknown)."""
    return ASPECT_RATIO_DIMENSIONS.get(
        aspect_ratio or DEFAULT_ASPECT_RATIO,
        ASPECT_RATIO_DIMENSIONS[DEFAULT_ASPECT_RATIO],
    )


def map_generation_parameters(
    prompt: str,
    *,
    style: str | None = None,
    aspect_ratio: str | None = None,
    quality: str | None = None,
    seed: int | None = None,
    negative_prompt: str | None = None,
) -> GenerationParameters:
    """Map a generation request onto concrete vendor parameters.

    Args:
        prompt: Validated user prompt.
        style: Style tag, e.g. ``"cinematic"``.
        aspect_ratio: Aspect ratio tag, e.g. ``"16:9"``.
        quality: Quality tier, e.g. ``"ultra"``.
        seed: Optional seed, passed through.
        negative_prompt: Optional negative prompt; blank values become ``None``.

    Returns:
        A :class:`GenerationParameters` instance.
    """
    width, height = dimensions(aspect_ratio)
    negative = negative_prompt.strip() if negative_prompt else None
    return GenerationParameters(
        prompt=apply_style(prompt, style),
        width=width,
        height=height,
        steps=inference_steps(quality),
        seed=seed,
        negative_prompt=negative or None,
    )


def list_presets() -> dict:
    """Return the selector tables in a JSON-friendly form for the frontend."""
    return {
        "styles": ["none", *STYLE_SUFFIXES],
        "qualities": [{"id": k, "steps": v} for k, v in QUALITY_STEPS.items()],
        "aspect_ratios": [
            {"id": k, "width": w, "height": h} for k, (w, h) in ASPECT_RATIO_DIMENSIONS.items()
        ],
    }
