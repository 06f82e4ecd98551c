"""Instruction templates for the text and vision completions.

The gateway never writes prompts itself; it asks a completion model to do it.
This module holds the fixed instructions sent along with the user's input:

- ``PURPOSE_TEMPLATES``: system prompts for prompt enhancement, selected by
  purpose tag (``generate``, ``edit``, ``prompt-to-prompt``)
- image analysis and idea expansion instructions (image-to-prompt, step 1)
- the per-model prompt instruction (image-to-prompt, step 2)
- default remix prompts
- the chat assistant's system prompt

Usage
-----
::

    messages = build_enhance_messages("a cat in space", "generate")
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Prompt enhancement templates.
# ---------------------------------------------------------------------------

_GENERATE_TEMPLATE = """\
You are an expert prompt engineer for AI image generation. Transform simple user prompts into highly detailed, vivid, and professional prompts that will produce stunning AI-generated images.

Follow these guidelines:
- Expand simple ideas into rich, detailed descriptions
- Include artistic style, lighting, composition, and mood
- Add technical photography terms when relevant (e.g., "shot on 35mm", "bokeh", "golden hour")
- Specify colors, textures, and atmospheric details
- Keep the enhanced prompt concise but impactful (2-3 sentences max)
- Focus on visual details that will improve image quality
- Do not include negative prompts or what to avoid

Example:
Input: "a cat in space"
Output: "A majestic orange tabby cat floating gracefully in the cosmos, surrounded by vibrant nebulae in purple and blue hues, with distant galaxies twinkling in the background. Shot with cinematic lighting, capturing the ethereal glow of stardust particles around the cat's whiskers, creating a dreamlike sci-fi atmosphere with rich color depth and sharp focus.\""""

_EDIT_TEMPLATE = """\
You are an expert prompt engineer for AI image editing. Transform simple editing instructions into precise, detailed prompts that will guide the AI to make exactly the changes the user wants.

Follow these guidelines:
- Expand simple edit requests into specific, actionable instructions
- Describe the desired changes with visual precision
- Include details about style consistency and blending
- Specify lighting, color, and mood adjustments
- Keep the enhanced prompt focused and clear (2-3 sentences max)
- Ensure the edit maintains the original image's coherence

Example:
Input: "make it sunny"
Output: "Transform the scene into a bright sunny day with warm golden sunlight casting soft shadows, clear blue skies with few wispy clouds, and enhanced warm color tones throughout. Increase the overall brightness while maintaining natural contrast, add subtle lens flare effects, and adjust the atmosphere to feel cheerful and inviting.\""""

_PROMPT_TO_PROMPT_TEMPLATE = """\
You are an expert at analyzing images and creating detailed prompts. Based on the user's rough idea or the image they provide, create a comprehensive, detailed prompt that captures all the visual elements, style, composition, and atmosphere.

Follow these guidelines:
- Describe all key visual elements in the scene
- Include artistic style, medium, and technique
- Specify lighting, colors, and mood
- Add composition and framing details
- Include technical details that enhance quality
- Create a prompt that would recreate the essence of the image
- Keep it detailed but focused (3-4 sentences max)

Example:
Input: "cyberpunk city"
Output: "A sprawling neon-lit cyberpunk metropolis at night, with towering skyscrapers adorned with holographic advertisements in vibrant pink, cyan, and purple. Rain-slicked streets reflect the glowing signs while flying vehicles zip between buildings, creating light trails. Shot in cinematic widescreen with a moody, atmospheric style reminiscent of Blade Runner, featuring dramatic lighting contrasts and a misty, futuristic ambiance.\""""

PURPOSE_TEMPLATES: dict[str, str] = {
    "generate": _GENERATE_TEMPLATE,
    "edit": _EDIT_TEMPLATE,
    "prompt-to-prompt": _PROMPT_TO_PROMPT_TEMPLATE,
}
PURPOSES = tuple(PURPOSE_TEMPLATES)
DEFAULT_PURPOSE = "generate"

# ---------------------------------------------------------------------------
# Image-to-prompt instructions.
# ---------------------------------------------------------------------------

_ANALYSIS_INSTRUCTION = (
    "Analyze this image in extreme detail. Describe the subject, composition, lighting, "
    "colors, mood, style, textures, and artistic elements. Create a comprehensive, vivid "
    "description suitable for AI image generation."
)

_MODEL_PROMPTS_INSTRUCTION = """\
Based on the following detailed description, generate optimized prompts for different AI models. Return ONLY valid JSON.

Description: "{description}"
{negative}

Generate prompts for these models:
- general: Universal detailed prompt (max 1000 chars)
- kling_ai: Cinematic focus with camera movements (max 1000 chars)
- ideogram: Natural language with style keywords (max 450 chars)
- leonardo_ai: Object with "prompt" and "negative_prompt" fields (max 1000 chars each)
- midjourney: Descriptive with parameters like --ar 16:9 (max 1500 chars)
- flux: Clear, highly descriptive (max 1000 chars)

JSON format:
{{
  "general": "...",
  "kling_ai": "...",
  "ideogram": "...",
  "leonardo_ai": {{"prompt": "...", "negative_prompt": "..."}},
  "midjourney": "...",
  "flux": "..."
}}"""

TARGET_MODELS = ("general", "kling_ai", "ideogram", "leonardo_ai", "midjourney", "flux")

# ---------------------------------------------------------------------------
# Remix and chat.
# ---------------------------------------------------------------------------

DEFAULT_REMIX_PROMPT = (
    "Creatively blend and fuse these images together into a single stunning, cohesive "
    "artwork. Maintain the best elements of each image while creating smooth transitions "
    "and a unified composition. The result should be visually striking and artistically "
    "impressive."
)

CHAT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant specializing in creative content, image generation, "
    "and digital art. You can help users with questions about their projects, provide "
    "creative suggestions, and assist with any questions they have about using this "
    "AI-powered platform."
)


def build_enhance_messages(prompt: str, purpose: str) -> list[dict[str, str]]:
    """Return the system + user messages for a prompt enhancement request."""
    return [
        {"role": "system", "content": PURPOSE_TEMPLATES[purpose]},
        {"role": "user", "content": prompt},
    ]


def image_data_uri(image_b64: str, mime: str = "image/png") -> str:
    """Wrap raw base64 image bytes into a ``data:`` URI."""
    return f"data:{mime};base64,{image_b64}"


def build_analysis_content(image_b64: str) -> list[dict]:
    """Return multimodal content asking a vision model to describe an image."""
    return [
        {"type": "text", "text": _ANALYSIS_INSTRUCTION},
        {"type": "image_url", "image_url": {"url": image_data_uri(image_b64, "image/jpeg")}},
    ]


def build_idea_instruction(text_input: str, style: str | None = None, mood: str | None = None) -> str:
    """Return the instruction that expands a short text idea into a description."""
    style_text = f"Style: {style}." if style else ""
    mood_text = f"Mood: {mood}." if mood else ""
    return (
        "You are a prompt engineering expert. Transform this idea into a hyper-detailed, "
        "vivid description for AI image generation. Elaborate on the scene, environment, "
        f"lighting, colors, textures, and atmosphere. {style_text} {mood_text}\n\n"
        f'Idea: "{text_input}"'
    )


def build_model_prompts_instruction(description: str, negative_prompt: str | None = None) -> str:
    """Return the instruction asking for per-model prompts as a JSON object."""
    negative = f'User wants to avoid: "{negative_prompt}".' if negative_prompt else ""
    return _MODEL_PROMPTS_INSTRUCTION.format(description=description, negative=negative)


def build_remix_prompt(prompt: str | None, image_count: int) -> str:
    """Compose the remix instruction for ``image_count`` source images.

    A single image is enhanced in place; several images are fused.  A blank
    ``prompt`` falls back to :data:`DEFAULT_REMIX_PROMPT`.
    """
    base = (prompt or "").strip() or DEFAULT_REMIX_PROMPT
    if image_count == 1:
        return f"{base} Ultra high resolution, stunning details, professional quality."
    return (
        f"{base} Create an artistic fusion combining elements from {image_count} different "
        "images. Ultra high resolution, stunning composition, professional artistic quality, "
        "seamless blending."
    )
