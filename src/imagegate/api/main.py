"""imagegate - FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, the error mapping, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is a stateless request transformer:

- **Configuration** is rebuilt from the environment on every request via the
  :func:`get_config` dependency, so credentials are read at call time.
- **Upstream calls** go through :class:`~imagegate.core.pipeline.ImageGateway`,
  which owns validation, parameter mapping, credential fallback and response
  unwrapping.
- **HTTP transport** is one shared ``httpx.AsyncClient`` created in the
  lifespan handler and stored on ``app.state``.
- **Errors** raised in the core are mapped to JSON ``{"error": ...}`` bodies
  by exception handlers.  Validation messages are returned verbatim;
  upstream and configuration details only reach the log.

Endpoints
---------
========  ==========================  ====================================
Method    Path                        Purpose
========  ==========================  ====================================
GET       ``/api/health``             Liveness and version
GET       ``/api/presets``            Styles, qualities, aspect ratios
POST      ``/api/generate-image``     Text-to-image
POST      ``/api/edit-image``         Instruction-based image editing
POST      ``/api/enhance-prompt``     Prompt rewriting by purpose
POST      ``/api/image-to-prompt``    Per-model prompts from image or idea
POST      ``/api/remix-images``       Blend 1-4 images
POST      ``/api/chat``               Creative assistant chat
OPTIONS   ``/api/{handler}``          CORS pre-flight (empty 200)
========  ==========================  ====================================

Usage
-----
CLI (installed entry point)::

    imagegate

Direct invocation::

    python -m imagegate.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from imagegate import __version__
from imagegate.api.models import (
    ChatRequest,
    ChatResponse,
    EditImageRequest,
    EnhancePromptRequest,
    EnhancePromptResponse,
    ErrorResponse,
    GenerateImageRequest,
    ImageResponse,
    ImageToPromptRequest,
    ImageToPromptResponse,
    RemixImagesRequest,
)
from imagegate.core.config import GatewayConfig, config
from imagegate.core.errors import (
    ConfigurationError,
    GatewayError,
    UpstreamFailure,
    ValidationError,
)
from imagegate.core.parameters import list_presets
from imagegate.core.pipeline import ImageGateway
from imagegate.core.prompt_builder import PURPOSES

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

# Generic per-handler failure texts.  Upstream error bodies never leave the server.
FAILURE_MESSAGES: dict[str, str] = {
    "generate-image": "Failed to generate image. Please try again.",
    "edit-image": "Failed to edit image. Please try again.",
    "enhance-prompt": "Failed to enhance prompt. Please try again.",
    "image-to-prompt": "Failed to generate prompts. Please try again.",
    "remix-images": "Failed to remix images. Please try again.",
    "chat": "Failed to process chat request. Please try again.",
}

RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
CREDITS_EXHAUSTED_MESSAGE = "AI credits exhausted. Please add credits to continue."

# OpenAPI documentation of the error body.
ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Upstream or configuration failure"},
}
CHAT_ERROR_RESPONSES: dict[int | str, dict] = {
    **ERROR_RESPONSES,
    402: {"model": ErrorResponse, "description": "AI credits exhausted"},
    429: {"model": ErrorResponse, "description": "Rate limited"},
}


class HandlerError(Exception):
    """A core error tagged with the handler that raised it."""

    def __init__(self, handler: str, error: GatewayError) -> None:
        super().__init__(str(error))
        self.handler = handler
        self.error = error


# ---------------------------------------------------------------------------
# Application lifecycle: shared HTTP client.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared ``httpx.AsyncClient`` on startup and close it on shutdown.

    Provider attempts pass the per-request ``request_timeout`` explicitly;
    the client default from the startup config covers anything else.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.http_client = httpx.AsyncClient(timeout=config.request_timeout)
    logger.info("HTTP client initialised.")

    yield

    await app.state.http_client.aclose()
    logger.info("HTTP client closed on shutdown.")


app = FastAPI(
    title="imagegate",
    description="Request shaping and credential fallback for generative-AI image APIs.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next) -> Response:
    """Attach the permissive CORS headers to every response.

    ``CORSMiddleware`` only answers requests that carry an ``Origin`` header;
    server-to-server callers and bare pre-flights get the same headers here.
    """
    response = await call_next(request)
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    response.headers.setdefault("Access-Control-Allow-Headers", ", ".join(CORS_ALLOW_HEADERS))
    return response


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_config() -> GatewayConfig:
    """Build a fresh configuration so credentials are read at request time."""
    return GatewayConfig()


def get_gateway(request: Request, cfg: GatewayConfig = Depends(get_config)) -> ImageGateway:
    """Return an :class:`ImageGateway` bound to the shared HTTP client."""
    return ImageGateway(cfg, request.app.state.http_client)


async def _run(handler: str, operation):
    """Await ``operation``, tagging any core error with ``handler``."""
    try:
        return await operation
    except GatewayError as e:
        raise HandlerError(handler, e) from e


# ---------------------------------------------------------------------------
# Error mapping.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(HandlerError)
async def handle_gateway_error(request: Request, exc: HandlerError) -> JSONResponse:
    """Map a core error to the public JSON error body.

    - ``ValidationError`` -> 400 with the validation message.
    - chat upstream 429 / 402 -> same status with a fixed explanatory message.
    - anything else -> 500 with the handler's generic failure message.
    """
    error = exc.error
    if isinstance(error, ValidationError):
        logger.warning(f"{exc.handler}: validation failed: {error}")
        return _error_response(error.status_code, error.public_message)

    if isinstance(error, ConfigurationError):
        logger.error(f"{exc.handler}: configuration error: {error}")
    else:
        logger.error(f"{exc.handler}: {error}")

    if exc.handler == "chat" and isinstance(error, UpstreamFailure):
        if error.upstream_status == 429:
            return _error_response(429, RATE_LIMITED_MESSAGE)
        if error.upstream_status == 402:
            return _error_response(402, CREDITS_EXHAUSTED_MESSAGE)

    return _error_response(500, FAILURE_MESSAGES.get(exc.handler, error.public_message))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are a plain 400."""
    logger.warning(f"{request.url.path}: rejected request body: {exc.errors()}")
    return _error_response(400, "Invalid input format")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict:
    """Return service status and version."""
    return {"status": "ok", "version": __version__}


@app.get("/api/presets")
async def presets() -> dict:
    """Return the style, quality, aspect ratio and purpose options."""
    return {**list_presets(), "purposes": list(PURPOSES)}


@app.options("/api/{handler}")
async def preflight(handler: str) -> Response:
    """Answer a bare pre-flight with an empty success body.

    Browser pre-flights carrying ``Access-Control-Request-Method`` are
    answered by ``CORSMiddleware`` before reaching this route.
    """
    return Response(status_code=200)


@app.post("/api/generate-image", response_model=ImageResponse, responses=ERROR_RESPONSES)
async def generate_image(
    req: GenerateImageRequest, gateway: ImageGateway = Depends(get_gateway)
) -> ImageResponse:
    """Generate an image from a prompt with style, quality and aspect ratio."""
    result = await _run(
        "generate-image",
        gateway.generate_image(
            req.prompt,
            style=req.style,
            aspect_ratio=req.aspect_ratio,
            quality=req.quality,
            seed=req.seed,
            negative_prompt=req.negative_prompt,
        ),
    )
    return ImageResponse(image_url=result.artifact)


@app.post("/api/edit-image", response_model=ImageResponse, responses=ERROR_RESPONSES)
async def edit_image(
    req: EditImageRequest, gateway: ImageGateway = Depends(get_gateway)
) -> ImageResponse:
    """Edit an uploaded image according to the prompt."""
    result = await _run("edit-image", gateway.edit_image(req.prompt, req.image_base64))
    return ImageResponse(image_url=result.artifact)


@app.post("/api/enhance-prompt", response_model=EnhancePromptResponse, responses=ERROR_RESPONSES)
async def enhance_prompt(
    req: EnhancePromptRequest, gateway: ImageGateway = Depends(get_gateway)
) -> EnhancePromptResponse:
    """Rewrite a prompt using the template for its purpose."""
    result = await _run("enhance-prompt", gateway.enhance_prompt(req.prompt, req.type))
    return EnhancePromptResponse(enhanced_prompt=result.artifact)


@app.post("/api/image-to-prompt", response_model=ImageToPromptResponse, responses=ERROR_RESPONSES)
async def image_to_prompt(
    req: ImageToPromptRequest, gateway: ImageGateway = Depends(get_gateway)
) -> ImageToPromptResponse:
    """Produce per-model prompts from an image or a text idea."""
    result = await _run(
        "image-to-prompt",
        gateway.image_to_prompt(
            req.image_base64,
            req.text_input,
            style=req.style,
            mood=req.mood,
            negative_prompt=req.negative_prompt,
        ),
    )
    return ImageToPromptResponse(prompts=result.artifact)


@app.post("/api/remix-images", response_model=ImageResponse, responses=ERROR_RESPONSES)
async def remix_images(
    req: RemixImagesRequest, gateway: ImageGateway = Depends(get_gateway)
) -> ImageResponse:
    """Blend up to four images into one."""
    result = await _run("remix-images", gateway.remix_images(req.images, req.prompt))
    return ImageResponse(image_url=result.artifact)


@app.post("/api/chat", response_model=ChatResponse, responses=CHAT_ERROR_RESPONSES)
async def chat(req: ChatRequest, gateway: ImageGateway = Depends(get_gateway)) -> ChatResponse:
    """Answer a chat conversation."""
    result = await _run("chat", gateway.chat(req.messages, req.model))
    return ChatResponse(message=result.artifact)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~imagegate.core.config.config`
    (``IMAGEGATE_SERVER_HOST``, ``IMAGEGATE_SERVER_PORT``,
    ``IMAGEGATE_LOG_LEVEL``).  Defaults to ``0.0.0.0:8000``.

    This function is registered as the ``imagegate`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not config.credentials():
        logger.warning("No API credentials configured; upstream calls will fail.")

    uvicorn.run(
        "imagegate.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
