"""HTTP surface (FastAPI).

One route does real work: `POST /move` validates the body, resolves a move and
returns `{move, fallbackUsed, raw}`. Input errors map to 400 `{error}`; anything
unexpected maps to 500 `{error, detail}`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.providers import build_text_generator
from core.config import AppSettings
from core.errors import MoveServiceError
from core.interfaces.text_generator import TextGenerator
from core.services.board_validator import validate_move_request
from core.services.move_resolver import MoveResolver

logger = logging.getLogger(__name__)

INVALID_JSON = "Request body must be valid JSON"


def create_app(
    settings: AppSettings | None = None,
    *,
    generator: TextGenerator | None = None,
) -> FastAPI:
    """Build the application.

    Without an injected `generator` the provider is built from `settings`, so a
    missing API key raises `ConfigurationError` here, before anything listens.
    """

    settings = settings or AppSettings()
    generator = generator or build_text_generator(settings)
    resolver = MoveResolver.from_settings(settings, generator)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        close = getattr(generator, "aclose", None)
        if close is not None:
            await close()

    app = FastAPI(
        title="Tic-Tac-Toe LLM move service",
        description="Picks the AI's next move with a language model and a deterministic fallback.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.resolver = resolver

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MoveServiceError)
    async def _move_service_error(request: Request, exc: MoveServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/", tags=["General"])
    async def health() -> dict[str, str]:
        """Health check."""
        return {"status": "ok", "provider": settings.ai_provider, "model": settings.ai_model}

    @app.post("/move", tags=["Game"])
    async def move(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse(status_code=400, content={"error": INVALID_JSON})

        try:
            board, ai_symbol = validate_move_request(payload, strict=settings.strict_board_format)
            result = await resolver.resolve(board, ai_symbol)
        except MoveServiceError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error while resolving a move")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "detail": str(exc)},
            )

        return JSONResponse(content=result.model_dump(by_alias=True))

    return app
