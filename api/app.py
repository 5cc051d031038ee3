"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings
from orchestrator import (
    FAILURE_MESSAGE,
    FALLBACK_RESPONSE,
    ObjectionHandlerOrchestrator,
)
from . import routes

logger = logging.getLogger(__name__)

MISSING_PARAMETERS = "Missing required parameters: conversationInput and conversationStrategy"


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[ObjectionHandlerOrchestrator] = None
) -> FastAPI:
    """
    Build the app around one orchestrator.

    The orchestrator, and with it the conversation history, lives as long
    as the app and is cleared on shutdown.
    """
    settings = settings or Settings.from_env()
    orchestrator = orchestrator or ObjectionHandlerOrchestrator(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.orchestrator.shutdown()

    app = FastAPI(title="Objection Handler", lifespan=lifespan)
    app.state.settings = settings
    app.state.orchestrator = orchestrator

    _register_middleware(app)
    _register_handlers(app)
    app.include_router(routes.router)
    return app


def _register_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )


def _register_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # Unparseable or non-object bodies count as missing parameters
        if request.url.path.endswith("conversation-processor"):
            return JSONResponse(status_code=400, content={"error": MISSING_PARAMETERS})
        return JSONResponse(status_code=400, content={"error": "Invalid request parameters"})

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": FAILURE_MESSAGE,
                "details": str(exc),
                "fallbackResponse": FALLBACK_RESPONSE,
            },
        )
