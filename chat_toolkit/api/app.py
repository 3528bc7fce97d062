"""FastAPI application setup"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .. import __version__
from ..core import (
    ChatToolkitError,
    ConfigLoader,
    NoteAssistant,
    SessionController,
    load_config,
    validate_config,
)
from ..core.config_loader import resolve_config_path
from ..models.openai import ErrorResponse, ErrorDetail
from ..utils import setup_logging, logger
from .endpoints import router


def build_controller(config_path: Optional[str] = None) -> SessionController:
    """
    Build a session controller from the YAML configuration

    Settings are re-read from the file at the start of every call.
    """
    path = resolve_config_path(config_path)
    app_config = load_config(path)
    validate_config(app_config)

    setup_logging(app_config.server.log_level)
    logger.info("Configuration loaded successfully",
                model=app_config.chat.model,
                config_path=path)

    return SessionController(
        settings_source=ConfigLoader(path),
        debug_mode=app_config.server.debug_mode,
    )


def create_app(
    controller: Optional[SessionController] = None,
    config_path: Optional[str] = None,
) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        controller: Caller-owned session controller; when omitted one is
            built from configuration at startup and closed at shutdown
        config_path: Configuration file used when building the controller

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        owns_controller = app.state.controller is None
        if owns_controller:
            app.state.controller = build_controller(config_path)
            app.state.notes = NoteAssistant(app.state.controller)

        logger.info("Chat toolkit started")

        yield

        logger.info("Shutting down chat toolkit")
        if owns_controller:
            await app.state.controller.close()
            app.state.controller = None
            app.state.notes = None

    app = FastAPI(
        title="Chat Toolkit",
        description="Budget-aware conversation client for OpenAI-style completion services",
        version=__version__,
        lifespan=lifespan
    )

    app.state.controller = controller
    app.state.notes = NoteAssistant(controller) if controller is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ChatToolkitError)
    async def chat_toolkit_exception_handler(request: Request, exc: ChatToolkitError):
        """Map classified failures to HTTP errors"""
        error_response = ErrorResponse(
            error=ErrorDetail(
                message=exc.message,
                type=exc.code,
                code=str(getattr(exc, "status", exc.http_status))
            )
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=error_response.model_dump()
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        """Handle invalid input"""
        error_response = ErrorResponse(
            error=ErrorDetail(
                message=str(exc),
                type="invalid_request_error",
                code="400"
            )
        )
        return JSONResponse(
            status_code=400,
            content=error_response.model_dump()
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "chat-toolkit",
            "version": __version__
        }

    app.include_router(router)

    return app
