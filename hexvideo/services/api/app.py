from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hexvideo.common.logging import get_logger
from hexvideo.common.settings import get_settings
from hexvideo.domain.errors import (
    ExecutionError,
    InvalidOptionsError,
    SourceNotFoundError,
    ToolUnavailableError,
)
from hexvideo.services.api.routers import health, video

logger = get_logger()


def _error_body(kind: str, exc: Exception, **extra) -> dict:
    return {"ok": False, "error": kind, "detail": getattr(exc, "message", str(exc)), **extra}


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidOptionsError)
    async def _invalid(_: Request, exc: InvalidOptionsError):
        return JSONResponse(status_code=422, content=_error_body("invalid_options", exc, field=exc.field))

    @app.exception_handler(SourceNotFoundError)
    async def _missing(_: Request, exc: SourceNotFoundError):
        return JSONResponse(status_code=404, content=_error_body("source_not_found", exc, path=exc.path))

    @app.exception_handler(ToolUnavailableError)
    async def _no_tool(_: Request, exc: ToolUnavailableError):
        logger.error("ffmpeg unavailable: %s", exc.message)
        return JSONResponse(status_code=503, content=_error_body("tool_unavailable", exc, hint=exc.hint))

    @app.exception_handler(ExecutionError)
    async def _failed(_: Request, exc: ExecutionError):
        return JSONResponse(
            status_code=502,
            content=_error_body("execution_failed", exc, diagnostics=exc.diagnostics, exit_code=exc.exit_code),
        )


def create_app() -> FastAPI:
    cfg = get_settings()
    dev = cfg.app_env.lower() == "development"

    app = FastAPI(
        title="Hexvideo API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    _register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(video.router)
    return app

app = create_app()
