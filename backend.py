"""Kotoba Bridge: Japanese to Vietnamese learning backend.

Run with `python backend.py` or `uvicorn backend:app`.
"""
import time
from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, load_settings
from errors import ClientInputError
from llm import ProviderClient, default_providers
from log import get_logger
from pipeline import build_pipelines
from routes import router

logger = get_logger("kotoba.backend")


def create_app(settings: Optional[Settings] = None,
               providers: Optional[Mapping[str, ProviderClient]] = None) -> FastAPI:
    if settings is None:
        settings = load_settings()
    if providers is None:
        providers = default_providers(settings)

    app = FastAPI(title="Kotoba Bridge")
    app.state.settings = settings
    app.state.providers = dict(providers)
    app.state.pipelines = build_pipelines(settings, providers)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        logger.info("Request handled", extra={
            "method": request.method,
            "endpoint": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.monotonic() - start) * 1000),
        })
        return response

    @app.exception_handler(ClientInputError)
    async def client_input_error(request: Request, exc: ClientInputError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message},
                            headers=getattr(exc, "headers", None))

    app.include_router(router)

    logger.info("App configured", extra={
        "component": "startup",
        "detail": {pid: p.available for pid, p in app.state.providers.items()},
    })
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
