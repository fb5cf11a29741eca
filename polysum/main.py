import os
import sys
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import config
from .languages import LANGUAGE_CODES
from .logging import logger
from .model_client import InferenceClient
from .models import error_content
from .ratelimit import SlidingWindowLimiter
from .routes import health, summarize
from .services.summarizer import SummarizationPipeline
from .services.translator import Translator

RATE_LIMITED = "Too many requests, please try again later."


class SetupError(Exception):
    """Raised when service setup fails."""
    pass


def setup_and_validate() -> None:
    """Validate configuration before serving.

    Raises SetupError if any required value is missing or invalid.
    """
    logger.info("setup.starting")
    _validate_config()
    logger.info(
        "setup.completed",
        config={
            "summary_api_url": config.SUMMARY_API_URL,
            "translation_api_url": config.TRANSLATION_API_URL,
            "hf_token": _mask_token(config.HUGGINGFACE_API_TOKEN),
            "timeout_s": config.INFERENCE_TIMEOUT,
            "max_retries": config.MAX_RETRIES,
            "retry_delay_s": config.RETRY_DELAY,
            "chunk_max_chars": config.CHUNK_MAX_CHARS,
            "min_words": config.MIN_WORDS,
            "app_env": config.APP_ENV,
            "port": config.PORT,
        },
    )


def _validate_config() -> None:
    logger.info("setup.validating_config")

    required_configs = [
        ("HUGGINGFACE_API_TOKEN", config.HUGGINGFACE_API_TOKEN),
        ("SUMMARY_API_URL", config.SUMMARY_API_URL),
        ("TRANSLATION_API_URL", config.TRANSLATION_API_URL),
    ]
    missing = [name for name, value in required_configs if not value or not value.strip()]
    if missing:
        raise SetupError(f"Missing required configuration: {', '.join(missing)}")

    for name in ("SUMMARY_API_URL", "TRANSLATION_API_URL"):
        url = getattr(config, name)
        if not url.startswith(("http://", "https://")):
            raise SetupError(f"{name} must be a valid URL, got: {url}")

    if config.INFERENCE_TIMEOUT <= 0:
        raise SetupError(f"INFERENCE_TIMEOUT must be > 0, got {config.INFERENCE_TIMEOUT}")
    if config.MAX_RETRIES < 0:
        raise SetupError(f"MAX_RETRIES must be >= 0, got {config.MAX_RETRIES}")
    if config.RETRY_DELAY < 0:
        raise SetupError(f"RETRY_DELAY must be >= 0, got {config.RETRY_DELAY}")
    if config.CHUNK_MAX_CHARS < 1:
        raise SetupError(f"CHUNK_MAX_CHARS must be > 0, got {config.CHUNK_MAX_CHARS}")
    if config.MIN_WORDS < 1:
        raise SetupError(f"MIN_WORDS must be > 0, got {config.MIN_WORDS}")
    if config.RATE_LIMIT_MAX < 1 or config.RATE_LIMIT_WINDOW_SEC <= 0:
        raise SetupError("RATE_LIMIT_MAX and RATE_LIMIT_WINDOW_SEC must be > 0")


def _mask_token(token: Optional[str]) -> Optional[str]:
    """Mask a credential for logging, keeping a short prefix for identification."""
    if not token:
        return token
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}***"


def build_pipeline(http: httpx.AsyncClient) -> SummarizationPipeline:
    client = InferenceClient.from_config(http)
    translator = Translator(client, config.TRANSLATION_API_URL, max_chars=config.CHUNK_MAX_CHARS)
    return SummarizationPipeline(
        client,
        translator,
        config.SUMMARY_API_URL,
        languages=LANGUAGE_CODES,
        min_words=config.MIN_WORDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "pipeline", None) is not None:
        yield
        return
    async with httpx.AsyncClient() as http:
        app.state.pipeline = build_pipeline(http)
        logger.info("app.started")
        yield
    logger.info("app.stopped")


def create_app(
    pipeline: Optional[SummarizationPipeline] = None,
    limiter: Optional[SlidingWindowLimiter] = None,
    static_dir: Optional[str] = None,
) -> FastAPI:
    """Build the ASGI app; pass ``pipeline`` to skip creating the outbound HTTP client."""
    app = FastAPI(title="polysum", version="1.0.0", lifespan=lifespan)
    app.state.languages = LANGUAGE_CODES
    if pipeline is not None:
        app.state.pipeline = pipeline
    limiter = limiter or SlidingWindowLimiter(config.RATE_LIMIT_MAX, config.RATE_LIMIT_WINDOW_SEC)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def trace_and_rate_limit(request: Request, call_next):
        trace_id = uuid.uuid4().hex
        request.state.trace_id = trace_id
        ip = request.client.host if request.client else "unknown"
        if not limiter.allow(ip):
            logger.warn("http.rate_limited", trace_id=trace_id, ip=ip, path=request.url.path)
            return JSONResponse(status_code=429, content=error_content(RATE_LIMITED))

        t0 = time.time()
        response = await call_next(request)
        logger.info(
            "http.request",
            trace_id=trace_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=int((time.time() - t0) * 1000),
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.info("http.invalid_body", trace_id=getattr(request.state, "trace_id", None), errors=exc.errors())
        return JSONResponse(status_code=400, content=error_content("Invalid request body.", exc))

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.error(
            "http.unhandled_error",
            trace_id=getattr(request.state, "trace_id", None),
            path=request.url.path,
            error=exc,
        )
        return JSONResponse(status_code=500, content=error_content("Something broke!", exc))

    app.include_router(summarize.router)
    app.include_router(health.router)

    static_dir = static_dir if static_dir is not None else config.STATIC_DIR
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


def _uvicorn_level(level: str) -> str:
    return "warning" if level == "warn" else level


def main() -> int:
    """Validate configuration and serve the API."""
    logger.set_level(config.LOG_LEVEL)
    try:
        setup_and_validate()
    except SetupError as e:
        logger.error("setup.failed", error=str(e))
        return 1

    logger.info("server.starting", url=f"http://localhost:{config.PORT}")
    uvicorn.run(create_app(), host="0.0.0.0", port=config.PORT, log_level=_uvicorn_level(config.LOG_LEVEL))
    return 0


if __name__ == "__main__":
    sys.exit(main())
