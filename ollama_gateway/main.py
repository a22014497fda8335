"""Ollama-compatible gateway: one local daemon address, several managed LLM providers."""

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .adapters import Adapter, default_adapters
from .backend_client import client
from .config import settings
from .errors import GatewayError
from .http_utils import error_response
from .registry import DEFAULT_REGISTRY, ModelRegistry, ProviderKind
from .router_ollama import router as ollama_router

logger = logging.getLogger(__name__)

PROVIDER_SDKS = {
    ProviderKind.ANTHROPIC: "claude-agent-sdk",
    ProviderKind.OPENAI: "openai responses",
}


def _log_banner(registry: ModelRegistry) -> None:
    base_url = f"http://{settings.host}:{settings.port}"
    logger.info("Ollama-compatible gateway listening on %s", base_url)
    for provider, sdk in PROVIDER_SDKS.items():
        logger.info("Provider %-9s | %s", provider.value, sdk)
    logger.info("Models (%d):", len(registry))
    for entry in registry:
        logger.info("  %s -> %s [%s]", entry.alias, entry.backend_model_id, entry.provider.value)
    logger.info("Notes client: Settings > AI > Local AI > URL = %s", base_url)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging, open the backend HTTP pool."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    await client.start()
    _log_banner(app.state.registry)

    yield

    await client.stop()
    logger.info("Gateway stopped")


def create_app(
    registry: ModelRegistry | None = None,
    adapters: Mapping[ProviderKind, Adapter] | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Ollama Gateway",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.registry = registry if registry is not None else DEFAULT_REGISTRY
    app.state.adapters = dict(adapters) if adapters is not None else default_adapters()

    # --- Error handling ---

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and wrong methods look the same to an Ollama client.
        if exc.status_code in (404, 405):
            return error_response(404, f"Not found: {request.method} {request.url.path}")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return error_response(500, str(exc) or "Internal server error")

    # --- Liveness ---

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Ollama is running"

    app.include_router(ollama_router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
