"""Ollama wire protocol routes.

Endpoints:
  GET  /api/version     - Static daemon version
  GET  /api/tags        - Registered models, all reported as available
  POST /api/chat        - Chat completion (NDJSON stream or single object)
  POST /api/generate    - Single prompt, rewritten into a chat request
  POST /api/show        - Synthetic model metadata
  POST /api/embeddings  - Deterministic pseudo-embedding
"""

import logging
from collections.abc import Mapping

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from .adapters import Adapter, select_adapter
from .embeddings import synthesize
from .errors import BackendInvocationError, UnknownModel
from .http_utils import parse_body
from .models import (
    ChatRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    GenerateRequest,
    ModelDetails,
    ShowRequest,
    ShowResponse,
    TagEntry,
    TagsResponse,
)
from .registry import VERSION_SUFFIX, ModelRegistry, RegistryEntry
from .streaming import final_chunk, iso_timestamp, ndjson_stream

router = APIRouter(prefix="/api", tags=["ollama"])
logger = logging.getLogger(__name__)

OLLAMA_VERSION = "0.6.2"
NDJSON_MEDIA_TYPE = "application/x-ndjson"
DIGEST_HEX_CHARS = 64


def _get_registry(request: Request) -> ModelRegistry:
    return request.app.state.registry


def _get_adapters(request: Request) -> Mapping:
    return request.app.state.adapters


def _resolve(registry: ModelRegistry, name: str) -> RegistryEntry:
    entry = registry.resolve(name)
    if entry is None:
        raise UnknownModel(name, registry.aliases())
    return entry


def model_digest(alias: str) -> str:
    """Synthetic digest: hex of the alias, right-padded with zeros."""
    return "sha256:" + alias.encode("utf-8").hex().ljust(DIGEST_HEX_CHARS, "0")


def _tag_entry(entry: RegistryEntry, modified_at: str) -> TagEntry:
    family = entry.provider.value
    tagged = f"{entry.alias}{VERSION_SUFFIX}"
    return TagEntry(
        name=tagged,
        model=tagged,
        modified_at=modified_at,
        size=0,
        digest=model_digest(entry.alias),
        details=ModelDetails(
            family=family,
            families=[family],
            parameter_size="cloud",
            quantization_level="none",
        ),
    )


async def _complete_chat(
    chat_request: ChatRequest,
    registry: ModelRegistry,
    adapters: Mapping,
):
    entry = _resolve(registry, chat_request.model)
    stream = chat_request.stream_requested
    logger.info(
        "[%s] %s | %s | %d msgs",
        entry.provider.value,
        entry.backend_model_id,
        "stream" if stream else "sync",
        len(chat_request.messages),
    )

    adapter: Adapter = select_adapter(adapters, entry.provider)
    try:
        result = await adapter.invoke(chat_request.messages, entry.backend_model_id)
    except BackendInvocationError as e:
        logger.error("[%s] Failed: %s", entry.provider.value, e.message)
        raise

    # The reply is complete before the first byte goes out, so backend errors
    # above still get a proper status code.
    if stream:
        return StreamingResponse(
            ndjson_stream(chat_request.model, result),
            media_type=NDJSON_MEDIA_TYPE,
        )
    return JSONResponse(
        content=final_chunk(chat_request.model, result).model_dump(exclude_none=True)
    )


@router.get("/version")
async def version():
    return {"version": OLLAMA_VERSION}


@router.get("/tags")
async def tags(request: Request):
    """List every registered model. No backend is probed for liveness."""
    registry = _get_registry(request)
    now = iso_timestamp()
    models = [_tag_entry(entry, now) for entry in registry.enumerate()]
    return TagsResponse(models=models).model_dump()


@router.post("/chat")
async def chat(request: Request):
    chat_request = parse_body(await request.body(), ChatRequest)
    return await _complete_chat(chat_request, _get_registry(request), _get_adapters(request))


@router.post("/generate")
async def generate(request: Request):
    """Rewrite ``{prompt, system?}`` into a chat request and answer it as chat."""
    generate_request = parse_body(await request.body(), GenerateRequest)
    return await _complete_chat(
        generate_request.to_chat_request(),
        _get_registry(request),
        _get_adapters(request),
    )


@router.post("/show")
async def show(request: Request):
    show_request = parse_body(await request.body(), ShowRequest)
    entry = _resolve(_get_registry(request), show_request.requested_name)
    family = entry.provider.value
    return ShowResponse(
        modelfile=f"# {entry.alias} via {family}",
        details=ModelDetails(family=family),
    ).model_dump(exclude_none=True)


@router.post("/embeddings")
async def embeddings(request: Request):
    embedding_request = parse_body(await request.body(), EmbeddingRequest)
    return EmbeddingResponse(embedding=synthesize(embedding_request.text)).model_dump()
