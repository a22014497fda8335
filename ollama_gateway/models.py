from typing import Any

from pydantic import BaseModel, field_validator


# --- Requests ---


class ChatMessage(BaseModel):
    role: str
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatRequest(BaseModel):
    model: str = ""
    messages: list[ChatMessage] = []
    stream: Any = True
    options: dict[str, Any] = {}

    @property
    def stream_requested(self) -> bool:
        # Only an explicit false turns streaming off.
        return self.stream is not False


class GenerateRequest(BaseModel):
    model: str = ""
    prompt: str | None = None
    system: str | None = None
    stream: Any = True
    options: dict[str, Any] = {}

    def to_chat_request(self) -> ChatRequest:
        """Convert a generate payload into the equivalent chat request."""
        messages = []
        if self.system:
            messages.append(ChatMessage(role="system", content=self.system))
        messages.append(ChatMessage(role="user", content=self.prompt or ""))
        return ChatRequest(
            model=self.model,
            messages=messages,
            stream=self.stream,
            options=self.options,
        )


class ShowRequest(BaseModel):
    name: str | None = None
    model: str | None = None

    @property
    def requested_name(self) -> str:
        return self.name or self.model or ""


class EmbeddingRequest(BaseModel):
    prompt: str | None = None
    input: str | None = None

    @property
    def text(self) -> str:
        return self.prompt or self.input or ""


# --- Responses ---


class ModelDetails(BaseModel):
    parent_model: str = ""
    format: str = "api"
    family: str
    families: list[str] | None = None
    parameter_size: str | None = None
    quantization_level: str | None = None


class TagEntry(BaseModel):
    name: str
    model: str
    modified_at: str
    size: int = 0
    digest: str
    details: ModelDetails


class TagsResponse(BaseModel):
    models: list[TagEntry]


class ShowResponse(BaseModel):
    modelfile: str
    parameters: str = ""
    template: str = ""
    details: ModelDetails


class ChunkMessage(BaseModel):
    role: str = "assistant"
    content: str


class ChatChunk(BaseModel):
    model: str
    created_at: str
    message: ChunkMessage
    done: bool
    done_reason: str | None = None


class EmbeddingResponse(BaseModel):
    embedding: list[float]
