# api/schemas.py
"""Request and response payloads of the Llama Stack HTTP API.

Variant shapes (message roles, content parts, completion objects) are modelled
as discriminated unions so that an unknown tag fails validation instead of
being silently dropped.
"""
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, model_validator,
)

# ============= Content parts =============

class TextContentPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageURLContentPart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: Dict[str, Any]


ContentPart = Annotated[
    Union[TextContentPart, ImageURLContentPart],
    Field(discriminator="type"),
]

MessageContent = Union[str, List[ContentPart]]


def content_text(content: Optional[MessageContent]) -> str:
    """Flatten message or search content to plain text (image parts carry no text)."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "\n".join(part.text for part in content if isinstance(part, TextContentPart))


# ============= Chat messages =============

class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: MessageContent


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: MessageContent


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[MessageContent] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class ToolMessage(BaseModel):
    role: Literal["tool"] = "tool"
    content: MessageContent
    tool_call_id: Optional[str] = None


class DeveloperMessage(BaseModel):
    role: Literal["developer"] = "developer"
    content: MessageContent


ChatMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage, DeveloperMessage],
    Field(discriminator="role"),
]


# ============= Requests =============

class VectorStoreCreateRequest(BaseModel):
    name: str


class VectorStoreFileCreateRequest(BaseModel):
    file_id: str


class VectorStoreSearchRequest(BaseModel):
    query: str
    max_num_results: Optional[int] = None


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    stream: bool = False


# ============= Responses =============

class VectorStoreResponse(BaseModel):
    id: str
    name: Optional[str] = None
    status: Optional[str] = None


class FileResponse(BaseModel):
    id: str
    filename: str
    purpose: str
    bytes: int = 0


class VectorStoreFileError(BaseModel):
    code: Optional[str] = None
    message: str


class VectorStoreFileResponse(BaseModel):
    id: str
    vector_store_id: Optional[str] = None
    status: str
    last_error: Optional[VectorStoreFileError] = None


class VectorStoreSearchResult(BaseModel):
    file_id: Optional[str] = None
    filename: Optional[str] = None
    score: float
    content: List[ContentPart] = []

    @property
    def text(self) -> str:
        return content_text(self.content)


class VectorStoreSearchResponse(BaseModel):
    search_query: Optional[str] = None
    data: List[VectorStoreSearchResult] = []
    has_more: bool = False


class ModelResponse(BaseModel):
    """Accepts both the native shape (identifier/model_type) and the OpenAI one (id/custom_metadata)."""
    model_config = ConfigDict(protected_namespaces=())

    identifier: str = Field(validation_alias=AliasChoices("identifier", "id"))
    model_type: str = ""
    provider_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_custom_metadata(cls, data: Any) -> Any:
        if isinstance(data, dict) and "model_type" not in data:
            metadata = data.get("custom_metadata") or {}
            if "model_type" in metadata:
                data = {**data, "model_type": metadata["model_type"]}
        return data


class ModelListResponse(BaseModel):
    data: List[ModelResponse] = []

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"data": data}
        return data


class ChatCompletionChoice(BaseModel):
    index: int = 0
    finish_reason: Optional[str] = None
    message: ChatMessage


class ChatCompletion(BaseModel):
    object: Literal["chat.completion"] = "chat.completion"
    id: Optional[str] = None
    model: Optional[str] = None
    created: Optional[int] = None
    choices: List[ChatCompletionChoice] = []


class ChatCompletionChunk(BaseModel):
    """Streaming fragment. Recognized so it can be rejected explicitly."""
    object: Literal["chat.completion.chunk"] = "chat.completion.chunk"
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[Dict[str, Any]] = []


def _completion_object(value: Any) -> str:
    """Tag for a completion payload; servers that omit 'object' send a full completion."""
    if isinstance(value, dict):
        return value.get("object", "chat.completion")
    return getattr(value, "object", "chat.completion")


ChatCompletionResponse = Annotated[
    Union[
        Annotated[ChatCompletion, Tag("chat.completion")],
        Annotated[ChatCompletionChunk, Tag("chat.completion.chunk")],
    ],
    Discriminator(_completion_object),
]

chat_completion_adapter = TypeAdapter(ChatCompletionResponse)
