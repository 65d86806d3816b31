# infrastructure/llama_stack_services.py
"""Llama Stack implementations of the platform interfaces"""
import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from api.schemas import (
    AssistantMessage, ChatCompletion, ChatCompletionChunk, ChatCompletionRequest,
    FileResponse, ModelListResponse, SystemMessage, UserMessage,
    VectorStoreCreateRequest, VectorStoreFileCreateRequest, VectorStoreFileResponse,
    VectorStoreResponse, VectorStoreSearchRequest, VectorStoreSearchResponse,
    chat_completion_adapter, content_text,
)
from config import settings
from core.domain import ChatAnswer, Model, SearchChunk, UploadedFile, VectorStore, VectorStoreFile
from core.enums import VectorStoreFileStatus
from core.exceptions import ResponseFormatError
from core.interfaces import IChatService, IFileService, IModelService, IVectorStoreService
from infrastructure.http_client import ClientConfig, HTTPClient

logger = logging.getLogger(settings.LOGGER_NAME)

T = TypeVar("T", bound=BaseModel)


def _parse(schema: Type[T], payload: Any) -> T:
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise ResponseFormatError(f"unexpected {schema.__name__} payload: {e}") from e


def _to_vector_store_file(response: VectorStoreFileResponse, vector_store_id: str) -> VectorStoreFile:
    return VectorStoreFile(
        id=response.id,
        vector_store_id=response.vector_store_id or vector_store_id,
        status=VectorStoreFileStatus.from_string(response.status),
        last_error=response.last_error.message if response.last_error else None,
    )


class LlamaStackVectorStoreService(IVectorStoreService):
    """Vector stores through the OpenAI-compatible /vector_stores routes."""

    def __init__(self, http: HTTPClient):
        self.http = http

    def create(self, name: str) -> VectorStore:
        body = VectorStoreCreateRequest(name=name).model_dump()
        response = _parse(VectorStoreResponse, self.http.post("vector_stores", json=body))
        logger.info(f"Created vector store {response.id}")
        return VectorStore(id=response.id, name=response.name or name, status=response.status)

    def attach_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        body = VectorStoreFileCreateRequest(file_id=file_id).model_dump()
        payload = self.http.post(f"vector_stores/{vector_store_id}/files", json=body)
        attachment = _to_vector_store_file(_parse(VectorStoreFileResponse, payload), vector_store_id)
        logger.info(f"Attached file {file_id} to {vector_store_id} (status: {attachment.status.value})")
        return attachment

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        payload = self.http.get(f"vector_stores/{vector_store_id}/files/{file_id}")
        return _to_vector_store_file(_parse(VectorStoreFileResponse, payload), vector_store_id)

    def search(self, vector_store_id: str, query: str, max_num_results: int = 3) -> List[SearchChunk]:
        body = VectorStoreSearchRequest(query=query, max_num_results=max_num_results).model_dump(exclude_none=True)
        payload = self.http.post(f"vector_stores/{vector_store_id}/search", json=body)
        response = _parse(VectorStoreSearchResponse, payload)
        logger.info(f"Search returned {len(response.data)} results")
        return [
            SearchChunk(content=r.text, score=r.score, file_id=r.file_id, filename=r.filename)
            for r in response.data
        ]


class LlamaStackFileService(IFileService):
    """Uploads through the /files route (multipart)."""

    def __init__(self, http: HTTPClient):
        self.http = http

    def upload(self, content: bytes, filename: str, mime_type: str, purpose: str) -> UploadedFile:
        payload = self.http.post_multipart(
            "files",
            files={"file": (filename, content, mime_type)},
            data={"purpose": purpose},
        )
        response = _parse(FileResponse, payload)
        logger.info(f"Uploaded {response.filename} as {response.id} ({response.bytes} bytes)")
        return UploadedFile(
            id=response.id,
            filename=response.filename,
            purpose=response.purpose,
            bytes=response.bytes,
        )


class LlamaStackModelService(IModelService):
    """Model registry through the /models route."""

    def __init__(self, http: HTTPClient):
        self.http = http

    def list(self) -> List[Model]:
        response = _parse(ModelListResponse, self.http.get("models"))
        return [
            Model(identifier=m.identifier, model_type=m.model_type, provider_id=m.provider_id)
            for m in response.data
        ]


class LlamaStackChatService(IChatService):
    """Non-streaming chat completion through the /chat/completions route."""

    def __init__(self, http: HTTPClient):
        self.http = http

    def complete(
        self,
        model: str,
        system_prompt: str,
        user_message: str,
        max_tokens: Optional[int] = None
    ) -> ChatAnswer:
        request = ChatCompletionRequest(
            model=model,
            messages=[SystemMessage(content=system_prompt), UserMessage(content=user_message)],
            max_tokens=max_tokens,
        )
        logger.info(f"Sending chat completion to model '{model}'...")
        payload = self.http.post("chat/completions", json=request.model_dump(exclude_none=True))

        try:
            response = chat_completion_adapter.validate_python(payload)
        except ValidationError as e:
            raise ResponseFormatError(f"unrecognized chat completion response: {e}") from e

        return self._extract_answer(response)

    @staticmethod
    def _extract_answer(response) -> ChatAnswer:
        if isinstance(response, ChatCompletionChunk):
            raise ResponseFormatError("received a streaming chunk from a non-streaming request")
        if not isinstance(response, ChatCompletion):
            raise ResponseFormatError(f"unhandled completion variant: {type(response).__name__}")

        if not response.choices:
            logger.warning("Chat completion returned no choices.")
            return ChatAnswer(text="", model=response.model)

        choice = response.choices[0]
        if not isinstance(choice.message, AssistantMessage):
            logger.warning(f"First choice carries a '{choice.message.role}' message, not an assistant one.")
            return ChatAnswer(text="", model=response.model, finish_reason=choice.finish_reason)

        return ChatAnswer(
            text=content_text(choice.message.content),
            model=response.model,
            finish_reason=choice.finish_reason,
        )


class LlamaStackClient:
    """Bundles the four services over one shared HTTP session."""

    def __init__(self, config: ClientConfig, http: Optional[HTTPClient] = None):
        self.config = config
        self.http = http or HTTPClient(config)
        self.vector_stores = LlamaStackVectorStoreService(self.http)
        self.files = LlamaStackFileService(self.http)
        self.models = LlamaStackModelService(self.http)
        self.chat = LlamaStackChatService(self.http)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> 'LlamaStackClient':
        return self

    def __exit__(self, *exc) -> None:
        self.close()
