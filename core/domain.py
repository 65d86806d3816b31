# core/domain.py
"""Domain models passed between pipeline steps. None of them are persisted locally."""
from dataclasses import dataclass, field
from typing import List, Optional

from core.enums import ModelType, VectorStoreFileStatus


@dataclass(frozen=True)
class VectorStore:
    """Handle for a remote vector store"""
    id: str
    name: str
    status: Optional[str] = None


@dataclass(frozen=True)
class UploadedFile:
    """Handle for a file held by the platform's Files service"""
    id: str
    filename: str
    purpose: str
    bytes: int = 0


@dataclass(frozen=True)
class VectorStoreFile:
    """Association between a vector store and an uploaded file"""
    id: str
    vector_store_id: str
    status: VectorStoreFileStatus
    last_error: Optional[str] = None


@dataclass(frozen=True)
class SearchChunk:
    """A retrieved passage and its relevance score, as ranked by the server"""
    content: str
    score: float
    file_id: Optional[str] = None
    filename: Optional[str] = None


@dataclass(frozen=True)
class Model:
    """A model registered with the platform"""
    identifier: str
    model_type: str
    provider_id: Optional[str] = None

    @property
    def is_llm(self) -> bool:
        return self.model_type == ModelType.LLM.value


@dataclass(frozen=True)
class ChatAnswer:
    """Text extracted from the first choice of a chat completion. May be empty."""
    text: str
    model: Optional[str] = None
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    """Everything a completed run produced"""
    vector_store: VectorStore
    file: UploadedFile
    attachment: VectorStoreFile
    chunks: List[SearchChunk] = field(default_factory=list)
    model_id: str = ""
    prompt: str = ""
    answer: Optional[ChatAnswer] = None
