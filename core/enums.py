"""Shared enumerations used across the application."""
from enum import Enum


class PipelineStep(str, Enum):
    """Remote calls made by the RAG pipeline. The value is the user-facing error prefix."""
    CREATE_VECTOR_STORE = "error creating vector store"
    UPLOAD_FILE = "error uploading file"
    ATTACH_FILE = "error attaching file to vector store"
    SEARCH = "error searching vector store"
    LIST_MODELS = "error fetching models"
    GENERATE_ANSWER = "error generating answer"

    @property
    def prefix(self) -> str:
        return self.value


class ModelType(str, Enum):
    """Model types reported by the platform."""
    LLM = "llm"
    EMBEDDING = "embedding"


class FilePurpose(str, Enum):
    """Declared purpose of an uploaded file."""
    ASSISTANTS = "assistants"
    BATCH = "batch"


class VectorStoreFileStatus(str, Enum):
    """Server-side indexing status of a file attached to a vector store."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not VectorStoreFileStatus.IN_PROGRESS

    @staticmethod
    def from_string(status: str) -> 'VectorStoreFileStatus':
        """Convert string to VectorStoreFileStatus enum."""
        try:
            return VectorStoreFileStatus(status)
        except ValueError:
            return VectorStoreFileStatus.FAILED
