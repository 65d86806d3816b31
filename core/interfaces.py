# core/interfaces.py
"""Core interfaces for the remote platform boundary"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain import ChatAnswer, Model, SearchChunk, UploadedFile, VectorStore, VectorStoreFile

# ============= Vector Store Interface =============
class IVectorStoreService(ABC):
    """Interface for remote vector store operations"""

    @abstractmethod
    def create(self, name: str) -> VectorStore:
        """Create a vector store with the given display name"""
        pass

    @abstractmethod
    def attach_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Associate an uploaded file with a vector store (starts server-side indexing)"""
        pass

    @abstractmethod
    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        """Fetch the current indexing status of an attached file"""
        pass

    @abstractmethod
    def search(self, vector_store_id: str, query: str, max_num_results: int = 3) -> List[SearchChunk]:
        """
        Semantic search over a vector store.

        Returns:
            Chunks in the order the server ranked them
        """
        pass

# ============= File Service Interface =============
class IFileService(ABC):
    """Interface for the Files service"""

    @abstractmethod
    def upload(self, content: bytes, filename: str, mime_type: str, purpose: str) -> UploadedFile:
        """Upload an in-memory buffer as a file"""
        pass

# ============= Model Service Interface =============
class IModelService(ABC):
    """Interface for the model registry"""

    @abstractmethod
    def list(self) -> List[Model]:
        """List registered models in server order"""
        pass

# ============= Chat Service Interface =============
class IChatService(ABC):
    """Interface for chat completion"""

    @abstractmethod
    def complete(
        self,
        model: str,
        system_prompt: str,
        user_message: str,
        max_tokens: Optional[int] = None
    ) -> ChatAnswer:
        """
        Run a non-streaming chat completion with a system and a user message.

        Returns:
            The first choice's assistant text (empty when the choice has none)

        Raises:
            ResponseFormatError: if the response or message variant is not recognized
        """
        pass
