"""Fake platform services shared by the pipeline tests."""
import io
from typing import List, Optional

import pytest

from core.domain import ChatAnswer, Model, SearchChunk, UploadedFile, VectorStore, VectorStoreFile
from core.enums import VectorStoreFileStatus
from core.exceptions import APIStatusError
from core.interfaces import IChatService, IFileService, IModelService, IVectorStoreService
from services.rag_pipeline import PipelineConfig, RAGPipeline

CALL_ORDER = [
    "create_vector_store",
    "upload_file",
    "attach_file",
    "search",
    "list_models",
    "chat_completion",
]


class FakePlatform(IVectorStoreService, IFileService, IModelService, IChatService):
    """Records every call in order and fails on the call named by fail_at."""

    def __init__(
        self,
        fail_at: Optional[str] = None,
        chunks: Optional[List[SearchChunk]] = None,
        models: Optional[List[Model]] = None,
        answer: str = "Machine learning is a subset of AI.",
        statuses: Optional[List[VectorStoreFileStatus]] = None,
    ):
        self.fail_at = fail_at
        self.chunks = chunks if chunks is not None else [
            SearchChunk(content="Machine Learning is a subset of AI.", score=0.91234),
            SearchChunk(content="Deep Learning is a subset of machine learning.", score=0.8),
        ]
        self.models = models if models is not None else [
            Model(identifier="all-MiniLM-L6-v2", model_type="embedding"),
            Model(identifier="llama3.2:3b", model_type="llm"),
        ]
        self.answer = answer
        self.statuses = list(statuses or [])
        self.calls = []

    def _record(self, call_name: str, **kwargs) -> None:
        self.calls.append((call_name, kwargs))
        if call_name == self.fail_at:
            raise APIStatusError(500, f"{call_name} exploded")

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def create(self, name: str) -> VectorStore:
        self._record("create_vector_store", name=name)
        return VectorStore(id="vs_123", name=name)

    def upload(self, content: bytes, filename: str, mime_type: str, purpose: str) -> UploadedFile:
        self._record("upload_file", content=content, filename=filename, mime_type=mime_type, purpose=purpose)
        return UploadedFile(id="file-abc", filename=filename, purpose=purpose, bytes=len(content))

    def attach_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        self._record("attach_file", vector_store_id=vector_store_id, file_id=file_id)
        return VectorStoreFile(id=file_id, vector_store_id=vector_store_id, status=VectorStoreFileStatus.IN_PROGRESS)

    def retrieve_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        self._record("retrieve_file", vector_store_id=vector_store_id, file_id=file_id)
        status = self.statuses.pop(0) if self.statuses else VectorStoreFileStatus.IN_PROGRESS
        last_error = "parser crashed" if status is VectorStoreFileStatus.FAILED else None
        return VectorStoreFile(id=file_id, vector_store_id=vector_store_id, status=status, last_error=last_error)

    def search(self, vector_store_id: str, query: str, max_num_results: int = 3) -> List[SearchChunk]:
        self._record("search", vector_store_id=vector_store_id, query=query, max_num_results=max_num_results)
        return list(self.chunks)

    def list(self) -> List[Model]:
        self._record("list_models")
        return list(self.models)

    def complete(self, model, system_prompt, user_message, max_tokens=None) -> ChatAnswer:
        self._record(
            "chat_completion",
            model=model,
            system_prompt=system_prompt,
            user_message=user_message,
            max_tokens=max_tokens,
        )
        return ChatAnswer(text=self.answer, model=model, finish_reason="stop")


class FakeClock:
    """Monotonic clock advanced by the fake sleep."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_pipeline(platform: FakePlatform, clock: Optional[FakeClock] = None, **config_overrides) -> RAGPipeline:
    config = PipelineConfig(
        vector_store_name="my-rag-store",
        sample_content="Machine Learning is a subset of AI.",
        sample_filename="ai_concepts.txt",
        sample_mime_type="text/plain",
        file_purpose="assistants",
        query="What is machine learning and how does it relate to AI?",
        max_num_results=3,
        max_tokens=300,
        system_prompt="You are a helpful AI assistant.",
        wait_for_indexing=config_overrides.pop("wait_for_indexing", False),
        indexing_poll_interval=config_overrides.pop("indexing_poll_interval", 1.0),
        indexing_timeout=config_overrides.pop("indexing_timeout", 5.0),
    )
    clock = clock or FakeClock()
    return RAGPipeline(
        vector_stores=platform,
        files=platform,
        models=platform,
        chat=platform,
        config=config,
        output=io.StringIO(),
        sleep=clock.sleep,
        clock=clock,
    )


@pytest.fixture
def platform():
    return FakePlatform()


@pytest.fixture
def clock():
    return FakeClock()
