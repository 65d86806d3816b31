# services/rag_pipeline.py
"""Linear RAG pipeline: store -> upload -> attach -> search -> generate"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TextIO

from config import settings
from core.domain import (
    ChatAnswer, Model, PipelineResult, SearchChunk, UploadedFile, VectorStore, VectorStoreFile
)
from core.enums import FilePurpose, PipelineStep, VectorStoreFileStatus
from core.exceptions import IndexingFailedError, IndexingTimeoutError, NoLLMModelError, PipelineError
from core.interfaces import IChatService, IFileService, IModelService, IVectorStoreService

logger = logging.getLogger(settings.LOGGER_NAME)


@dataclass(frozen=True)
class PipelineConfig:
    """Demo parameters. Defaults come from the loaded settings."""
    vector_store_name: str = settings.VECTOR_STORE_NAME
    sample_content: str = settings.SAMPLE_CONTENT
    sample_filename: str = settings.SAMPLE_FILENAME
    sample_mime_type: str = settings.SAMPLE_MIME_TYPE
    file_purpose: str = settings.FILE_PURPOSE
    query: str = settings.QUERY
    max_num_results: int = settings.MAX_NUM_RESULTS
    max_tokens: int = settings.MAX_TOKENS
    system_prompt: str = settings.SYSTEM_PROMPT
    wait_for_indexing: bool = settings.WAIT_FOR_INDEXING
    indexing_poll_interval: float = settings.INDEXING_POLL_INTERVAL
    indexing_timeout: float = settings.INDEXING_TIMEOUT

    @classmethod
    def from_settings(cls, s=settings) -> 'PipelineConfig':
        return cls(
            vector_store_name=s.VECTOR_STORE_NAME,
            sample_content=s.SAMPLE_CONTENT,
            sample_filename=s.SAMPLE_FILENAME,
            sample_mime_type=s.SAMPLE_MIME_TYPE,
            file_purpose=FilePurpose(s.FILE_PURPOSE).value,
            query=s.QUERY,
            max_num_results=s.MAX_NUM_RESULTS,
            max_tokens=s.MAX_TOKENS,
            system_prompt=s.SYSTEM_PROMPT,
            wait_for_indexing=s.WAIT_FOR_INDEXING,
            indexing_poll_interval=s.INDEXING_POLL_INTERVAL,
            indexing_timeout=s.INDEXING_TIMEOUT,
        )


def build_context(query: str, chunks: Sequence[SearchChunk]) -> str:
    """Numbered retrieved passages followed by the question."""
    lines = ["Based on the following information:\n\n"]
    for i, chunk in enumerate(chunks, start=1):
        lines.append(f"{i}. {chunk.content}\n")
    lines.append(f"\nPlease answer the question: {query}")
    return "".join(lines)


def select_llm_model(models: Sequence[Model]) -> str:
    """Identifier of the first model typed 'llm', in server order."""
    for model in models:
        if model.is_llm:
            return model.identifier
    raise NoLLMModelError()


class RAGPipeline:
    """
    Runs the demo against the platform services, printing progress as it goes.

    Each step's output feeds the next. The first failure raises PipelineError
    tagged with the failing step; completed steps are not rolled back.
    """

    def __init__(
        self,
        vector_stores: IVectorStoreService,
        files: IFileService,
        models: IModelService,
        chat: IChatService,
        config: Optional[PipelineConfig] = None,
        output: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.vector_stores = vector_stores
        self.files = files
        self.models = models
        self.chat = chat
        self.config = config or PipelineConfig()
        self.output = output
        self._sleep = sleep
        self._clock = clock

    def _print(self, line: str = "") -> None:
        print(line, file=self.output)

    # ============= Steps =============

    def create_vector_store(self) -> VectorStore:
        self._print("=== Step 1: Creating Vector Store ===")
        try:
            store = self.vector_stores.create(self.config.vector_store_name)
        except Exception as e:
            raise PipelineError(PipelineStep.CREATE_VECTOR_STORE, e) from e
        self._print(f"Created vector store: {store.name} (ID: {store.id})")
        return store

    def upload_document(self) -> UploadedFile:
        self._print("\n=== Step 2: Uploading Sample File ===")
        try:
            uploaded = self.files.upload(
                self.config.sample_content.encode("utf-8"),
                self.config.sample_filename,
                self.config.sample_mime_type,
                self.config.file_purpose,
            )
        except Exception as e:
            raise PipelineError(PipelineStep.UPLOAD_FILE, e) from e
        self._print(f"Uploaded file: {uploaded.filename} (ID: {uploaded.id})")
        return uploaded

    def attach_file(self, store: VectorStore, uploaded: UploadedFile) -> VectorStoreFile:
        self._print("\n=== Step 3: Attaching File to Vector Store ===")
        try:
            attachment = self.vector_stores.attach_file(store.id, uploaded.id)
        except Exception as e:
            raise PipelineError(PipelineStep.ATTACH_FILE, e) from e
        self._print("File attached to vector store successfully")
        self._print("Waiting for file processing to complete...")

        if self.config.wait_for_indexing:
            attachment = self.wait_for_indexing(store.id, uploaded.id, attachment)
        return attachment

    def wait_for_indexing(
        self,
        vector_store_id: str,
        file_id: str,
        attachment: Optional[VectorStoreFile] = None
    ) -> VectorStoreFile:
        """Poll the attachment until the server reports a terminal status."""
        deadline = self._clock() + self.config.indexing_timeout
        while attachment is None or not attachment.status.is_terminal:
            if self._clock() >= deadline:
                raise IndexingTimeoutError(file_id, self.config.indexing_timeout)
            self._sleep(self.config.indexing_poll_interval)
            try:
                attachment = self.vector_stores.retrieve_file(vector_store_id, file_id)
            except Exception as e:
                raise PipelineError(PipelineStep.ATTACH_FILE, e) from e
            logger.debug(f"File {file_id} indexing status: {attachment.status.value}")

        if attachment.status is not VectorStoreFileStatus.COMPLETED:
            raise IndexingFailedError(file_id, attachment.status.value, attachment.last_error)
        logger.info(f"File {file_id} indexed")
        return attachment

    def search(self, store: VectorStore) -> List[SearchChunk]:
        self._print("\n=== Step 4: Running RAG Query ===")
        self._print(f"Query: {self.config.query}")
        try:
            chunks = self.vector_stores.search(store.id, self.config.query, self.config.max_num_results)
        except Exception as e:
            raise PipelineError(PipelineStep.SEARCH, e) from e

        self._print(f"\nFound {len(chunks)} relevant chunks:")
        for i, chunk in enumerate(chunks, start=1):
            self._print(f"\n--- Chunk {i} ---")
            self._print(f"Content: {chunk.content}")
            self._print(f"Score: {chunk.score:.4f}")
        return chunks

    def select_model(self) -> str:
        try:
            models = self.models.list()
        except Exception as e:
            raise PipelineError(PipelineStep.LIST_MODELS, e) from e
        model_id = select_llm_model(models)
        logger.info(f"Selected model '{model_id}' out of {len(models)}")
        return model_id

    def generate_answer(self, prompt: str, model_id: str) -> ChatAnswer:
        try:
            answer = self.chat.complete(
                model=model_id,
                system_prompt=self.config.system_prompt,
                user_message=prompt,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            raise PipelineError(PipelineStep.GENERATE_ANSWER, e) from e

        if answer.text:
            self._print(f"\nEnhanced Answer:\n{answer.text}")
        else:
            logger.warning("Model returned no assistant text.")
        return answer

    # ============= Run =============

    def run(self) -> PipelineResult:
        """Execute every step in order. Raises PipelineError on the first failure."""
        logger.info("Starting RAG pipeline")
        store = self.create_vector_store()
        uploaded = self.upload_document()
        attachment = self.attach_file(store, uploaded)
        chunks = self.search(store)

        self._print("\n=== Step 5: Generating Enhanced Answer ===")
        prompt = build_context(self.config.query, chunks)
        model_id = self.select_model()
        answer = self.generate_answer(prompt, model_id)

        logger.info("RAG pipeline finished")
        return PipelineResult(
            vector_store=store,
            file=uploaded,
            attachment=attachment,
            chunks=chunks,
            model_id=model_id,
            prompt=prompt,
            answer=answer,
        )
