# services/factory.py
from typing import Optional, TextIO

from config import settings
from infrastructure.http_client import ClientConfig
from infrastructure.llama_stack_services import LlamaStackClient
from services.rag_pipeline import PipelineConfig, RAGPipeline

# Provider functions for each component
def get_client_config() -> ClientConfig:
    """Connection settings for the configured Llama Stack server."""
    return ClientConfig.from_settings(settings)

def get_pipeline_config() -> PipelineConfig:
    """Pipeline parameters from settings."""
    return PipelineConfig.from_settings(settings)

def get_llama_stack_client(config: Optional[ClientConfig] = None) -> LlamaStackClient:
    """Create a client. Callers own it and should close it."""
    return LlamaStackClient(config or get_client_config())

def get_rag_pipeline(
    client: LlamaStackClient,
    config: Optional[PipelineConfig] = None,
    output: Optional[TextIO] = None
) -> RAGPipeline:
    """Wire a pipeline to the services of an existing client."""
    return RAGPipeline(
        vector_stores=client.vector_stores,
        files=client.files,
        models=client.models,
        chat=client.chat,
        config=config or get_pipeline_config(),
        output=output
    )
