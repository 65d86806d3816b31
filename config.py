# config.py
"""Demo configuration. Every value can be overridden from the environment or a .env file."""
from typing import Optional
from pydantic_settings import BaseSettings
from utils.common import get_log_file_path

# Whitespace is kept byte-for-byte: trailing spaces and tab-only lines are part of the sample.
DEFAULT_SAMPLE_CONTENT = (
    "Artificial Intelligence (AI) is a branch of computer science that aims to create intelligent machines that work and react like humans. \n"
    "\t\n"
    "Machine Learning is a subset of AI that enables computers to learn and improve from experience without being explicitly programmed. \n"
    "\t\n"
    "Deep Learning is a subset of machine learning that uses neural networks with multiple layers to model and understand complex patterns in data.\n"
    "\n"
    "Natural Language Processing (NLP) is a field of AI that focuses on the interaction between computers and human language, enabling machines to understand, interpret, and generate human language.\n"
    "\n"
    "Computer Vision is another AI field that enables computers to interpret and understand visual information from the world, such as images and videos.\n"
    "\n"
    "These technologies are transforming industries like healthcare, finance, transportation, and entertainment by automating tasks, improving decision-making, and creating new capabilities."
)


class Settings(BaseSettings):
    """Application configuration"""

    # Logger configuration
    LOGGER_NAME: str = "llama_rag_demo"
    LOG_FILE_PATH: str = get_log_file_path()

    # Platform connection
    BASE_URL: str = "http://localhost:8321"
    API_PREFIX: str = "/v1"
    API_KEY: Optional[str] = None
    REQUEST_TIMEOUT: float = 60.0  # seconds

    # Step 1: vector store
    VECTOR_STORE_NAME: str = "my-rag-store"

    # Step 2: sample document
    SAMPLE_FILENAME: str = "ai_concepts.txt"
    SAMPLE_MIME_TYPE: str = "text/plain"
    FILE_PURPOSE: str = "assistants"
    SAMPLE_CONTENT: str = DEFAULT_SAMPLE_CONTENT

    # Step 3: indexing wait (off: search right after attaching)
    WAIT_FOR_INDEXING: bool = False
    INDEXING_POLL_INTERVAL: float = 1.0
    INDEXING_TIMEOUT: float = 60.0

    # Step 4: search
    QUERY: str = "What is machine learning and how does it relate to AI?"
    MAX_NUM_RESULTS: int = 3

    # Step 5: generation
    MAX_TOKENS: int = 300
    SYSTEM_PROMPT: str = (
        "You are a helpful AI assistant. Use the provided context to answer "
        "questions accurately and concisely."
    )

    # App metadata
    APP_TITLE: str = "LlamaStack RAG Demo"
    APP_VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
