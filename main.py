# main.py
"""Entry point: runs the RAG demo against a local Llama Stack server"""
import logging
from typing import Optional

from config import settings
from core.domain import PipelineResult
from core.exceptions import PipelineError
from services.factory import get_llama_stack_client, get_rag_pipeline
from services.logger_config import setup_logging

logger = logging.getLogger(settings.LOGGER_NAME)


def run_demo() -> Optional[PipelineResult]:
    """Run the pipeline once. Failures are reported, not raised."""
    print(f"=== {settings.APP_TITLE} ===\n")

    with get_llama_stack_client() as client:
        pipeline = get_rag_pipeline(client)
        try:
            result = pipeline.run()
        except PipelineError as e:
            logger.error(f"RAG demo failed at '{e.step.name}': {e}", exc_info=e.cause is not None)
            print(f"RAG Demo failed: {e}")
            return None

    print("\n=== Demo Complete! ===")
    return result


def main() -> None:
    setup_logging()
    logger.info(f"Using Llama Stack at {settings.BASE_URL}")
    run_demo()


if __name__ == "__main__":
    main()
