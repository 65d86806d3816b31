# core/exceptions.py
"""Error taxonomy for the platform client and the RAG pipeline"""
from typing import Optional

from core.enums import PipelineStep


# ============= Platform (transport / payload) errors =============

class PlatformError(Exception):
    """Base class for failures talking to the remote platform"""


class APIConnectionError(PlatformError):
    """The platform could not be reached"""


class APITimeoutError(APIConnectionError):
    """The platform did not answer within the configured timeout"""


class APIStatusError(PlatformError):
    """The platform answered with a 4xx/5xx status"""

    def __init__(self, status_code: int, body: str, url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status_code} from {url}: {body}" if url else f"HTTP {status_code}: {body}")


class ResponseFormatError(PlatformError):
    """A response body could not be parsed or carried an unrecognized variant"""


# ============= Pipeline errors =============

class PipelineError(Exception):
    """Raised when a pipeline step fails. Carries the step whose prefix identifies it."""

    def __init__(self, step: PipelineStep, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.step = step
        self.cause = cause
        self.message = message or (str(cause) if cause is not None else "")
        super().__init__(str(self))

    def __str__(self):
        if not self.message:
            return self.step.prefix
        return f"{self.step.prefix}: {self.message}"


class NoLLMModelError(PipelineError):
    """No model with type 'llm' was listed by the platform"""

    def __init__(self):
        super().__init__(PipelineStep.LIST_MODELS)

    def __str__(self):
        return "no LLM model available for generation"


class IndexingFailedError(PipelineError):
    """The platform reported that indexing an attached file failed"""

    def __init__(self, file_id: str, status: str, last_error: Optional[str] = None):
        self.file_id = file_id
        self.status = status
        detail = f"file {file_id} ended with status '{status}'"
        if last_error:
            detail += f" ({last_error})"
        super().__init__(PipelineStep.ATTACH_FILE, message=detail)


class IndexingTimeoutError(PipelineError):
    """Indexing did not complete within the configured timeout"""

    def __init__(self, file_id: str, timeout: float):
        self.file_id = file_id
        self.timeout = timeout
        super().__init__(PipelineStep.ATTACH_FILE)

    def __str__(self):
        return f"indexing timed out after {self.timeout:g}s waiting for file {self.file_id}"
