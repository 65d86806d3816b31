# infrastructure/http_client.py
"""HTTP transport for the Llama Stack API"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from config import settings
from core.exceptions import APIConnectionError, APIStatusError, APITimeoutError, ResponseFormatError

logger = logging.getLogger(settings.LOGGER_NAME)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one platform client"""
    base_url: str = "http://localhost:8321"
    api_prefix: str = "/v1"
    timeout: Optional[float] = 60.0
    api_key: Optional[str] = None

    @classmethod
    def from_settings(cls, s=settings) -> 'ClientConfig':
        return cls(
            base_url=s.BASE_URL,
            api_prefix=s.API_PREFIX,
            timeout=s.REQUEST_TIMEOUT,
            api_key=s.API_KEY,
        )


class HTTPClient:
    """
    Thin wrapper over a requests.Session bound to one ClientConfig.

    Every failure is raised as a PlatformError subclass; nothing is retried.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        if config.api_key:
            self.session.headers["Authorization"] = f"Bearer {config.api_key}"

    def url(self, path: str) -> str:
        base = self.config.base_url.rstrip("/")
        prefix = "/" + self.config.api_prefix.strip("/") if self.config.api_prefix.strip("/") else ""
        return f"{base}{prefix}/{path.lstrip('/')}"

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("POST", path, json=json)

    def post_multipart(self, path: str, files: Dict[str, Any], data: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("POST", path, files=files, data=data)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.url(path)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"Request to {url} timed out after {self.config.timeout} seconds.")
            raise APITimeoutError(f"request to {url} timed out") from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Cannot connect to {self.config.base_url}. Is the Llama Stack server running?")
            raise APIConnectionError(f"cannot connect to {self.config.base_url}: {e}") from e
        except requests.exceptions.HTTPError as e:
            logger.error(f"Platform returned an error: {e.response.status_code} {e.response.text}")
            raise APIStatusError(e.response.status_code, e.response.text, url) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {url} is not valid JSON")
            raise ResponseFormatError(f"invalid JSON from {url}") from e

    def close(self) -> None:
        self.session.close()
