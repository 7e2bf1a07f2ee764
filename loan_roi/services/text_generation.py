"""
Client for the hosted text-generation service that writes investment reports.

The client receives its API key and model name through an explicit
TextGenerationConfig; nothing here reads application settings directly.
"""

import logging
from typing import Optional

import requests
from pydantic import BaseModel, Field
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from loan_roi.config import Settings

logger = logging.getLogger(__name__)


class TextGenerationError(Exception):
    """Raised when the text-generation service cannot produce a response."""


class TextGenerationConfig(BaseModel):
    """Connection parameters for the text-generation service."""

    api_key: str = Field(..., min_length=1, description="Service API key")
    model: str = Field(default="gemini-1.5-flash", description="Model name")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Service base URL",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["TextGenerationConfig"]:
        """Build a config from settings, or None when no API key is set."""
        if not settings.textgen_api_key:
            return None
        return cls(
            api_key=settings.textgen_api_key,
            model=settings.textgen_model,
            base_url=settings.textgen_base_url,
            timeout=settings.textgen_timeout_seconds,
        )


class TextGenerationClient:
    """Sends a prompt to the generateContent endpoint and returns the text."""

    def __init__(self, config: TextGenerationConfig):
        self.config = config
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def close(self) -> None:
        """Release the pooled connections held by the session."""
        self.session.close()

    def __enter__(self) -> "TextGenerationClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def generate(self, prompt: str) -> str:
        """
        Generate free text for a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            Text of the first candidate

        Raises:
            TextGenerationError: On transport errors or an unexpected response
        """
        url = f"{self.config.base_url}/models/{self.config.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = self.session.post(
                url,
                params={"key": self.config.api_key},
                json=payload,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Text generation request to {self.config.model} failed: {e}")
            raise TextGenerationError(f"Text generation request failed: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected text generation response: {data!r}")
            raise TextGenerationError("Malformed text generation response") from e
