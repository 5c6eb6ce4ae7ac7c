"""
Gemini API client for Smart Farming system.

This module sends prompts to the Generative Language ``generateContent``
endpoint and returns the text of the first candidate.

Key features:
- Sync (requests) and async (httpx) variants sharing one request format
- Provider error messages surfaced in GeminiAPIError
- No retries: a failed call is reported to the caller immediately
"""

import asyncio
import atexit
import logging
from typing import Any, Dict, Optional, Set

import httpx
import requests
from requests.adapters import HTTPAdapter

from app.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to generate content"

# HTTP connection pool sizes
SESSION_POOL_CONNECTIONS = 10
SESSION_POOL_MAXSIZE = 50


class GeminiError(Exception):
    """Base exception for Gemini API errors."""

    pass


class GeminiTimeoutError(GeminiError):
    """Raised when the Gemini call times out."""

    pass


class GeminiAPIError(GeminiError):
    """Raised when Gemini answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_request_body(prompt: str) -> Dict[str, Any]:
    """Request body for a single-turn text prompt."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_text(payload: Any) -> str:
    """
    Return ``candidates[0].content.parts[0].text`` or "" if the path is absent.

    Examples:
        >>> extract_text({"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})
        'hi'
        >>> extract_text({"candidates": []})
        ''
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


def _error_message(response_json: Any) -> str:
    try:
        message = response_json["error"]["message"]
    except (KeyError, TypeError):
        return DEFAULT_ERROR_MESSAGE
    return message or DEFAULT_ERROR_MESSAGE


def _validate_prompt(prompt: str) -> None:
    if not prompt or not prompt.strip():
        raise ValueError("prompt cannot be empty")


class GeminiClient:
    """
    Thin client for the Gemini ``generateContent`` endpoint.

    Example:
        >>> client = get_gemini_client()
        >>> text = client.generate_content("Recommend crops for clay soil")
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta/models",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key: Provider API key, sent as the ``key`` query parameter
            model: Model identifier
            api_base: Base URL of the models endpoint
            timeout: Request timeout in seconds, None for no timeout
            session: Optional pre-configured requests session (for testing)
            async_client: Optional pre-configured httpx client (for testing)
        """
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._async_client = async_client
        self._close_tasks: Set[asyncio.Task] = set()

    @property
    def url(self) -> str:
        return f"{self.api_base}/{self.model}:generateContent"

    def _get_session(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            # max_retries=0: failures surface on the first attempt
            adapter = HTTPAdapter(
                pool_connections=SESSION_POOL_CONNECTIONS,
                pool_maxsize=SESSION_POOL_MAXSIZE,
                max_retries=0,
            )
            session.mount("http://", adapter)
            session.mount("https://", adapter)
            self._session = session
        return self._session

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            limits = httpx.Limits(
                max_keepalive_connections=SESSION_POOL_CONNECTIONS,
                max_connections=SESSION_POOL_MAXSIZE,
            )
            self._async_client = httpx.AsyncClient(limits=limits, timeout=self.timeout)
        return self._async_client

    def generate_content(self, prompt: str) -> str:
        """
        Send a prompt and return the generated text.

        Args:
            prompt: Non-empty prompt text

        Returns:
            Text of the first candidate ("" if the response has none)

        Raises:
            ValueError: If prompt is empty
            GeminiAPIError: If the provider returns a non-success status
            GeminiTimeoutError: If the request times out
            GeminiError: If the request fails for any other reason
        """
        _validate_prompt(prompt)
        logger.info(f"Calling {self.model} generateContent ({len(prompt)} chars)")

        try:
            response = self._get_session().post(
                self.url,
                params={"key": self.api_key},
                json=build_request_body(prompt),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Gemini call timed out: {e}")
            raise GeminiTimeoutError(f"Gemini call timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise GeminiError(f"Gemini request failed: {e}") from e

        if not response.ok:
            try:
                message = _error_message(response.json())
            except ValueError:
                message = DEFAULT_ERROR_MESSAGE
            logger.error(f"Gemini returned HTTP {response.status_code}: {message}")
            raise GeminiAPIError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise GeminiError(f"Gemini returned invalid JSON: {e}") from e

        text = extract_text(payload)
        logger.info(f"Gemini response received ({len(text)} chars)")
        return text

    async def agenerate_content(self, prompt: str) -> str:
        """
        Async version of generate_content().

        Raises:
            ValueError: If prompt is empty
            GeminiAPIError: If the provider returns a non-success status
            GeminiTimeoutError: If the request times out
            GeminiError: If the request fails for any other reason
        """
        _validate_prompt(prompt)
        logger.info(f"Calling {self.model} generateContent async ({len(prompt)} chars)")

        try:
            response = await self._get_async_client().post(
                self.url,
                params={"key": self.api_key},
                json=build_request_body(prompt),
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as e:
            logger.error(f"Async Gemini call timed out: {e}")
            raise GeminiTimeoutError(f"Gemini call timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Async Gemini request failed: {e}")
            raise GeminiError(f"Gemini request failed: {e}") from e

        if not response.is_success:
            try:
                message = _error_message(response.json())
            except ValueError:
                message = DEFAULT_ERROR_MESSAGE
            logger.error(f"Gemini returned HTTP {response.status_code}: {message}")
            raise GeminiAPIError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise GeminiError(f"Gemini returned invalid JSON: {e}") from e

        text = extract_text(payload)
        logger.info(f"Async Gemini response received ({len(text)} chars)")
        return text

    def close(self) -> None:
        """Close the pooled HTTP connections."""
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._async_client is not None:
            client = self._async_client
            self._async_client = None
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                asyncio.run(client.aclose())
                return
            # Inside a running loop: keep the task referenced until it finishes
            task = loop.create_task(client.aclose())
            self._close_tasks.add(task)
            task.add_done_callback(self._close_tasks.discard)


# Module-level singleton instance
_gemini_client: Optional[GeminiClient] = None


def get_gemini_client() -> GeminiClient:
    """
    Get the singleton GeminiClient configured from settings.

    Returns:
        GeminiClient instance
    """
    global _gemini_client
    if _gemini_client is None:
        settings = get_settings()
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set, Gemini calls will be rejected")
        _gemini_client = GeminiClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout=settings.gemini_timeout,
        )
        atexit.register(reset_gemini_client)
    return _gemini_client


def reset_gemini_client() -> None:
    """
    Close and drop the singleton client.

    This is primarily used for testing purposes.
    """
    global _gemini_client
    if _gemini_client is not None:
        _gemini_client.close()
        _gemini_client = None
