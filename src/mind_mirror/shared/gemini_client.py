"""
Gemini REST Client

This module provides a thin async client for the Gemini generative-language
REST API. It handles URL building, API key passing and transport errors;
interpreting status codes and payloads is left to the caller.
"""
import logging
from typing import Any, Optional

import httpx

from mind_mirror.shared.errors import TransportError

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Client for the Gemini ``models`` and ``generateContent`` endpoints.
    """

    def __init__(self,
                 api_key: str,
                 base_url: str = "https://generativelanguage.googleapis.com",
                 api_version: str = "v1beta",
                 timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the Gemini client.

        Args:
            api_key (str): Gemini API key, sent as the ``key`` query parameter
            base_url (str): Base URL of the generative-language API
            api_version (str): API version path segment (e.g. ``v1beta``)
            timeout (float): Connect/read timeout in seconds
            transport (Optional[httpx.AsyncBaseTransport]): Custom transport,
                used by tests to simulate the provider
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version.strip("/")

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def models_path(self) -> str:
        return f"/{self.api_version}/models"

    def generate_content_path(self, model_name: str) -> str:
        return f"/{self.api_version}/models/{model_name}:generateContent"

    async def generate_content(self, model_name: str, prompt: str) -> httpx.Response:
        """
        Send a single generateContent request.

        Args:
            model_name (str): Model to invoke
            prompt (str): Full prompt text

        Returns:
            httpx.Response: The raw response, whatever its status code

        Raises:
            TransportError: if the request could not be completed
        """
        request_body = {"contents": [{"parts": [{"text": prompt}]}]}
        return await self._send("POST", self.generate_content_path(model_name), json=request_body)

    async def list_models(self) -> httpx.Response:
        """
        Request the provider's model catalog.

        Returns:
            httpx.Response: The raw response, whatever its status code
        """
        return await self._send("GET", self.models_path())

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, params={"key": self.api_key}, **kwargs)
        except httpx.HTTPError as e:
            logger.error("HTTP request error: %s %s: %s", method, path, e)
            raise TransportError(f"Request failed: {e}") from e
        except ValueError as e:
            # Raised while encoding the request, e.g. lone surrogates in the prompt
            logger.error("Could not encode request: %s %s: %s", method, path, e)
            raise TransportError(f"Request failed: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()


def read_json(response: httpx.Response) -> Any:
    """Decode a JSON response body, or return None when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None
