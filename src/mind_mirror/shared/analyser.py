import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from mind_mirror.analysis_api.configuration.api import ApiConfiguration
from mind_mirror.analysis_api.models.analysis_result import AnalysisResult
from mind_mirror.shared.errors import (
    AllModelsFailed,
    GatewayError,
    InvalidResponseShape,
    RateLimitExceeded,
    RemoteApiError,
)
from mind_mirror.shared.gemini_client import GeminiClient, read_json
from mind_mirror.shared.normalization import parse_model_text
from mind_mirror.shared.prompt import build_prompt

logger = logging.getLogger(__name__)

ALL_MODELS_FAILED_MESSAGE = (
    "All models failed. Check available models at /api/models or in server logs."
)

_LEADING_INT = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class RetryState:
    """Position of one outbound call chain in the rate-limit retry loop."""

    attempt: int = 0
    max_retries: int = 3
    delay_seconds: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.max_retries

    def next(self, delay_seconds: int) -> "RetryState":
        return RetryState(self.attempt + 1, self.max_retries, delay_seconds)


def _parse_delay(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def extract_retry_delay(payload: Any, default: int = 30) -> int:
    """Return the retry delay in seconds advertised by a 429 error payload.

    Gemini reports it as ``error.details[].retryDelay`` (e.g. ``"17s"``); the
    first detail carrying one wins. Falls back to ``default`` when absent or
    unparsable.
    """
    error = payload.get("error") if isinstance(payload, dict) else None
    details = error.get("details") if isinstance(error, dict) else None
    if not isinstance(details, list):
        return default

    for detail in details:
        if isinstance(detail, dict) and detail.get("retryDelay"):
            delay = _parse_delay(detail["retryDelay"])
            return default if delay is None else delay
    return default


def remote_error_message(payload: Any, status_code: int) -> str:
    """Pick the most useful message out of a provider error payload."""
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        if error.get("message"):
            return str(error["message"])
        if error.get("code"):
            return str(error["code"])
    return f"API request failed with status {status_code}"


def is_model_not_found(error: Exception) -> bool:
    return "not found" in str(error).lower()


class AnalysisGateway:
    """Sends text to Gemini and turns the reply into an AnalysisResult.

    ``call_model`` owns the rate-limit retry loop for one model; ``analyze``
    adds the fallback over alternative model names when the configured one
    does not exist.
    """

    config: ApiConfiguration

    def __init__(
        self,
        configuration: ApiConfiguration,
        client: Optional[GeminiClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.config = configuration
        self.client = client or GeminiClient(
            api_key=configuration.api_key or "",
            base_url=configuration.base_url,
            api_version=configuration.api_version,
            timeout=configuration.request_timeout,
        )
        self._sleep = sleep

    async def analyze(self, text: str) -> AnalysisResult:
        """Analyze text with the configured model, falling back to alternates if it is not found."""
        primary_model = self.config.model
        try:
            return await self.call_model(text, primary_model)
        except GatewayError as e:
            if not is_model_not_found(e):
                raise
            logger.warning("Model %s not found, trying alternative models...", primary_model)

        for alt_model in self.config.fallback_models:
            if alt_model == primary_model:
                continue
            logger.info("Trying model: %s", alt_model)
            try:
                analysis = await self.call_model(text, alt_model)
            except GatewayError as e:
                logger.warning("Model %s failed: %s", alt_model, e)
                continue
            logger.info("Successfully used model: %s", alt_model)
            return analysis

        raise AllModelsFailed(ALL_MODELS_FAILED_MESSAGE)

    async def call_model(
        self,
        text: str,
        model_name: Optional[str] = None,
        attempt: int = 0,
        max_retries: Optional[int] = None,
    ) -> AnalysisResult:
        """
        Call one model, retrying on rate limiting.

        Args:
            text (str): Already validated user text
            model_name (Optional[str]): Model to call, defaults to the configured model
            attempt (int): Number of attempts already spent on this chain
            max_retries (Optional[int]): Retry budget, defaults to the configured one

        Returns:
            AnalysisResult: The normalized analysis

        Raises:
            RateLimitExceeded: still rate limited once the retries are spent
            RemoteApiError: any other non-200 answer
            InvalidResponseShape: a 200 answer without candidate text
            TransportError: the provider could not be reached
        """
        model_name = model_name or self.config.model
        if max_retries is None:
            max_retries = self.config.max_retries
        prompt = build_prompt(text)
        state = RetryState(attempt=attempt, max_retries=max_retries)

        while True:
            response = await self.client.generate_content(model_name, prompt)
            if response.status_code == 200:
                return self._read_analysis(response)

            logger.error(
                "Gemini API error response: model=%s status=%s body=%s",
                model_name, response.status_code, response.text[:1000],
            )
            payload = read_json(response)

            if response.status_code == 429:
                if state.exhausted:
                    raise RateLimitExceeded(
                        f"Rate limit exceeded for model {model_name} after {state.max_retries} retries: "
                        f"{remote_error_message(payload, response.status_code)}"
                    )
                state = state.next(extract_retry_delay(payload, self.config.default_retry_delay))
                logger.info(
                    "Rate limit (429) hit. Waiting %s seconds before retry %s/%s...",
                    state.delay_seconds, state.attempt, state.max_retries,
                )
                await self._sleep(state.delay_seconds)
                continue

            raise RemoteApiError(
                remote_error_message(payload, response.status_code),
                remote_status=response.status_code,
            )

    def _read_analysis(self, response: httpx.Response) -> AnalysisResult:
        payload = read_json(response)
        if not isinstance(payload, dict):
            raise InvalidResponseShape("Failed to parse API response: body is not a JSON object")

        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise InvalidResponseShape("Invalid response format: missing candidates")
        candidate = candidates[0]

        finish_reason = candidate.get("finishReason")
        if finish_reason and finish_reason != "STOP":
            logger.warning("Gemini API finishReason: %s", finish_reason)

        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            raise InvalidResponseShape("Invalid response format: missing content.parts")

        text_response = parts[0].get("text")
        if not text_response or not isinstance(text_response, str):
            raise InvalidResponseShape("Empty response from Gemini API")

        return parse_model_text(text_response)

    async def list_models(self) -> Dict[str, Any]:
        """Return the provider's model catalog."""
        response = await self.client.list_models()
        payload = read_json(response)
        if response.status_code != 200:
            error = payload.get("error") if isinstance(payload, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            raise RemoteApiError(
                message or f"Failed to list models: {response.status_code}",
                remote_status=response.status_code,
            )
        if not isinstance(payload, dict):
            raise InvalidResponseShape("Failed to parse models list")
        return payload

    async def available_model_names(self) -> List[str]:
        """Short names of the catalog models that support generateContent."""
        catalog = await self.list_models()
        names = []
        models = catalog.get("models")
        for model in models if isinstance(models, list) else []:
            if not isinstance(model, dict):
                continue
            if "generateContent" in (model.get("supportedGenerationMethods") or []):
                names.append(str(model.get("name", "")).split("/")[-1])
        return names

    async def log_model_diagnostics(self) -> None:
        """Log which models can serve generateContent and whether the configured one is among them."""
        logger.info("Diagnostics: checking available models...")
        try:
            names = await self.available_model_names()
        except GatewayError as e:
            logger.error("Error while checking available models: %s", e)
            logger.warning("Server will start, but model availability is unknown. "
                           "Check the API key or API availability in your region.")
            return

        if not names:
            logger.warning("Could not get the list of models")
            return

        logger.info("Available models (%d):", len(names))
        for name in names:
            marker = " (CURRENT)" if name == self.config.model else ""
            logger.info("  - %s%s", name, marker)
        if self.config.model not in names:
            logger.warning(
                "Configured model '%s' was not found among the available models. "
                "Use one of the models above or check /api/models",
                self.config.model,
            )

    async def aclose(self) -> None:
        await self.client.aclose()
