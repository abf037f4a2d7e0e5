import json
from typing import Any, Dict, List, Optional, Union

import httpx
import pytest

from mind_mirror.analysis_api.configuration.api import ApiConfiguration
from mind_mirror.analysis_api.deps.gateway_lock import set_gateway
from mind_mirror.shared.analyser import AnalysisGateway
from mind_mirror.shared.gemini_client import GeminiClient


def candidate_reply(text: str, finish_reason: str = "STOP") -> Dict[str, Any]:
    """Body of a successful generateContent response carrying ``text``."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": finish_reason}]}


def analysis_reply(**fields: Any) -> Dict[str, Any]:
    return candidate_reply(json.dumps(fields))


def rate_limited(retry_delay: Optional[str] = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}
    if retry_delay is not None:
        error["details"] = [
            {"@type": "type.googleapis.com/google.rpc.QuotaFailure"},
            {"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": retry_delay},
        ]
    return {"error": error}


def not_found(model_name: str) -> Dict[str, Any]:
    return {"error": {"code": 404, "message": f"models/{model_name} is not found for API version v1beta",
                      "status": "NOT_FOUND"}}


Reply = Union[tuple, Exception]


class ScriptedProvider:
    """Simulated Gemini endpoint answering from scripted replies.

    ``replies`` is either a list shared by every model or a dict keyed by model
    name. Each reply is a ``(status, body)`` tuple, where a dict body is sent as
    JSON and a str body as plain text, or an exception to raise.
    """

    def __init__(self, replies: Union[List[Reply], Dict[str, List[Reply]], None] = None,
                 models: Optional[Reply] = None):
        self.replies = replies if replies is not None else []
        self.models = models
        self.requests: List[httpx.Request] = []

    @staticmethod
    def model_of(request: httpx.Request) -> str:
        return request.url.path.split("/")[-1].split(":")[0]

    @property
    def called_models(self) -> List[str]:
        return [self.model_of(r) for r in self.requests if r.url.path.endswith(":generateContent")]

    def _respond(self, request: httpx.Request, reply: Reply) -> httpx.Response:
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/models"):
            return self._respond(request, self.models or (200, {"models": []}))

        if isinstance(self.replies, dict):
            queue = self.replies.get(self.model_of(request), [])
        else:
            queue = self.replies
        if not queue:
            return httpx.Response(500, json={"error": {"message": "no scripted reply left"}})
        return self._respond(request, queue.pop(0))


@pytest.fixture
def configuration():
    return ApiConfiguration(
        api_key="test-key",
        base_url="https://generativelanguage.test",
        api_version="v1beta",
        model="gemma-3-27b-it",
        fallback_models=["gemini-1.5-flash-latest", "gemini-1.5-flash", "gemini-1.5-pro"],
        max_retries=3,
        default_retry_delay=30,
        startup_diagnostics=False,
    )


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_gateway(configuration, sleeps):
    def _make(provider: ScriptedProvider, config: Optional[ApiConfiguration] = None) -> AnalysisGateway:
        config = config or configuration

        async def fake_sleep(seconds):
            sleeps.append(seconds)

        client = GeminiClient(
            api_key=config.api_key,
            base_url=config.base_url,
            api_version=config.api_version,
            transport=httpx.MockTransport(provider.handler),
        )
        return AnalysisGateway(config, client=client, sleep=fake_sleep)

    return _make


@pytest.fixture
def installed_gateway(make_gateway):
    """Install a scripted gateway for the API app and remove it afterwards."""
    def _install(provider: ScriptedProvider, config: Optional[ApiConfiguration] = None) -> AnalysisGateway:
        gateway = make_gateway(provider, config)
        set_gateway(gateway)
        return gateway

    yield _install
    set_gateway(None)
