import logging
import os
from typing import Any, Dict, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

API_URL = os.getenv("MIND_MIRROR_API_URL", "http://localhost:3000").rstrip("/")
# The gateway may spend several rate-limit backoffs on one request
REQUEST_TIMEOUT = 300.0


def request_analysis(
    text: str,
    api_url: str = API_URL,
    client: Optional[httpx.Client] = None,
) -> Tuple[bool, Dict[str, Any]]:
    """Post text to the gateway and return (ok, body).

    ``body`` is always a dict; anything the gateway sends that is not a JSON
    object is reported through its ``error`` key.
    """
    post = client.post if client is not None else httpx.post
    try:
        response = post(f"{api_url}/api/analyze", json={"text": text}, timeout=REQUEST_TIMEOUT)
    except httpx.HTTPError as e:
        logger.error("Gateway request failed: %s", e)
        return False, {"error": f"Could not reach the analysis service: {str(e)}"}

    unexpected = {"error": f"Unexpected response from server (status {response.status_code})"}
    try:
        body = response.json()
    except ValueError:
        return False, unexpected
    if not isinstance(body, dict):
        return False, unexpected
    return response.is_success and bool(body.get("success")), body
