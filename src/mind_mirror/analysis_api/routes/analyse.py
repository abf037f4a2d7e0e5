import logging

from fastapi import APIRouter
from mind_mirror.analysis_api.models.analyze_request import AnalyzeRequest
from mind_mirror.analysis_api.models.analyze_response import AnalyzeResponse
from mind_mirror.analysis_api.models.error_response import ErrorResponse
from mind_mirror.analysis_api.deps.gateway_lock import get_gateway
from mind_mirror.shared.errors import GatewayError, UNEXPECTED_ERROR_MESSAGE
from mind_mirror.shared.validation import validate_text

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["analysis"],
)
async def analyze_text(request: AnalyzeRequest):
    """Analyze sentiment, themes, tone and summary of the submitted text"""
    gateway = get_gateway()
    if not gateway:
        raise GatewayError("Gateway not initialized")
    text = validate_text(request.text, gateway.config.max_text_length)
    try:
        analysis = await gateway.analyze(text)
    except GatewayError as e:
        logger.error("Error analyzing text: %s", e)
        raise
    except Exception as e:
        logger.exception("Unexpected error analyzing text")
        raise GatewayError(UNEXPECTED_ERROR_MESSAGE) from e
    return AnalyzeResponse(success=True, analysis=analysis)
