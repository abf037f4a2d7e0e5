import logging

from fastapi import APIRouter
from mind_mirror.analysis_api.models.error_response import ErrorResponse
from mind_mirror.analysis_api.models.models_response import ModelsResponse
from mind_mirror.analysis_api.deps.gateway_lock import get_gateway
from mind_mirror.shared.errors import GatewayError

LIST_MODELS_FAILED_MESSAGE = "Failed to list available models"

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "/models",
    response_model=ModelsResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["models"],
)
async def list_models():
    """List the models offered by the provider together with the current configuration"""
    gateway = get_gateway()
    if not gateway:
        raise GatewayError("Gateway not initialized")
    try:
        catalog = await gateway.list_models()
    except GatewayError as e:
        logger.error("Error listing models: %s", e)
        raise
    except Exception as e:
        logger.exception("Unexpected error listing models")
        raise GatewayError(LIST_MODELS_FAILED_MESSAGE) from e
    models = catalog.get("models")
    if not isinstance(models, list):
        models = []
    config = gateway.config
    return ModelsResponse(
        success=True,
        models=[model for model in models if isinstance(model, dict)],
        api_version=config.api_version,
        current_model=config.model,
        base_url=config.base_url,
    )
