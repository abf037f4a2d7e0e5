import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from dotenv import load_dotenv
from mind_mirror.analysis_api.routes import router as main_router, root_router
from mind_mirror.analysis_api.deps.gateway_lock import get_gateway, set_gateway
from mind_mirror.analysis_api.configuration.api import ApiConfiguration, get_api_configuration
from mind_mirror.shared.analyser import AnalysisGateway
from mind_mirror.shared.errors import GatewayError, MissingApiKeyError, UNEXPECTED_ERROR_MESSAGE
from mind_mirror.shared.validation import EMPTY_TEXT_MESSAGE
# Load environment variables
load_dotenv()

# OpenAPI/Swagger documentation
description = """
MindMirror AI analyses a piece of text with a Gemini model and returns its
sentiment, recurring themes, tone and a neutral summary.

## Features

* Sentiment, themes, tone and summary of free text
* Automatic retry when the model provider rate limits
* Fallback to alternative models when the configured one is not found
* Model catalog inspection
"""

tags_metadata = [
    {
        "name": "analysis",
        "description": "Text analysis",
    },
    {
        "name": "models",
        "description": "Model catalog and current configuration",
    },
]

logger = logging.getLogger(__name__)


def log_configuration(config: ApiConfiguration) -> None:
    logger.info("MindMirror AI server configuration:")
    logger.info("  - GEMINI_API_KEY: %s", "set" if config.api_key_set else "not set")
    logger.info("  - API Version: %s", config.api_version)
    logger.info("  - Base URL: %s", config.base_url)
    logger.info("  - Model: %s", config.model)
    logger.info("  - Fallback models: %s", ", ".join(config.fallback_models))
    logger.info("  - Max retries: %s", config.max_retries)


@asynccontextmanager
async def lifespan(app: FastAPI):
    gateway = get_gateway()
    owns_gateway = gateway is None
    if owns_gateway:
        configuration = get_api_configuration()
        if not configuration.api_key_set:
            logger.error("GEMINI_API_KEY is not set in .env file")
            raise MissingApiKeyError("GEMINI_API_KEY is not set in .env file")
        gateway = AnalysisGateway(configuration)
        set_gateway(gateway)

    log_configuration(gateway.config)
    if gateway.config.startup_diagnostics:
        await gateway.log_model_diagnostics()

    yield

    if owns_gateway:
        await gateway.aclose()
        set_gateway(None)


# Initialize FastAPI app with enhanced documentation
app = FastAPI(
    title="MindMirror AI",
    description=description,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": UNEXPECTED_ERROR_MESSAGE},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": EMPTY_TEXT_MESSAGE},
    )


app.include_router(
    router=main_router,
    prefix="/api",
)

# Registered last so the catch-all path does not shadow the API
app.include_router(root_router)
