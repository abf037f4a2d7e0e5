"""
MindMirror AI - API entry point

Loads the environment, configures logging and serves the FastAPI app with
uvicorn. Refuses to start without a Gemini API key.
"""
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from mind_mirror.analysis_api.configuration.api import get_api_configuration

logger = logging.getLogger("mind_mirror")


def main() -> int:
    load_dotenv()
    config = get_api_configuration()
    logging.basicConfig(level=config.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s - %(message)s")

    if not config.api_key_set:
        logger.error("GEMINI_API_KEY is not set in .env file")
        return 1

    logger.info("MindMirror AI server is running on http://localhost:%s", config.port)
    uvicorn.run(
        "mind_mirror.analysis_api.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
