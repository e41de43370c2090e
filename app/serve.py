"""
Process entrypoint: build the frontend in production, then serve the API.

  python -m app.serve

NODE_ENV=production runs FRONTEND_BUILD_COMMAND first and exits if it fails.
"""

import logging
import sys

import uvicorn

from app.core.config import get_settings
from app.services.frontend import FrontendBuildError, build_frontend

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the server on HOST:PORT until interrupted."""
    settings = get_settings()
    if settings.is_production:
        try:
            build_frontend(settings)
        except FrontendBuildError as e:
            logger.error("Failed to build frontend: %s", e.message)
            return 1
    logger.info("Server starting on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
