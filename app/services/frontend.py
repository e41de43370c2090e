"""Build step for the bundled single-page frontend."""

import logging
import shlex
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class FrontendBuildError(Exception):
    """Raised when the frontend build command cannot be run or exits non-zero."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def build_frontend(settings: "Settings") -> None:
    """Run FRONTEND_BUILD_COMMAND in the working directory, streaming its output."""
    command = shlex.split(settings.FRONTEND_BUILD_COMMAND)
    if not command:
        raise FrontendBuildError("FRONTEND_BUILD_COMMAND is empty")
    logger.info("Building frontend: %s", settings.FRONTEND_BUILD_COMMAND)
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError as e:
        raise FrontendBuildError(
            f"Frontend build exited with status {e.returncode}", e
        ) from e
    except OSError as e:
        raise FrontendBuildError(f"Frontend build could not start: {e!s}", e) from e
    logger.info("Frontend built successfully")
