"""
Run the Epoch API with uvicorn.

Usage:
    python -m epoch_api
    epoch-api
"""
from __future__ import annotations

import logging

import uvicorn

from .main import app, configure_logging
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """Configure logging from the environment and serve the app until interrupted."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Epoch API on http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
