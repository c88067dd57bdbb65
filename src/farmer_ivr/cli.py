from __future__ import annotations

import logging
import sys

import uvicorn

from .config import ConfigurationError, load_settings
from .main import create_app

logger = logging.getLogger(__name__)


def serve() -> None:
    """
    Start the HTTP server.

    Settings are loaded once here; missing Twilio credentials stop the
    process before it binds the port.
    """
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("%s", exc)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    logger.info("Server is running on port %s", settings.port)
    logger.info(
        "Farmer mobile number configured: %s",
        "Yes" if settings.farmer_mobile_configured else "No",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main() -> None:
    serve()


if __name__ == "__main__":
    main()
