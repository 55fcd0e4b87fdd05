"""Uvicorn server runner."""

import structlog
import uvicorn

from tasknote.app import App
from tasknote.config import Config
from tasknote.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def run_server(app: App, config: Config) -> None:
    """Serve the API on the configured address.

    Uvicorn's own logging config is disabled so its records go through the
    root handler installed by setup_logging. Access lines only in debug.
    """
    fastapi_app = create_fastapi_app(app, config)
    logger.info("server_starting", host=config.host, port=config.port, debug=config.debug)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=None, access_log=config.debug)
