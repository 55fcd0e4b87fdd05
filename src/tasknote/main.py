"""Application entry point for TaskNote backend server."""

from tasknote.app import App
from tasknote.config import Config
from tasknote.logging import setup_logging
from tasknote.web.runner import run_server


def main() -> None:
    # Missing TASKNOTE_JWT_SECRET or TASKNOTE_DATABASE_URL fails here, before serving
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
