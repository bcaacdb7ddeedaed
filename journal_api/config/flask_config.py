from flask import Flask

from journal_api.config.logging_config import configure_logging
from journal_api.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["JSON_AS_ASCII"] = False

    configure_logging(settings.log_level)
