# journal_api/config/logging_config.py
import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # evita handler duplicado quando create_app() roda mais de uma vez (testes)
    if getattr(root, "_journal_api_configured", False):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root._journal_api_configured = True  # type: ignore[attr-defined]
