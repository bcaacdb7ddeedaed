# journal_api/main.py
from __future__ import annotations

import click
from flask import Flask
from flask_cors import CORS

from journal_api.api.middlewares.error_handler import register_error_handlers
from journal_api.api.routes import register_routes
from journal_api.config.flask_config import configure_app
from journal_api.config.settings import settings
from journal_api.infrastructure.database.session import init_db

import journal_api.infrastructure.database.models  # noqa: F401


# -------------------------
# Prefixos (subpath)
# -------------------------
APP_PREFIX = settings.app_prefix.rstrip("/")
API_PREFIX = f"{APP_PREFIX}/api/v1"


def create_app() -> Flask:
    app = Flask(__name__)

    # CORS aplicado cedo (antes das rotas lidarem com OPTIONS)
    CORS(
        app,
        resources={rf"{API_PREFIX}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)

    register_routes(app, api_prefix=API_PREFIX, app_prefix=APP_PREFIX)

    register_error_handlers(app)

    @app.cli.command("init-db")
    def init_db_command():
        """Cria as tabelas (usuários, pares de tokens, chats, mensagens, auditoria)."""
        init_db()
        click.echo("Banco inicializado.")

    return app


if __name__ == "__main__":
    # em produção use um servidor WSGI (gunicorn)
    create_app().run(host="0.0.0.0", port=5000, debug=settings.debug)
