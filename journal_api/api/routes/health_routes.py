# journal_api/api/routes/health_routes.py
from flask import Blueprint, jsonify
from sqlalchemy import text

from journal_api.config.settings import settings
from journal_api.infrastructure.database.session import db_session, get_engine

bp_health = Blueprint("health", __name__, url_prefix="/health")


@bp_health.get("")
def health():
    return jsonify({"status": "ok", "environment": settings.environment}), 200


@bp_health.get("/db")
def health_db():
    with db_session() as session:
        session.execute(text("select 1"))
    return jsonify({"db": "ok", "dialect": get_engine().dialect.name}), 200
