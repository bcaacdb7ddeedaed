# journal_api/api/middlewares/error_handler.py
import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from journal_api.config.settings import settings
from journal_api.core.exceptions import AppError, IntegrityViolationError, TooManyRequestsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if isinstance(err, IntegrityViolationError):
            logger.error("Falha de integridade: %s", err, exc_info=err)

        response = jsonify({"error": str(err), "code": err.code})
        if isinstance(err, TooManyRequestsError) and err.retry_after:
            response.headers["Retry-After"] = str(err.retry_after)
        return response, err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        details = err.errors(include_url=False, include_context=False)
        return jsonify({"error": "Dados inválidos.", "code": "validation_error", "details": details}), 422

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"error": err.description, "code": "http_error"}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("Erro inesperado")

        if settings.debug:
            return jsonify({"error": str(err), "code": "internal_error"}), 500

        return jsonify({"error": "Internal server error", "code": "internal_error"}), 500
