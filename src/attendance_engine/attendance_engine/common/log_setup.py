from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.constants import RETRY_AFTER_SECONDS
from ..core.exceptions import DomainError, StoreError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Package root logger, whatever path the package was imported under.
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]


def setup_logging(app: Flask) -> logging.Logger:
    """Configure the package logger and Flask's logger from ``LOG_LEVEL``."""
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    app.logger.setLevel(level)
    logging.getLogger("werkzeug").setLevel(level)
    return package_logger


def register_error_handlers(app: Flask) -> None:
    """Render engine errors as JSON with the status code they carry."""

    def _render(error: Exception, *, status_code: int, retryable: bool):
        response = jsonify(
            {
                "success": False,
                "error": type(error).__name__,
                "message": str(error),
                "retryable": retryable,
            }
        )
        response.status_code = status_code
        if retryable:
            response.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
        return response

    @app.errorhandler(DomainError)
    def domain_error(error: DomainError):
        app.logger.info("%s %s rejected: %s", request.method, request.path, error)
        return _render(error, status_code=error.status_code, retryable=error.retryable)

    @app.errorhandler(StoreError)
    def store_error(error: StoreError):
        app.logger.error("%s %s store failure: %s", request.method, request.path, error)
        return _render(error, status_code=error.status_code, retryable=error.retryable)
