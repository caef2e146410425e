"""Translate exceptions into the JSON response envelope.

Every error leaves the API as::

    {"statusCode": <int>, "success": false, "data": null, "message": <str>}

Service errors carry their own ``http_status``; this is the only module
that maps exceptions to HTTP.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidhub.core.logger import ensure_request_id
from vidhub.services._shared.errors import ServiceError

log = logging.getLogger(__name__)


def envelope(*, status: int, data: Any = None, message: str = "Success") -> dict[str, Any]:
    """Build the common response body."""
    return {
        "statusCode": int(status),
        "success": int(status) < 400,
        "data": data,
        "message": message,
    }


def error_response(status: int, message: str):
    return jsonify(envelope(status=status, data=None, message=message)), status


def _first_message(messages: Any) -> str:
    """Pick the first human message out of marshmallow's nested errors."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        for field, value in messages.items():
            inner = _first_message(value)
            if field == "_schema":
                return inner
            return f"{field}: {inner}"
    if isinstance(messages, list | tuple) and messages:
        return _first_message(messages[0])
    return "Invalid request"


def init_app(app: Flask) -> None:
    """
    Register the error handlers.

    4xx are logged as warnings without traceback, 5xx as errors with one.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        status = int(err.http_status)
        level = log.error if status >= 500 else log.warning
        level(
            "ServiceError: %s status=%s msg=%s",
            type(err).__name__,
            status,
            str(err),
            exc_info=status >= 500,
        )
        return error_response(status, str(err) or HTTPStatus(status).phrase)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        message = _first_message(err.messages)
        log.warning("ValidationError: %s", message)
        return error_response(HTTPStatus.BAD_REQUEST, message)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        elif status == HTTPStatus.TOO_MANY_REQUESTS:
            message = "Too many requests"
        log.warning("HTTPException: status=%s detail=%s", status, message)
        return error_response(status, message)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        log.error("IntegrityError", exc_info=True)
        return error_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError", exc_info=True)
        return error_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error")


__all__ = ["envelope", "error_response", "init_app"]
