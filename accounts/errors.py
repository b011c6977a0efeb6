"""Error payloads returned by the API."""

import logging
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from . import status

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: 'A bad request was made',
    status.HTTP_401_UNAUTHORIZED: 'You are not authorized',
    status.HTTP_404_NOT_FOUND: 'Resource not found',
    status.HTTP_405_METHOD_NOT_ALLOWED: 'Method not allowed',
    status.HTTP_500_INTERNAL_SERVER_ERROR: 'An internal error occurred',
    status.HTTP_503_SERVICE_UNAVAILABLE: 'Service unavailable'
}


def api_response(status_code: int,
                 message: Optional[str] = None) -> Dict[str, Any]:
    """Generic error payload: ``{statusCode, message}``."""
    return {
        'statusCode': status_code,
        'message': message or DEFAULT_MESSAGES.get(status_code, '')
    }


def validation_error_response(errors: List[str]) -> Dict[str, Any]:
    """Payload for a 400 that lists what was wrong with the request."""
    data = api_response(status.HTTP_400_BAD_REQUEST)
    data['errors'] = list(errors)
    return data


def api_exception(status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
                  message: Optional[str] = None) -> Dict[str, Any]:
    """Payload for an unhandled error. Never carries internal detail."""
    data = api_response(status_code, message)
    data['details'] = None
    return data


def jsonify_exception(error: HTTPException) -> Response:
    """Render HTTP exceptions as JSON."""
    status_code = error.code or status.HTTP_500_INTERNAL_SERVER_ERROR
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        response: Response = jsonify(api_exception(status_code))
    else:
        response = jsonify(api_response(status_code))
    response.status_code = status_code
    return response


def jsonify_unhandled(error: Exception) -> Response:
    """Log an unexpected exception, and return an opaque 500."""
    logger.exception('Unhandled exception: %s', error)
    response: Response = jsonify(api_exception())
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return response


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.register_error_handler(HTTPException, jsonify_exception)
    app.register_error_handler(Exception, jsonify_unhandled)
