"""
Response envelope helpers.

Success: {success: true, data, message, timestamp}
Failure: {success: false, error: {message}, timestamp}
Status:  {success: true, message, timestamp}
"""

from datetime import datetime, timezone
from typing import Any, Tuple

from flask import Response, jsonify


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any, message: str = 'Operation successful', status_code: int = 200) -> Tuple[Response, int]:
    return jsonify({
        'success': True,
        'data': data,
        'message': message,
        'timestamp': _timestamp(),
    }), status_code


def status_response(message: str, status_code: int = 200) -> Tuple[Response, int]:
    """Envelope without a data payload, for service status endpoints."""
    return jsonify({
        'success': True,
        'message': message,
        'timestamp': _timestamp(),
    }), status_code


def error_response(message: str, status_code: int = 500) -> Tuple[Response, int]:
    return jsonify({
        'success': False,
        'error': {
            'message': message,
        },
        'timestamp': _timestamp(),
    }), status_code
