"""Helper functions for the application."""
from flask import jsonify, current_app
from typing import Any

def handle_error(error, status_code: int, code: str = None):
    """Handle application errors with consistent format."""
    body = {
        'error': True,
        'message': getattr(error, 'description', None) or str(error),
        'status_code': status_code
    }
    if code:
        body['code'] = code
    return jsonify(body), status_code

def success_response(data: Any = None, message: str = "Success"):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }

    if data is not None:
        response['data'] = data

    return jsonify(response)

def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code

def get_services():
    """Return the service container built by the application factory."""
    return current_app.extensions['accessx']
