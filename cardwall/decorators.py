"""
Custom route decorators for access control.

- api_auth_required: accepts a Bearer token matching CARDWALL_API_KEY or a
  logged-in Flask-Login session; responds 401 JSON otherwise.
"""

import hmac
from functools import wraps

from flask import current_app, jsonify, request
from flask_login import current_user


def api_auth_required(f):
    """Allow access via login session OR a Bearer token matching CARDWALL_API_KEY."""

    @wraps(f)
    def decorated(*args, **kwargs):
        # Check Bearer token first (for bot/external access)
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]
            expected = current_app.config.get("CARDWALL_API_KEY") or ""
            if expected and hmac.compare_digest(token.encode(), expected.encode()):
                return f(*args, **kwargs)
            return jsonify({"error": "Invalid API key"}), 401

        # Fall back to session auth
        if not current_user.is_authenticated:
            return jsonify({"error": "Unauthorized"}), 401
        return f(*args, **kwargs)

    return decorated
