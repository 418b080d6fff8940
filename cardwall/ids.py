"""Short, URL-safe identifiers for cards and comments."""

import secrets

ID_BYTES = 9  # 12 base64url characters


def generate_id():
    """Return a fresh identifier like ``'k3Jf_x9Qa-2L'``."""
    return secrets.token_urlsafe(ID_BYTES)
