"""
Per-request Session Resolution.

The caller proves its identity with the Supabase access token returned by
/login, sent as `Authorization: Bearer <token>`. Nothing is kept between
requests: every handler that needs a user resolves it from its own request.
"""

from functools import wraps
from typing import Any, Dict, Optional

from flask import g, jsonify, request

from .database import ServiceError, get_gateway
from .logger import get_logger

logger = get_logger(__name__)

NOT_AUTHENTICATED = {'error': 'User not authenticated'}


def bearer_token() -> Optional[str]:
    """Extracts the bearer token from the Authorization header, if any."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        return None
    return token


def current_user() -> Optional[Dict[str, Any]]:
    """
    Resolves the user behind this request's bearer token.

    Returns None for a missing or rejected token. Raises ServiceError when
    Supabase could not be reached.
    """
    token = bearer_token()
    if token is None:
        return None

    user = get_gateway().get_user(token)
    if user is not None:
        g.current_user = user
        g.access_token = token
    return user


def login_required(view):
    """
    Rejects the request with 401 unless it carries a valid access token.
    The resolved user and token are exposed as `g.current_user` and
    `g.access_token`.
    """

    @wraps(view)
    def wrapped(*args, **kwargs):
        try:
            user = current_user()
        except ServiceError as e:
            return jsonify({'error': 'Could not verify session', 'details': e.message}), 500

        if user is None:
            logger.warning(f"Unauthenticated request to {request.path}")
            return jsonify(NOT_AUTHENTICATED), 401

        return view(*args, **kwargs)

    return wrapped
