"""
Central Extensions Module.
Avoids circular imports by keeping extension instances in one place.
"""
from flask import jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Rate Limiting (storage URI comes from RATELIMIT_STORAGE_URI)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"]
)

AUTH_RATE_LIMIT = "10 per minute"


def rate_limit_exceeded(error):
    return jsonify({'error': 'Too many requests', 'details': str(error.description)}), 429
