"""
Authentication Module (Blueprint)

Flask Blueprint for user authentication: Supabase sign-up/sign-in, the
Twitter OAuth flow and the session status check.
"""

from flask import Blueprint

auth_bp = Blueprint('auth_bp', __name__)

# Routes are imported last to avoid a circular dependency
from . import routes
