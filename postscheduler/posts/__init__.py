"""
Scheduled Posts Module (Blueprint)

Creates and lists the posts a user scheduled for a social platform.
"""

from flask import Blueprint

posts_bp = Blueprint('posts_bp', __name__)

from . import routes
