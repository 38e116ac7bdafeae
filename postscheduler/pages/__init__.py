"""
Pages Module (Blueprint)

Entry page, health check and the database connectivity probe.
"""

from flask import Blueprint

pages_bp = Blueprint('pages_bp', __name__)

# Routes are imported last to avoid a circular dependency
from . import routes
