"""
Pages Module Routes

Serves the static entry file and the diagnostic endpoints.
"""

import os
from flask import current_app, jsonify, send_from_directory

from . import pages_bp
from postscheduler.core.database import TEST_TABLE, ServiceError, get_gateway
from postscheduler.core.logger import get_logger

logger = get_logger(__name__)

INDEX_FILE = 'index.html'


@pages_bp.route('/')
def index():
    """ Serves public/index.html, or a plain-text 404 when it is missing. """
    public_dir = current_app.static_folder
    index_path = os.path.join(public_dir, INDEX_FILE)
    logger.info(f"Attempting to serve: {index_path}")

    if not os.path.isfile(index_path):
        return f"{INDEX_FILE} not found", 404, {'Content-Type': 'text/plain; charset=utf-8'}

    return send_from_directory(public_dir, INDEX_FILE)


@pages_bp.route('/health')
def health_check():
    return "Post scheduler is up!", 200, {'Content-Type': 'text/plain; charset=utf-8'}


@pages_bp.route('/test-db')
def test_db():
    """ Unfiltered read on the test table to check the Supabase connection. """
    try:
        data = get_gateway().select_all(TEST_TABLE)
    except ServiceError as e:
        return jsonify({'message': 'Error connecting to database', 'error': e.message}), 500

    return jsonify({'message': 'Database connection successful', 'data': data})
