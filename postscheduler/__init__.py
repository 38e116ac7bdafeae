"""
Main Application Module (Application Factory)
"""

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix
from config import Config

from .core.database import EXTENSION_KEY as GATEWAY_KEY, SupabaseGateway
from .core.extensions import limiter, rate_limit_exceeded
from .core.logger import get_logger
from .core.oauth import init_oauth

logger = get_logger(__name__)


def create_app(config_class=Config, gateway=None):
    """
    Creates and configures a Flask application instance.

    Args:
        config_class: Configuration object loaded into `app.config`.
        gateway: Supabase gateway to use. Built from the configuration
            when omitted.
    """

    # The public directory is served at the URL root, like '/app.js'
    app = Flask(__name__,
                static_folder=config_class.PUBLIC_DIR,
                static_url_path='')

    # Behind a TLS-terminating proxy, trust its forwarded headers
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Loads the configuration
    app.config.from_object(config_class)
    logger.info(f"Public directory path: {app.static_folder}")

    # 2. External service clients
    if gateway is None:
        gateway = SupabaseGateway(app.config['SUPABASE_URL'], app.config['SUPABASE_ANON_KEY'])
    app.extensions[GATEWAY_KEY] = gateway

    init_oauth(app)

    # 3. Rate limiting
    limiter.init_app(app)

    # 4. Blueprints
    from .pages import pages_bp
    app.register_blueprint(pages_bp)

    from .auth import auth_bp
    app.register_blueprint(auth_bp)

    from .posts import posts_bp
    app.register_blueprint(posts_bp)

    # 5. JSON errors
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    app.register_error_handler(429, rate_limit_exceeded)

    return app
