"""
Authentication Module Routes

Handles /signup, /login, the Twitter OAuth flow (/auth/twitter, /callback)
and /auth-status.
"""

from authlib.integrations.base_client import OAuthError
from flask import current_app, jsonify, request
from requests import RequestException

from . import auth_bp
from .forms import LoginForm, SignupForm
from postscheduler.core.database import ServiceError, get_gateway
from postscheduler.core.extensions import AUTH_RATE_LIMIT, limiter
from postscheduler.core.forms import form_from_request
from postscheduler.core.logger import get_logger
from postscheduler.core.oauth import get_twitter
from postscheduler.core.session import current_user

logger = get_logger(__name__)


def _first_error(form) -> str:
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return 'Invalid request'


# === SUPABASE EMAIL/PASSWORD ===

@auth_bp.route('/signup', methods=['POST'])
@limiter.limit(AUTH_RATE_LIMIT)
def signup():
    form = form_from_request(SignupForm)
    if not form.validate():
        return jsonify({'error': _first_error(form)}), 400

    try:
        result = get_gateway().sign_up(form.email.data, form.password.data)
    except ServiceError as e:
        return jsonify({'error': e.message}), 400

    return jsonify(result)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit(AUTH_RATE_LIMIT)
def login():
    """
    Signs the user in. The returned `session.access_token` is what the
    client sends back as a bearer token.
    """
    form = form_from_request(LoginForm)
    if not form.validate():
        return jsonify({'error': _first_error(form)}), 400

    try:
        result = get_gateway().sign_in(form.email.data, form.password.data)
    except ServiceError as e:
        return jsonify({'error': e.message}), 400

    return jsonify(result)


@auth_bp.route('/auth-status')
def auth_status():
    logger.info("Checking authentication status")
    try:
        user = current_user()
    except ServiceError as e:
        logger.error(f"Auth status error: {e.message}")
        return jsonify({'error': e.message}), 500

    if user is None:
        logger.info("User is not authenticated")
        return jsonify({'status': 'not authenticated'})

    logger.info(f"User is authenticated: {user.get('id')}")
    return jsonify({'status': 'authenticated', 'user': user})


# === TWITTER OAUTH 2.0 ===

@auth_bp.route('/auth/twitter')
def twitter_login():
    """ Redirects to Twitter's authorization page. """
    redirect_uri = current_app.config['TWITTER_REDIRECT_URI']
    return get_twitter().authorize_redirect(redirect_uri)


@auth_bp.route('/callback')
def twitter_callback():
    """ Exchanges the authorization code for an access/refresh token pair. """
    if not request.args.get('code') and not request.args.get('error'):
        return jsonify({'error': 'Missing authorization code'}), 400

    try:
        # redirect_uri and the PKCE verifier come back from the session state
        token = get_twitter().authorize_access_token()
    except (OAuthError, RequestException) as e:
        logger.error(f"Error getting access token: {e}", exc_info=True)
        return jsonify({'error': 'Failed to authenticate with Twitter'}), 500

    # TODO: persist the Twitter tokens against the Supabase user once a table exists for them
    return jsonify({
        'success': True,
        'accessToken': token.get('access_token'),
        'refreshToken': token.get('refresh_token'),
    })
