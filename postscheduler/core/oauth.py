"""
Extensions Module - OAuth (Twitter)

Registers the Twitter OAuth 2.0 client on an Authlib registry bound to the
application. Authlib keeps the `state` and the PKCE verifier in the signed
Flask session between /auth/twitter and /callback.
"""

from authlib.integrations.flask_client import OAuth
from flask import current_app

# Key under which Authlib stores itself in app.extensions
EXTENSION_KEY = 'authlib.integrations.flask_client'

TWITTER_AUTHORIZE_URL = 'https://twitter.com/i/oauth2/authorize'
TWITTER_TOKEN_URL = 'https://api.twitter.com/2/oauth2/token'
TWITTER_API_BASE_URL = 'https://api.twitter.com/2/'

TWITTER_SCOPES = ['tweet.read', 'tweet.write', 'users.read', 'offline.access']


def init_oauth(app) -> OAuth:
    """
    Creates the Authlib registry for `app` and registers the 'twitter' client.
    """
    oauth = OAuth(app)
    oauth.register(
        name='twitter',
        client_id=app.config['TWITTER_CLIENT_ID'],
        client_secret=app.config['TWITTER_CLIENT_SECRET'],
        authorize_url=TWITTER_AUTHORIZE_URL,
        access_token_url=TWITTER_TOKEN_URL,
        api_base_url=TWITTER_API_BASE_URL,
        client_kwargs={
            'scope': ' '.join(TWITTER_SCOPES),
            'code_challenge_method': 'S256',
            'token_endpoint_auth_method': 'client_secret_basic',
        },
    )
    return oauth


def get_twitter():
    """Returns the Twitter client of the current application."""
    return current_app.extensions[EXTENSION_KEY].create_client('twitter')
