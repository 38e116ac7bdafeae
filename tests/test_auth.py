from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

import pytest
from authlib.integrations.base_client import OAuthError

from postscheduler.core.database import ServiceError
from postscheduler.core.oauth import get_twitter


# === SIGNUP / LOGIN ===

@pytest.mark.parametrize('path, method', [('/signup', 'sign_up'), ('/login', 'sign_in')])
def test_credentials_forwarded_to_supabase(client, gateway, path, method):
    result = {
        'user': {'id': 'user-123', 'email': 'ana@example.com'},
        'session': {'access_token': 'jwt', 'refresh_token': 'refresh'},
    }
    getattr(gateway, method).return_value = result

    response = client.post(path, json={'email': 'ana@example.com', 'password': 'secret123'})

    assert response.status_code == 200
    assert response.get_json() == result
    getattr(gateway, method).assert_called_once_with('ana@example.com', 'secret123')


@pytest.mark.parametrize('path, method', [('/signup', 'sign_up'), ('/login', 'sign_in')])
def test_supabase_error_is_400(client, gateway, path, method):
    getattr(gateway, method).side_effect = ServiceError('Invalid login credentials')

    response = client.post(path, json={'email': 'ana@example.com', 'password': 'wrong'})

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid login credentials'}


@pytest.mark.parametrize('body', [
    {'password': 'secret123'},
    {'email': 'ana@example.com'},
    {'email': '', 'password': 'secret123'},
    {},
])
def test_login_missing_credentials(client, gateway, body):
    response = client.post('/login', json=body)

    assert response.status_code == 400
    assert 'error' in response.get_json()
    gateway.sign_in.assert_not_called()


def test_login_accepts_form_body(client, gateway):
    gateway.sign_in.return_value = {'user': {'id': 'user-123'}, 'session': None}

    response = client.post('/login', data={'email': 'ana@example.com', 'password': 'secret123'})

    assert response.status_code == 200
    gateway.sign_in.assert_called_once_with('ana@example.com', 'secret123')


# === AUTH STATUS ===

def test_auth_status_without_token(client, gateway):
    response = client.get('/auth-status')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'not authenticated'}
    gateway.get_user.assert_not_called()


def test_auth_status_with_rejected_token(client, gateway, auth_headers):
    gateway.get_user.return_value = None

    response = client.get('/auth-status', headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {'status': 'not authenticated'}


def test_auth_status_authenticated(client, gateway, auth_headers, signed_in):
    response = client.get('/auth-status', headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {'status': 'authenticated', 'user': signed_in}
    gateway.get_user.assert_called_once_with('user-access-token')


def test_auth_status_service_error(client, gateway, auth_headers):
    gateway.get_user.side_effect = ServiceError('connection refused')

    response = client.get('/auth-status', headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json() == {'error': 'connection refused'}


# === TWITTER OAUTH ===

def test_twitter_login_redirects_to_authorize_url(client):
    response = client.get('/auth/twitter')

    assert response.status_code == 302
    location = urlparse(response.headers['Location'])
    assert f"{location.scheme}://{location.netloc}{location.path}" == 'https://twitter.com/i/oauth2/authorize'

    query = parse_qs(location.query)
    assert query['client_id'] == ['test-client-id']
    assert query['redirect_uri'] == ['https://theghoom.com/callback']
    assert query['scope'] == ['tweet.read tweet.write users.read offline.access']
    assert query['response_type'] == ['code']
    assert query['code_challenge_method'] == ['S256']
    assert query['state'][0]


def test_twitter_login_uses_fresh_state(client):
    first = parse_qs(urlparse(client.get('/auth/twitter').headers['Location']).query)
    second = parse_qs(urlparse(client.get('/auth/twitter').headers['Location']).query)
    assert first['state'] != second['state']


def test_callback_returns_tokens(app, client):
    with app.app_context():
        twitter = get_twitter()

    token = {'access_token': 'tw-access', 'refresh_token': 'tw-refresh', 'token_type': 'bearer'}
    with patch.object(twitter, 'authorize_access_token', return_value=token):
        response = client.get('/callback?code=abc&state=xyz')

    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'accessToken': 'tw-access',
        'refreshToken': 'tw-refresh',
    }


def test_callback_provider_error(app, client):
    with app.app_context():
        twitter = get_twitter()

    error = OAuthError(error='invalid_grant', description='Value passed for the authorization code was invalid.')
    with patch.object(twitter, 'authorize_access_token', side_effect=error):
        response = client.get('/callback?code=expired&state=xyz')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to authenticate with Twitter'}


def test_callback_with_unknown_state_fails(client):
    """No /auth/twitter redirect happened in this session, so the state cannot match."""
    response = client.get('/callback?code=abc&state=forged')

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to authenticate with Twitter'}


def test_callback_without_code(client):
    response = client.get('/callback')

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Missing authorization code'}
