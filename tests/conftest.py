import os

# config.Config fails fast at import time; seed the environment first
os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('SUPABASE_URL', 'https://example.supabase.co')
os.environ.setdefault('SUPABASE_ANON_KEY', 'test-anon-key')
os.environ.setdefault('TWITTER_CLIENT_ID', 'test-client-id')
os.environ.setdefault('TWITTER_CLIENT_SECRET', 'test-client-secret')

from unittest.mock import MagicMock

import pytest

from config import Config
from postscheduler import create_app
from postscheduler.core.database import SupabaseGateway


class TestingConfig(Config):
    TESTING = True
    RATELIMIT_ENABLED = False
    TWITTER_REDIRECT_URI = 'https://theghoom.com/callback'


@pytest.fixture
def gateway():
    """Stands in for Supabase; every test sets the return values it needs."""
    return MagicMock(spec=SupabaseGateway)


@pytest.fixture
def app(gateway):
    return create_app(TestingConfig, gateway=gateway)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {'Authorization': 'Bearer user-access-token'}


@pytest.fixture
def signed_in(gateway):
    user = {'id': 'user-123', 'email': 'ana@example.com'}
    gateway.get_user.return_value = user
    return user
