"""
Supabase Connection Module (Core)

Wraps the Supabase client behind a small gateway used by the route
handlers. The gateway is built once by the Application Factory and stored
in `app.extensions`; handlers reach it through `get_gateway()`.

Each operation builds its own client with session persistence disabled.
Sign-in state and user tokens therefore never live on a shared object, and
concurrent requests from different users cannot see each other's session.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import httpx
from flask import current_app
from supabase import (
    AuthError,
    AuthRetryableError,
    Client,
    ClientOptions,
    PostgrestAPIError,
    create_client,
)

from .logger import get_logger

logger = get_logger(__name__)

EXTENSION_KEY = 'supabase_gateway'

TEST_TABLE = 'test_table'
POSTS_TABLE = 'scheduled_posts'

# Errors raised by the Supabase stack for a failed remote call
UPSTREAM_ERRORS = (AuthError, PostgrestAPIError, httpx.HTTPError)


class ServiceError(Exception):
    """An external-service call failed; `message` is the upstream text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_message(error: Exception) -> str:
    # PostgrestAPIError keeps the server message in `.message`
    return getattr(error, 'message', None) or str(error)


def _to_dict(model: Any) -> Optional[Dict[str, Any]]:
    """Converts a Supabase (pydantic) model to a JSON-ready dict."""
    if model is None:
        return None
    if isinstance(model, dict):
        return model
    return model.model_dump(mode='json')


def _session_to_dict(session: Any) -> Optional[Dict[str, Any]]:
    if session is None:
        return None
    return {
        'access_token': session.access_token,
        'refresh_token': session.refresh_token,
        'token_type': session.token_type,
        'expires_in': session.expires_in,
        'expires_at': session.expires_at,
    }


def _close_client(client: Client) -> None:
    """Closes the table (postgrest) and auth HTTP sessions of a client."""
    client.postgrest.session.close()
    auth_http = getattr(client.auth, '_http_client', None)
    if auth_http is not None:
        auth_http.close()


class SupabaseGateway:
    """
    Auth and table operations against a Supabase project.

    Args:
        url (str): Supabase project URL.
        key (str): Supabase anon key.
    """

    def __init__(self, url: str, key: str):
        if not url or not key:
            raise ValueError("Supabase URL and key are required.")
        self.url = url
        self.key = key

    @contextmanager
    def _client(self, access_token: Optional[str] = None) -> Iterator[Client]:
        """
        Builds a client for a single operation and closes its HTTP sessions
        when the operation ends, whether it succeeded or raised.

        When `access_token` is given, table queries run as that user so the
        project's row-level security applies.
        """
        options = ClientOptions(persist_session=False, auto_refresh_token=False)
        client = create_client(self.url, self.key, options=options)
        try:
            if access_token:
                client.postgrest.auth(access_token)
            yield client
        finally:
            _close_client(client)

    # === AUTH ===

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        try:
            with self._client() as client:
                response = client.auth.sign_up({'email': email, 'password': password})
        except UPSTREAM_ERRORS as e:
            logger.error(f"Sign-up failed for {email}: {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e

        logger.info(f"User signed up: {email}")
        return {'user': _to_dict(response.user), 'session': _session_to_dict(response.session)}

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        try:
            with self._client() as client:
                response = client.auth.sign_in_with_password({'email': email, 'password': password})
        except UPSTREAM_ERRORS as e:
            logger.error(f"Sign-in failed for {email}: {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e

        logger.info(f"User signed in: {email}")
        return {'user': _to_dict(response.user), 'session': _session_to_dict(response.session)}

    def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        """
        Validates an access token and returns its user.

        Returns None when Supabase rejects the token. Transport failures
        raise ServiceError.
        """
        if not access_token:
            return None

        try:
            with self._client() as client:
                response = client.auth.get_user(access_token)
        except (AuthRetryableError, httpx.HTTPError) as e:
            logger.error(f"Could not validate access token: {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e
        except AuthError as e:
            logger.info(f"Access token rejected: {e}")
            return None

        if response is None or response.user is None:
            return None
        return _to_dict(response.user)

    # === TABLES ===

    def select_all(self, table: str) -> List[Dict[str, Any]]:
        """Unfiltered read of a whole table (connectivity probe)."""
        try:
            with self._client() as client:
                result = client.table(table).select('*').execute()
        except UPSTREAM_ERRORS as e:
            logger.error(f"Error reading table '{table}': {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e
        return result.data

    def insert_post(self, access_token: str, post: Dict[str, Any]) -> Dict[str, Any]:
        """Inserts one scheduled post and returns the stored row."""
        try:
            with self._client(access_token) as client:
                result = client.table(POSTS_TABLE).insert([post]).execute()
        except UPSTREAM_ERRORS as e:
            logger.error(f"Supabase insert error: {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e

        if not result.data:
            raise ServiceError("Insert returned no rows.")
        return result.data[0]

    def list_posts(self, access_token: str, user_id: str) -> List[Dict[str, Any]]:
        """Posts owned by `user_id`, earliest `date_time` first."""
        try:
            with self._client(access_token) as client:
                result = (
                    client.table(POSTS_TABLE)
                    .select('*')
                    .eq('user_id', user_id)
                    .order('date_time', desc=False)
                    .execute()
                )
        except UPSTREAM_ERRORS as e:
            logger.error(f"Error fetching posts for {user_id}: {e}", exc_info=True)
            raise ServiceError(_error_message(e)) from e
        return result.data


def get_gateway() -> SupabaseGateway:
    """Returns the gateway bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]
