"""
Configuration Module (Fail Fast)

Defines the main configuration class. If a critical variable is missing
the application refuses to start.
"""

import os
from dotenv import load_dotenv

# Loads variables from the .env file
load_dotenv()

PACKAGE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'postscheduler')


class Config:
    """
    Base configuration of the application.
    """

    # === CRITICAL SECURITY (Fail Fast) ===
    # Signs the Flask session, where Authlib keeps the OAuth state and PKCE verifier.
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("CRITICAL ERROR: 'SECRET_KEY' not found in .env. The application cannot start insecure.")

    # === SUPABASE (AUTH + TABLES) ===
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')

    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise ValueError("CRITICAL ERROR: Supabase credentials (SUPABASE_URL/SUPABASE_ANON_KEY) missing.")

    # === OAUTH (TWITTER) ===
    TWITTER_CLIENT_ID = os.environ.get('TWITTER_CLIENT_ID')
    TWITTER_CLIENT_SECRET = os.environ.get('TWITTER_CLIENT_SECRET')
    TWITTER_REDIRECT_URI = os.environ.get('TWITTER_REDIRECT_URI', 'https://theghoom.com/callback')

    if not TWITTER_CLIENT_ID or not TWITTER_CLIENT_SECRET:
        raise ValueError("CRITICAL ERROR: OAuth credentials (TWITTER_CLIENT_ID/SECRET) missing.")

    # === SERVER / TLS ===
    PORT = int(os.environ.get('PORT', 3000))
    SSL_CERT_FILE = os.environ.get('SSL_CERT_FILE', 'cert.pem')
    SSL_KEY_FILE = os.environ.get('SSL_KEY_FILE', 'key.pem')

    # Served at the URL root ('/' -> index.html)
    PUBLIC_DIR = os.path.join(PACKAGE_DIR, 'public')

    # === RATE LIMITING ===
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')
