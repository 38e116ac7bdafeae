"""
Application Entry Point (Runner)

Imports the Application Factory (create_app) from 'postscheduler' and
starts the HTTPS server.

To run the server:
(With the .venv virtual environment active and cert.pem/key.pem present)
$ python run.py
"""

import os
import sys

from postscheduler import create_app
from postscheduler.core.logger import get_logger

logger = get_logger(__name__)

# Creates the instance using the factory
app = create_app()


def load_ssl_context(config) -> tuple:
    """
    Returns the (certificate, key) pair for the listener.
    Exits when either file is missing: the server never runs unencrypted.
    """
    cert_file = config['SSL_CERT_FILE']
    key_file = config['SSL_KEY_FILE']

    for path in (cert_file, key_file):
        if not os.path.isfile(path):
            logger.critical(f"TLS file not found: {path}")
            sys.exit(1)

    return cert_file, key_file


if __name__ == "__main__":
    ssl_context = load_ssl_context(app.config)
    port = app.config['PORT']

    logger.info(f"HTTPS Server running on port {port}")
    app.run(host='0.0.0.0', port=port, ssl_context=ssl_context,
            debug=app.config['DEBUG'], threaded=True)
