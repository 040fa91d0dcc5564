#!/usr/bin/env python3
"""
Run script for the Warehouse Admin dashboard
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from warehouse_admin import create_app
from warehouse_admin.utils.logger import get_logger

# Note: run 'python generate_env.py' to create a .env file with a SECRET_KEY.

app = create_app()
logger = get_logger("warehouse_admin.run")

if __name__ == '__main__':
    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("⚠️  DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Auth/data backend: {app.config['BACKEND_URL']}")
    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
