#!/usr/bin/env python3
"""
Environment Configuration Generator for the Warehouse Admin dashboard

This script generates a .env file with:
- Cryptographically secure SECRET_KEY for Flask sessions
- Auth/data backend location
- Security and server settings

Usage:
    python generate_env.py              # Interactive mode
    python generate_env.py --force      # Overwrite existing .env
    python generate_env.py --dev        # Development mode (HTTP, predictable key)
"""

import secrets
import shutil
import sys
import os
from datetime import datetime
from pathlib import Path
import argparse


class EnvGenerator:
    """Generate environment configuration"""

    def __init__(self, dev_mode=False, env_file=None, backend_url="http://localhost:7010/api"):
        self.dev_mode = dev_mode
        self.env_file = Path(env_file) if env_file else Path(__file__).parent / '.env'
        self.backend_url = backend_url

    def generate_secret_key(self, length=64):
        """Generate a cryptographically secure secret key"""
        if self.dev_mode:
            return "dev-secret-key-DO-NOT-USE-IN-PRODUCTION"
        return secrets.token_hex(length)

    def create_env_content(self):
        """Create the full .env file content"""
        secret_key = self.generate_secret_key()
        secure = 'False' if self.dev_mode else 'True'

        content = f"""# Warehouse Admin Environment Configuration
# Generated: {self._get_timestamp()}
#
# SECURITY WARNING: Keep this file secret! Never commit to version control!

# ============================================================================
# Flask Configuration
# ============================================================================

# Secret key for session signing and CSRF protection
SECRET_KEY={secret_key}

# WARNING: NEVER set to True in production!
FLASK_DEBUG={'True' if self.dev_mode else 'False'}
USE_RELOADER=False

# Server host and port
FLASK_HOST=127.0.0.1
FLASK_PORT=5000

# ============================================================================
# Auth / Data Backend
# ============================================================================

BACKEND_URL={self.backend_url}

# Seconds before a backend call gives up
BACKEND_TIMEOUT=10

# Seconds between token re-validations with the auth backend
SESSION_REVALIDATE_SECONDS=300

# Page shown right after login
LANDING_PATH=/dashboard/imports

# ============================================================================
# Security Settings
# ============================================================================

ENABLE_HTTPS={secure}
FORCE_HTTPS_REDIRECT={secure}
SESSION_COOKIE_SECURE={secure}

# Session lifetime in seconds (default: 3600 = 1 hour)
PERMANENT_SESSION_LIFETIME=3600

# Login form throttling (Flask-Limiter syntax)
LOGIN_RATE_LIMIT=10 per minute

# ============================================================================
# Logging Configuration
# ============================================================================

# Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL={'DEBUG' if self.dev_mode else 'INFO'}

# Directory for warehouse_admin.log and errors.log
LOG_DIR=logs
"""

        return content, {'secret_key': secret_key}

    def _get_timestamp(self):
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def file_exists(self):
        return self.env_file.exists()

    def create_backup(self):
        """Create backup of existing .env file"""
        if not self.file_exists():
            return None

        backup_path = self.env_file.parent / f'.env.backup.{self._get_timestamp().replace(":", "-").replace(" ", "_")}'
        shutil.copy2(self.env_file, backup_path)
        return backup_path

    def write_env_file(self, content):
        with open(self.env_file, 'w', encoding='utf-8') as f:
            f.write(content)

        # Owner read/write only
        os.chmod(self.env_file, 0o600)

    def generate(self, force=False):
        """
        Generate .env file

        Args:
            force: Overwrite existing .env file without prompting

        Returns:
            bool: True when the file was written
        """
        if self.file_exists() and not force:
            print(f"\n⚠️  File {self.env_file} already exists!")
            response = input("Do you want to overwrite it? (yes/no): ").lower().strip()

            if response not in ['yes', 'y']:
                print("❌ Aborted. Existing .env file was not modified.")
                return False

            backup_path = self.create_backup()
            if backup_path:
                print(f"✅ Backup created: {backup_path}")

        content, credentials = self.create_env_content()
        self.write_env_file(content)
        print(f"✅ Created: {self.env_file}")

        if self.dev_mode:
            print("\n⚠️  DEV MODE: predictable SECRET_KEY and HTTPS disabled!")
            print("   DO NOT use this configuration in production!")
        else:
            key = credentials['secret_key']
            print(f"\n🔑 Flask Secret Key: {key[:8]}...{key[-8:]} (length {len(key)})")

        return True


def main():
    parser = argparse.ArgumentParser(
        description='Generate .env configuration for the Warehouse Admin dashboard'
    )
    parser.add_argument('--force', '-f', action='store_true',
                        help='Overwrite existing .env file without prompting')
    parser.add_argument('--dev', '-d', action='store_true',
                        help='Development mode: predictable key, HTTPS off (NOT FOR PRODUCTION!)')
    parser.add_argument('--backend-url', default='http://localhost:7010/api',
                        help='Base URL of the auth/data backend')

    args = parser.parse_args()

    generator = EnvGenerator(dev_mode=args.dev, backend_url=args.backend_url)
    success = generator.generate(force=args.force)
    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
