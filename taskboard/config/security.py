# taskboard/config/security.py
# Security configuration for sessions, CORS and the bootstrap account

import os
from datetime import timedelta
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class SecurityConfig:
    """Security configuration for the application"""

    # Session cookie settings
    SESSION = {
        'cookie_name': os.getenv('SESSION_COOKIE_NAME', 'session'),
        'ttl_days': int(os.getenv('SESSION_TTL_DAYS', 7)),
        'token_bytes': int(os.getenv('SESSION_TOKEN_BYTES', 32)),  # 256 bits
        'httponly': True,
        'samesite': 'lax',
        'secure': _env_flag('SESSION_COOKIE_SECURE', 'false'),
        'path': '/',
    }

    # Periodic removal of expired sessions
    SESSION_SWEEP = {
        'enabled': _env_flag('SESSION_SWEEP_ENABLED', 'true'),
        'interval_minutes': int(os.getenv('SESSION_SWEEP_MINUTES', 60)),
    }

    # Account created on a fresh database
    BOOTSTRAP_ADMIN = {
        'username': os.getenv('ADMIN_USERNAME', 'admin'),
        'password': os.getenv('ADMIN_PASSWORD', 'admin123'),
        'name': os.getenv('ADMIN_NAME', 'System Administrator'),
    }

    DEFAULT_CORS_ORIGINS = [
        "http://localhost:3000",                  # Local development frontend
        "http://localhost:3001",                  # Local development frontend
        "http://127.0.0.1:3000",                 # Alternative localhost
    ]

    @classmethod
    def session_ttl(cls) -> timedelta:
        """Lifetime of a freshly issued session"""
        return timedelta(days=cls.SESSION['ttl_days'])

    @classmethod
    def cookie_max_age(cls) -> int:
        """Cookie max-age in seconds, matching the session TTL"""
        return int(cls.session_ttl().total_seconds())

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Allowed CORS origins, overridable with a comma separated CORS_ORIGINS"""
        raw = os.getenv('CORS_ORIGINS')
        if not raw:
            return list(cls.DEFAULT_CORS_ORIGINS)
        return [origin.strip() for origin in raw.split(',') if origin.strip()]
