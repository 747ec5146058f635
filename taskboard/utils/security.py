# taskboard/utils/security.py
"""
Password hashing and session token generation
"""

import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from taskboard.config.security import SecurityConfig

# Argon2id with the library's recommended memory/time cost
password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Return a salted Argon2id digest for the plaintext password"""
    return password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored digest"""
    try:
        return password_hasher.verify(hashed_password, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed_password: str) -> bool:
    """True when the stored digest was produced with outdated parameters"""
    try:
        return password_hasher.check_needs_rehash(hashed_password)
    except InvalidHashError:
        return True


def generate_session_token() -> str:
    return secrets.token_hex(SecurityConfig.SESSION['token_bytes'])
