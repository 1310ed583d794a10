# core/security.py
"""
Password hashing helpers.

Authentication itself happens upstream; the API still owns user records and
their stored password hashes.
"""
import secrets

import bcrypt


MIN_PASSWORD_LENGTH = 8


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode('utf-8'),
        hashed_password.encode('utf-8')
    )


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def generate_random_password(length: int = 12) -> str:
    """Generate a secure random password."""
    return secrets.token_urlsafe(length)
