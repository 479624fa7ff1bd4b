"""Password hashing utilities.

Learn: bcrypt salts automatically and its output ("$2b$...") embeds the
work factor, so verification needs nothing but the stored hash. Passwords
are truncated to 72 bytes, bcrypt's input limit.
"""

import bcrypt

from bazaar.config import settings


def hash_password(password: str) -> str:
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash. Malformed hashes fail."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:72], password_hash.encode("utf-8")
        )
    except (ValueError, TypeError):
        return False
