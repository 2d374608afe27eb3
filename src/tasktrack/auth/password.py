"""Password hashing utilities.

Learn: Uses bcrypt, with the salt generated per user and stored in its
own column. hash_password(plaintext, salt) is deterministic for a given
salt, so verification re-hashes the candidate with the stored salt and
compares digests with secrets.compare_digest (constant time).
"""

import secrets

import bcrypt

from tasktrack.config import settings

# bcrypt only reads the first 72 bytes; longer passwords are refused, not truncated
MAX_PASSWORD_BYTES = 72


def generate_salt(rounds: int | None = None) -> str:
    """Return a fresh random bcrypt salt ("$2b$<rounds>$<22 chars>")."""
    return bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds).decode("utf-8")


def hash_password(password: str, salt: str) -> str:
    """Derive the digest for a password with the given salt.

    Raises:
        ValueError: password longer than MAX_PASSWORD_BYTES once encoded
    """
    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, salt.encode("utf-8")).decode("utf-8")


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """Check a candidate password against a stored salt and digest."""
    try:
        candidate = hash_password(password, salt)
    except (ValueError, TypeError):
        # Over-long candidate or malformed salt in the database: a mismatch
        return False
    return secrets.compare_digest(candidate, password_hash)
