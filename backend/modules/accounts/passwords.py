"""
Password hashing.

bcrypt does the comparison in constant time. When a username does not
exist, callers still run a comparison against DUMMY_HASH so both failure
paths cost the same.
"""

import bcrypt

from .exceptions import PasswordTooLongError

BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of its input and refuses longer ones
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a password with a fresh salt.

    Raises:
        PasswordTooLongError: If the UTF-8 encoding exceeds MAX_PASSWORD_BYTES
    """
    if not password_fits(password):
        raise PasswordTooLongError(MAX_PASSWORD_BYTES)
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a bcrypt hash. Malformed hashes and over-long passwords never match."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


DUMMY_HASH = hash_password("barida-dummy-password")
