"""
Cryptographic utility functions for ClinicDesk application.
"""

import hashlib
import hmac
import secrets

HASH_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 120_000, salt: str = "") -> str:
    """Hash password using salted PBKDF2-SHA256.

    Stored format: ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        algorithm, iterations, salt, _ = hashed_password.split("$", 3)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    candidate = hash_password(password, int(iterations), salt)
    return hmac.compare_digest(candidate, hashed_password)
