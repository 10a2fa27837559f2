"""Password hashing for tasklens accounts.

Hashes are stored as `pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>`.
We never store or log raw passwords.
"""

import hashlib
import hmac
import os
import secrets

from dotenv import load_dotenv

load_dotenv()

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "260000"))
SALT_BYTES = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _derive(password, salt, ITERATIONS)
    return f"{ALGORITHM}${ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a stored hash (constant-time compare)."""
    try:
        algorithm, iterations, salt_hex, digest_hex = stored_hash.split("$")
        if algorithm != ALGORITHM:
            return False
        digest = _derive(password, bytes.fromhex(salt_hex), int(iterations))
    except (ValueError, AttributeError):
        # Malformed stored hash
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)
