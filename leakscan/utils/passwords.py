import base64
import hashlib
import hmac
import secrets

from leakscan import settings

SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int | None = None) -> str:
    iterations = iterations or settings.PASSWORD_ITERATIONS
    salt = secrets.token_bytes(16)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations).hex()
    return f"{SCHEME}${iterations}${base64.b64encode(salt).decode()}${derived}"


def verify_password(stored: str, password: str) -> bool:
    """Check `password` against a `pbkdf2_sha256$<iter>$<salt>$<hex>` string."""

    try:
        scheme, iterations, salt_b64, digest = stored.split("$", 3)
        salt = base64.b64decode(salt_b64)
        rounds = int(iterations)
    except (ValueError, TypeError):
        return False
    if scheme != SCHEME:
        return False
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds).hex()
    return hmac.compare_digest(derived, digest)
