# storefront/services/security.py
import base64
import hashlib
import hmac
import secrets
import time

from storefront.utils.settings import APP_SECRET, SESSION_MAX_AGE_SECONDS

_PBKDF2_ITERATIONS = 260_000


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${_PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def new_reset_token() -> str:
    return secrets.token_hex(20)


def _sign(payload: str, secret: str) -> str:
    mac = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256)
    return base64.urlsafe_b64encode(mac.digest()).decode("ascii").rstrip("=")


def issue_session_token(user_id: int, secret: str = APP_SECRET, max_age: int = SESSION_MAX_AGE_SECONDS) -> str:
    """
    Token sesji: "<user_id>.<expires_at>.<podpis>".
    Dla klienta jest nieprzezroczysty, waznosc sprawdza tylko serwer.
    """
    expires_at = int(time.time()) + max_age
    payload = f"{user_id}.{expires_at}"
    return f"{payload}.{_sign(payload, secret)}"


def read_session_token(token: str | None, secret: str = APP_SECRET) -> int | None:
    """Zwraca user_id albo None dla brakujacego, podrobionego lub wygaslego tokenu."""
    if not token:
        return None

    parts = token.split(".")
    if len(parts) != 3:
        return None

    user_id, expires_at, signature = parts
    # bajty: ciasteczko moze zawierac znaki spoza ASCII (naglowek dekodowany jako latin-1)
    expected = _sign(f"{user_id}.{expires_at}", secret).encode("ascii")
    if not hmac.compare_digest(expected, signature.encode("utf-8", "replace")):
        return None

    try:
        if int(expires_at) < int(time.time()):
            return None
        return int(user_id)
    except ValueError:
        return None
