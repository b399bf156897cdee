from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.entities import Account


def generate_jwt(account: Account) -> str:
    """
    Generate JWT bearer token for an authenticated account

    Args:
        account: Account that just passed the password check

    Returns:
        JWT token string (HS256, JWT_EXPIRES_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "account_id": str(account.id),
        "username": account.username,
        "email": account.email,
        "exp": now + timedelta(minutes=ApplicationConfig.JWT_EXPIRES_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
