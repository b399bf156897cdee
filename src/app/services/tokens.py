"""
Opaque token generation.

Tokens carry no payload; they are only ever matched against a stored value.
"""

import hashlib
import secrets

TOKEN_BYTES = 32


def issue_token() -> str:
    """256 bits from the OS CSPRNG, URL-safe base64 (43 chars)"""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest used to store reset tokens at rest"""
    return hashlib.sha256(token.encode()).hexdigest()
