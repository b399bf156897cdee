import hashlib

from src.app.services.passwords import hash_password, password_fits, verify_password
from src.app.services.tokens import hash_token, issue_token


def test_issued_tokens_are_urlsafe_and_distinct():
    tokens = {issue_token() for _ in range(100)}

    assert len(tokens) == 100
    for token in tokens:
        assert len(token) == 43
        assert all(c.isalnum() or c in "-_" for c in token)


def test_hash_token_is_sha256_hex():
    assert hash_token("abc") == hashlib.sha256(b"abc").hexdigest()


def test_password_hash_is_salted_and_verifiable():
    first = hash_password("p1")
    second = hash_password("p1")

    assert first != second
    assert verify_password("p1", first)
    assert verify_password("p1", second)
    assert not verify_password("p2", first)


def test_verify_password_with_malformed_hash():
    assert verify_password("p1", "not-a-bcrypt-hash") is False


def test_password_fits_counts_utf8_bytes():
    assert password_fits("x" * 72)
    assert not password_fits("x" * 73)
    # 2 bytes per character
    assert password_fits("é" * 36)
    assert not password_fits("é" * 37)
