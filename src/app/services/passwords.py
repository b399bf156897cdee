import bcrypt

BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes; newer releases reject anything longer
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    """True if bcrypt can hash this password without truncating it"""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password with a stored bcrypt hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long password
        return False
