"""Password hashing helpers."""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a password against its stored hash; unknown hash formats fail."""
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        return False
