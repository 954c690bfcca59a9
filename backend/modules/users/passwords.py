"""
Password hashing helpers (bcrypt).
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plaintext password with a fresh salt."""
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
