import bcrypt


def hash_password(password: str) -> str:
    """
    One-way hash a plain-text password with bcrypt.

    The salt is embedded in the returned hash, so the same password
    hashes to a different string every time.
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if `password` matches the stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the DB: treat as a failed login.
        return False
