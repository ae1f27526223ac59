from passlib.context import CryptContext

# Password hashing configuration. Stored hashes are plain lowercase SHA-256
# hex digests so existing accounts files stay readable.
pwd_context = CryptContext(schemes=["hex_sha256"])


def hash_password(password: str) -> str:
    """Hash a password as a SHA-256 hex digest.

    Args:
        password: Plain text password to hash

    Returns:
        Hex digest string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hex digest to verify against

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if not hashed_password or not pwd_context.identify(hashed_password):
        return False
    return pwd_context.verify(plain_password, hashed_password)
