# app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt

from app.core.config import get_settings

# Login tokens are valid for one day.
TOKEN_TTL = timedelta(days=1)

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialService:
    """
    Password hashing and token signing.

    - bcrypt for password hashes
    - python-jose (HS256 by default) for signed tokens
    """

    def __init__(self, secret: str, algorithm: str = "HS256", rounds: int = 10):
        self.secret = secret
        self.algorithm = algorithm
        self.rounds = rounds

    def hash_password(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(plaintext), salt).decode("utf-8")

    def verify_password(self, plaintext: str, hashed: str) -> bool:
        """Compare a plaintext password against a stored bcrypt hash."""
        try:
            return bcrypt.checkpw(_password_bytes(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def issue_token(self, payload: dict[str, Any], ttl: timedelta = TOKEN_TTL) -> str:
        """
        Sign `payload` into a JWT.

        Adds:
          - iat: issue time
          - exp: iat + ttl
        """
        now = datetime.now(timezone.utc)
        claims = dict(payload)
        claims["iat"] = now
        claims["exp"] = now + ttl
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry, return the claims.

        Raises:
            jose.JWTError: if the token is invalid or expired.
        """
        return jwt.decode(token, self.secret, algorithms=[self.algorithm])


def get_credential_service() -> CredentialService:
    settings = get_settings()
    return CredentialService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
        rounds=settings.BCRYPT_ROUNDS,
    )
