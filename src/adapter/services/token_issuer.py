from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from src.app.services.token_issuer import ITokenIssuer
from src.domain.errors import ConfigurationError


class JoseTokenIssuer(ITokenIssuer):
    """HMAC-signed JWT assertions (python-jose)"""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256"):
        if not secret:
            raise ConfigurationError(
                "JWT_SECRET is not configured; refusing to sign assertions"
            )
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, subject_id: str, claims: Dict[str, Any], ttl: timedelta) -> str:
        """
        Mint a signed assertion.

        Args:
            subject_id: Teacher UUID as string, stored as "sub"
            claims: Additional claims (teacher id, email, tenant ids, ...)
            ttl: Validity window starting now

        Returns:
            JWT token string
        """
        now = datetime.now(UTC)
        payload = {
            **claims,
            "sub": subject_id,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode an assertion.

        Returns:
            Decoded claims, or None on bad signature, malformed token or expiry
        """
        if not token:
            return None
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None
