from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Dict, Optional


class ITokenIssuer(ABC):
    """Signs and verifies time-bounded assertions - application layer"""

    @abstractmethod
    def issue(self, subject_id: str, claims: Dict[str, Any], ttl: timedelta) -> str:
        """Mint a signed assertion for subject_id carrying claims, valid for ttl"""
        pass

    @abstractmethod
    def verify(self, token: str) -> Optional[Dict[str, Any]]:
        """Return the claims of a valid assertion, or None. Never partially trusts."""
        pass
