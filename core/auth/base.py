"""Abstract base class for authentication providers."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class AuthProvider(ABC):
    """Abstract base class for authentication providers.

    The management API only needs to validate bearer tokens and hash
    account passwords; issuing tokens is exposed for the CLI.
    """

    @abstractmethod
    def validate_token(self, token: str) -> Dict[str, Any]:
        """Validate JWT token and return decoded claims.

        Args:
            token: JWT token string

        Returns:
            Dict containing token claims (must include 'sub' for the account id)

        Raises:
            HTTPException: If token is invalid or expired
        """
        pass

    @abstractmethod
    def create_access_token(self, account_id: int, username: str, expires_minutes: Optional[int] = None) -> str:
        """Issue an access token for an account."""
        pass

    @abstractmethod
    def hash_password(self, password: str) -> str:
        pass

    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        pass
