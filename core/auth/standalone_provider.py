"""Standalone authentication provider (JWT + bcrypt)."""

import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional
from fastapi import HTTPException
from passlib.context import CryptContext

from core.settings import settings
from .base import AuthProvider


class StandaloneAuthProvider(AuthProvider):
    """Standalone authentication provider using FastAPI + JWT."""

    def __init__(self):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def validate_token(self, token: str) -> Dict[str, Any]:
        """Validate JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token claims

        Raises:
            HTTPException: If token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM],
            )
            return payload
        except jwt.ExpiredSignatureError:
            raise HTTPException(status_code=401, detail="Token expired")
        except jwt.InvalidTokenError as e:
            raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    def create_access_token(
        self,
        account_id: int,
        username: str,
        expires_minutes: Optional[int] = None
    ) -> str:
        """Create JWT access token.

        Args:
            account_id: Account primary key, stored as the 'sub' claim
            username: Account username
            expires_minutes: Token expiration in minutes (default from settings)

        Returns:
            JWT token string
        """
        if expires_minutes is None:
            expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(account_id),  # Standard JWT claim for user ID
            "username": username,
            "exp": now + timedelta(minutes=expires_minutes),
            "iat": now,
            "type": "access"
        }

        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)
