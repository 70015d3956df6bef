import pytest
from unittest.mock import patch
from fastapi import HTTPException

from core.auth.factory import get_auth_provider, reset_auth_provider
from core.auth.standalone_provider import StandaloneAuthProvider


@pytest.mark.unit
class TestStandaloneAuthProvider:

    def setup_method(self):
        reset_auth_provider()

    def teardown_method(self):
        reset_auth_provider()

    def test_token_round_trip(self, mock_settings):
        with patch('core.auth.standalone_provider.settings', mock_settings):
            provider = StandaloneAuthProvider()
            token = provider.create_access_token(42, "admin")
            claims = provider.validate_token(token)

        assert claims["sub"] == "42"
        assert claims["username"] == "admin"
        assert claims["type"] == "access"

    def test_expired_token_is_rejected(self, mock_settings):
        with patch('core.auth.standalone_provider.settings', mock_settings):
            provider = StandaloneAuthProvider()
            token = provider.create_access_token(1, "admin", expires_minutes=-1)

            with pytest.raises(HTTPException) as exc_info:
                provider.validate_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_password_hashing(self):
        provider = StandaloneAuthProvider()
        hashed = provider.hash_password("s3cret")

        assert hashed != "s3cret"
        assert provider.verify_password("s3cret", hashed) is True
        assert provider.verify_password("wrong", hashed) is False

    def test_factory_requires_secret(self, mock_settings):
        mock_settings.JWT_SECRET_KEY = None

        with patch('core.auth.factory.settings', mock_settings):
            with pytest.raises(ValueError):
                get_auth_provider()
