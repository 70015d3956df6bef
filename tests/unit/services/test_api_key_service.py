import pytest

from models import ApiKey
from services.api_key_service import ApiKeyService


@pytest.mark.unit
class TestApiKeyService:

    def test_create_generates_prefixed_secret(self, db_session, sample_account):
        api_key = ApiKeyService(db_session).create(created_by=sample_account.id)

        assert api_key.secret.startswith("ek_")
        assert api_key.created_by == sample_account.id

    def test_get_by_secret(self, db_session, sample_api_key):
        service = ApiKeyService(db_session)

        assert service.get_by_secret(sample_api_key.secret).id == sample_api_key.id
        assert service.get_by_secret("ek_unknown") is None

    def test_list_and_delete(self, db_session, sample_api_key):
        service = ApiKeyService(db_session)

        assert [key.id for key in service.list_keys()] == [sample_api_key.id]
        assert service.delete(sample_api_key.id) is True
        assert service.delete(sample_api_key.id) is False
        assert db_session.query(ApiKey).count() == 0
