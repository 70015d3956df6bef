import json
import pytest
from fastapi.testclient import TestClient

from models import EmbedConfig


@pytest.mark.integration
class TestPublicEmbedEndpoints:

    def test_requires_api_key(self, client: TestClient, sample_embed):
        response = client.get("/api/v1/public/embed")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "ApiKey"

    def test_rejects_unknown_api_key(self, client: TestClient, sample_embed):
        response = client.get("/api/v1/public/embed", headers={"X-API-Key": "ek_invalid"})

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid API Key"

    def test_list_embeds(self, client: TestClient, sample_api_key, sample_embed, sample_chats, sample_workspace):
        response = client.get("/api/v1/public/embed", headers={"X-API-Key": sample_api_key.secret})

        assert response.status_code == 200
        embeds = response.json()["embeds"]
        assert len(embeds) == 1
        assert embeds[0]["uuid"] == sample_embed.uuid
        assert embeds[0]["chat_count"] == 3
        assert embeds[0]["workspace"]["name"] == sample_workspace.name
        assert embeds[0]["defaultMessages"] == ["Hi there!", "How can I help?"]

    def test_get_embed(self, client: TestClient, sample_api_key, sample_embed):
        response = client.get(
            f"/api/v1/public/embed/{sample_embed.uuid}",
            headers={"X-API-Key": sample_api_key.secret},
        )

        assert response.status_code == 200
        embed = response.json()["embed"]
        assert embed["id"] == sample_embed.id
        assert embed["chat_mode"] == "chat"
        assert embed["assistantName"] == "Support Bot"

    def test_get_embed_with_corrupted_default_messages(self, client: TestClient, sample_api_key, sample_embed, db_session):
        sample_embed.default_messages = "[broken"
        db_session.commit()

        response = client.get(
            f"/api/v1/public/embed/{sample_embed.uuid}",
            headers={"X-API-Key": sample_api_key.secret},
        )

        assert response.status_code == 200
        assert response.json()["embed"]["defaultMessages"] == []

    def test_get_missing_embed(self, client: TestClient, sample_api_key):
        response = client.get("/api/v1/public/embed/missing", headers={"X-API-Key": sample_api_key.secret})

        assert response.status_code == 404

    def test_list_embed_chats(self, client: TestClient, sample_api_key, sample_embed, sample_chats):
        response = client.get(
            f"/api/v1/public/embed/{sample_embed.uuid}/chats",
            headers={"X-API-Key": sample_api_key.secret},
        )

        assert response.status_code == 200
        chats = response.json()["chats"]
        assert [chat["id"] for chat in chats] == [chat.id for chat in sample_chats]
        assert chats[0]["session_id"] == sample_chats[0].session_id
        assert json.loads(chats[0]["response"]) == json.loads(sample_chats[0].response)

    def test_list_session_chats(self, client: TestClient, sample_api_key, sample_embed, sample_chats):
        session_id = sample_chats[0].session_id

        response = client.get(
            f"/api/v1/public/embed/{sample_embed.uuid}/chats/{session_id}",
            headers={"X-API-Key": sample_api_key.secret},
        )

        assert response.status_code == 200
        chats = response.json()["chats"]
        assert [chat["id"] for chat in chats] == [sample_chats[0].id, sample_chats[1].id]
        assert "session_id" not in chats[0]

    def test_list_unknown_session_chats(self, client: TestClient, sample_api_key, sample_embed, sample_chats):
        response = client.get(
            f"/api/v1/public/embed/{sample_embed.uuid}/chats/unknown-session",
            headers={"X-API-Key": sample_api_key.secret},
        )

        assert response.status_code == 404

    def test_chats_of_missing_embed(self, client: TestClient, sample_api_key):
        response = client.get("/api/v1/public/embed/missing/chats", headers={"X-API-Key": sample_api_key.secret})

        assert response.status_code == 404


@pytest.mark.integration
class TestEmbedWidgetEndpoints:

    def _set_allowlist(self, db_session, embed: EmbedConfig, value):
        embed.allowlist_domains = value
        db_session.commit()

    def test_config_without_allowlist(self, client: TestClient, sample_embed):
        response = client.get(
            f"/api/v1/public/widget/{sample_embed.uuid}/config",
            headers={"Origin": "https://anywhere.example"},
        )

        assert response.status_code == 200
        config = response.json()
        assert config["uuid"] == sample_embed.uuid
        assert config["assistantName"] == "Support Bot"
        assert config["defaultMessages"] == ["Hi there!", "How can I help?"]
        assert "allowlist_domains" not in config

    def test_config_for_allowed_origin(self, client: TestClient, sample_embed, db_session):
        self._set_allowlist(db_session, sample_embed, json.dumps(["https://shop.example.com/"]))

        response = client.get(
            f"/api/v1/public/widget/{sample_embed.uuid}/config",
            headers={"Origin": "https://SHOP.example.com"},
        )

        assert response.status_code == 200

    def test_config_for_disallowed_origin(self, client: TestClient, sample_embed, db_session):
        self._set_allowlist(db_session, sample_embed, json.dumps(["https://shop.example.com"]))

        response = client.get(
            f"/api/v1/public/widget/{sample_embed.uuid}/config",
            headers={"Origin": "https://evil.example.com"},
        )

        assert response.status_code == 401

    def test_config_without_origin_when_restricted(self, client: TestClient, sample_embed, db_session):
        self._set_allowlist(db_session, sample_embed, json.dumps(["https://shop.example.com"]))

        response = client.get(f"/api/v1/public/widget/{sample_embed.uuid}/config")

        assert response.status_code == 401

    def test_corrupted_allowlist_blocks_every_origin(self, client: TestClient, sample_embed, db_session):
        self._set_allowlist(db_session, sample_embed, "[not json")

        response = client.get(
            f"/api/v1/public/widget/{sample_embed.uuid}/config",
            headers={"Origin": "https://shop.example.com"},
        )

        assert response.status_code == 401

    def test_disabled_embed(self, client: TestClient, sample_embed, db_session):
        sample_embed.enabled = False
        db_session.commit()

        response = client.get(f"/api/v1/public/widget/{sample_embed.uuid}/config")

        assert response.status_code == 404

    def test_missing_embed(self, client: TestClient):
        response = client.get("/api/v1/public/widget/missing/config")

        assert response.status_code == 404


@pytest.mark.integration
class TestHealthEndpoint:

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers
