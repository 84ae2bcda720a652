import pytest
from fastapi.testclient import TestClient

import src.api.endpoints.chatwoot_webhook as webhook_module
from src.api.main import app
from src.chatbot.message_pipeline import MessagePipeline
from src.integrations.chatwoot.chatwoot_chat_service import ChatwootAPIError
from src.rag.generate import CompletionError
from src.utils.bot_config_loader import BotConfig


class FakeGenerator:
    def __init__(self, reply="Klar, schau dir Ripomed 250 an! 💪", exc=None):
        self.reply = reply
        self.exc = exc
        self.calls = []

    async def generate(self, system_prompt, message):
        self.calls.append({"system_prompt": system_prompt, "message": message})
        if self.exc:
            raise self.exc
        return self.reply


class FakeChatService:
    def __init__(self, exc=None):
        self.exc = exc
        self.sent = []

    def send_message(self, account_id, conversation_id, content):
        if self.exc:
            raise self.exc
        self.sent.append({"account_id": account_id, "conversation_id": conversation_id, "content": content})
        return {"id": 999, "content": content, "message_type": 1}


def _payload(**overrides):
    payload = {
        "event": "message_created",
        "message_type": "incoming",
        "content": "Habt ihr Testosteron?",
        "private": False,
        "sender": {"id": 7, "name": "Max", "email": "max@example.com"},
        "conversation": {"id": 42},
        "account": {"id": 1},
        "inbox": {"id": 3},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def wired(monkeypatch, catalog_source):
    monkeypatch.delenv("WEBHOOK_TOKENS", raising=False)
    generator = FakeGenerator()
    chat = FakeChatService()
    pipeline = MessagePipeline(BotConfig(), catalog_source, chat, generator=generator)
    monkeypatch.setattr(webhook_module, "pipeline", pipeline)
    return {"client": TestClient(app), "generator": generator, "chat": chat, "pipeline": pipeline}


def test_health():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_eligible_message_is_answered_and_replied(wired):
    response = wired["client"].post("/api/chatwoot-webhook", json=_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message_sent"] == "Klar, schau dir Ripomed 250 an! 💪"
    assert body["original_message"] == "Habt ihr Testosteron?"
    assert body["chatwoot_response"]["id"] == 999
    assert body["product_data"] == {
        "intent_detected": True,
        "search_terms": ["testosteron", "test"],
        "products_found": 2,
        "catalog_count": 3,
        "catalog_success": True,
    }

    assert wired["chat"].sent == [{"account_id": 1, "conversation_id": 42, "content": body["message_sent"]}]
    call = wired["generator"].calls[0]
    assert call["message"] == "Habt ihr Testosteron?"
    # priority brand product comes first in the prompt's product block
    assert call["system_prompt"].index("Ripomed 250") < call["system_prompt"].index("Testo E 250")


def test_versioned_route_is_the_same_handler(wired):
    response = wired["client"].post("/api/v1/chatwoot/webhook", json=_payload())
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_ineligible_message_is_skipped(wired):
    response = wired["client"].post("/api/chatwoot-webhook", json=_payload(message_type="outgoing"))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "skipped" in body["message"]
    assert body["failed_checks"] == ["is_incoming"]
    assert wired["generator"].calls == []
    assert wired["chat"].sent == []


def test_agent_message_is_skipped(wired):
    payload = _payload(sender={"id": 2, "name": "Agent", "role": "administrator", "account_id": 1})
    response = wired["client"].post("/api/chatwoot-webhook", json=payload)
    assert response.json()["failed_checks"] == ["is_not_agent"]


def test_malformed_body_is_rejected(wired):
    response = wired["client"].post(
        "/api/chatwoot-webhook", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400

    response = wired["client"].post("/api/chatwoot-webhook", json=["not", "an", "object"])
    assert response.status_code == 400


def test_catalog_failure_still_answers(wired, failing_catalog_source):
    wired["pipeline"].catalog_source = failing_catalog_source

    response = wired["client"].post("/api/chatwoot-webhook", json=_payload())

    assert response.status_code == 200
    assert response.json()["product_data"]["catalog_success"] is False
    assert "Keine passenden Produkte gefunden." in wired["generator"].calls[0]["system_prompt"]


def test_completion_failure_returns_500(wired):
    wired["pipeline"]._generator = FakeGenerator(exc=CompletionError("OpenAI API error: 500"))

    response = wired["client"].post("/api/chatwoot-webhook", json=_payload())

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "OpenAI API error: 500" in body["error"]
    assert wired["chat"].sent == []


def test_reply_failure_returns_500(wired):
    wired["pipeline"].chat_service = FakeChatService(exc=ChatwootAPIError("Chatwoot API error: 401", status_code=401))

    response = wired["client"].post("/api/chatwoot-webhook", json=_payload())

    assert response.status_code == 500
    assert response.json()["error_type"] == "ChatwootAPIError"


def test_webhook_token_required_when_configured(wired, monkeypatch):
    monkeypatch.setenv("WEBHOOK_TOKENS", "s3cret, other")
    client = wired["client"]

    assert client.post("/api/chatwoot-webhook", json=_payload(private=True)).status_code == 401
    assert client.post("/api/chatwoot-webhook?token=wrong", json=_payload(private=True)).status_code == 401
    assert client.post("/api/chatwoot-webhook?token=s3cret", json=_payload(private=True)).status_code == 200
    ok = client.post("/api/chatwoot-webhook", json=_payload(private=True), headers={"X-API-KEY": "other"})
    assert ok.status_code == 200


def test_unconfigured_pipeline_is_503(monkeypatch):
    monkeypatch.delenv("WEBHOOK_TOKENS", raising=False)
    monkeypatch.setattr(webhook_module, "pipeline", None)
    response = TestClient(app).post("/api/chatwoot-webhook", json=_payload())
    assert response.status_code == 503
