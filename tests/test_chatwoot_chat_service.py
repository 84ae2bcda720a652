import pytest
import requests

from src.integrations.chatwoot.chatwoot_chat_service import ChatwootAPIError, ChatwootChatService


class FakeResponse:
    def __init__(self, status_code=200, data=None):
        self.status_code = status_code
        self._data = data if data is not None else {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        return self._data


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse(200, {"id": 555, "content": "hi"})
        self.exc = exc
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": "POST", "url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.exc:
            raise self.exc
        return self.response

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"method": "GET", "url": url, "headers": headers, "timeout": timeout})
        if self.exc:
            raise self.exc
        return self.response


def test_send_message_posts_outgoing_reply():
    session = FakeSession()
    svc = ChatwootChatService("https://chat.example/", "tok", timeout=5, session=session)

    out = svc.send_message(1, 42, "Hallo!")

    assert out == {"id": 555, "content": "hi"}
    call = session.calls[0]
    assert call["url"] == "https://chat.example/api/v1/accounts/1/conversations/42/messages"
    assert call["json"] == {"content": "Hallo!", "message_type": "outgoing", "private": False}
    assert call["headers"]["api_access_token"] == "tok"
    assert call["timeout"] == 5


def test_send_message_raises_on_http_error():
    svc = ChatwootChatService("https://chat.example", "bad", session=FakeSession(FakeResponse(401)))
    with pytest.raises(ChatwootAPIError) as exc_info:
        svc.send_message(1, 42, "Hallo!")
    assert exc_info.value.status_code == 401
    assert "401" in str(exc_info.value)


def test_send_message_raises_on_network_error():
    svc = ChatwootChatService("https://chat.example", "tok", session=FakeSession(exc=requests.ConnectionError("down")))
    with pytest.raises(ChatwootAPIError):
        svc.send_message(1, 42, "Hallo!")


def test_receive_messages():
    session = FakeSession(FakeResponse(200, {"payload": [{"id": 1, "content": "hi"}]}))
    svc = ChatwootChatService("https://chat.example", "tok", session=session)
    out = svc.receive_messages(1, 42)
    assert out["payload"][0]["content"] == "hi"
    assert session.calls[0]["method"] == "GET"
