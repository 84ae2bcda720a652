import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class ChatwootAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ChatwootChatService:
    """
    Integration layer for the Chatwoot application API (agent/bot replies).
    Pass a custom requests.Session to stub HTTP in tests.
    """
    def __init__(self, api_base_url: str, access_token: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.api_base_url = api_base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "api_access_token": self.access_token,
            "Content-Type": "application/json",
        }

    def _messages_url(self, account_id, conversation_id) -> str:
        return f"{self.api_base_url}/api/v1/accounts/{account_id}/conversations/{conversation_id}/messages"

    def send_message(self, account_id, conversation_id, content: str, private: bool = False) -> Dict[str, Any]:
        """
        Post an outgoing message into a Chatwoot conversation.
        """
        payload = {
            "content": content,
            "message_type": "outgoing",
            "private": private,
        }
        url = self._messages_url(account_id, conversation_id)
        try:
            resp = self.session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Chatwoot API error for conversation {conversation_id}: {status}")
            raise ChatwootAPIError(f"Chatwoot API error: {status}", status_code=status) from e
        except requests.RequestException as e:
            logger.error(f"Failed to send message to Chatwoot: {e}")
            raise ChatwootAPIError(f"Chatwoot request failed: {e}") from e

        try:
            return resp.json()
        except ValueError:
            return {}

    def receive_messages(self, account_id, conversation_id) -> Dict[str, Any]:
        """
        Fetch the messages of a Chatwoot conversation.
        """
        url = self._messages_url(account_id, conversation_id)
        try:
            resp = self.session.get(url, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error(f"Failed to receive messages from Chatwoot: {e}")
            raise ChatwootAPIError(f"Chatwoot request failed: {e}") from e
