"""
Chatwoot webhook payloads and the eligibility check applied before a bot reply.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Identifier = Union[int, str]


class ChatwootSender(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Identifier] = None
    name: Optional[str] = None
    email: Optional[str] = None
    # Only agents / users carry these; contacts don't.
    role: Optional[str] = None
    account_id: Optional[Identifier] = None


class ChatwootReference(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[Identifier] = None


class ChatwootWebhookEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    event: Optional[str] = None
    message_type: Optional[str] = None
    content: Optional[str] = None
    private: Optional[bool] = None
    sender: ChatwootSender = Field(default_factory=ChatwootSender)
    conversation: ChatwootReference = Field(default_factory=ChatwootReference)
    account: ChatwootReference = Field(default_factory=ChatwootReference)
    inbox: ChatwootReference = Field(default_factory=ChatwootReference)


class Eligibility(BaseModel):
    should_process: bool
    checks: Dict[str, bool] = Field(default_factory=dict)

    @property
    def failed_checks(self) -> List[str]:
        return [name for name, ok in self.checks.items() if not ok]


def check_eligibility(event: ChatwootWebhookEvent) -> Eligibility:
    """A reply is only generated for new, public, non-empty messages written by a contact."""
    checks = {
        "is_incoming": event.message_type == "incoming",
        "is_message_created": event.event == "message_created",
        "is_not_agent": not event.sender.role and not event.sender.account_id,
        "is_not_private": event.private is not True,
        "has_content": bool(event.content and event.content.strip()),
        "has_conversation": event.conversation.id is not None and event.account.id is not None,
    }
    return Eligibility(should_process=all(checks.values()), checks=checks)


def summarize_event(event: ChatwootWebhookEvent) -> Dict[str, Any]:
    """Fields worth logging for an inbound event (no message body)."""
    return {
        "event": event.event,
        "message_type": event.message_type,
        "private": event.private,
        "sender_id": event.sender.id,
        "conversation_id": event.conversation.id,
        "account_id": event.account.id,
        "inbox_id": event.inbox.id,
    }
