import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.api.dependencies import webhook_token_protection
from src.chatbot.message_pipeline import MessagePipeline
from src.error_handler import ErrorHandler
from src.integrations.chatwoot.webhook_events import ChatwootWebhookEvent, check_eligibility, summarize_event

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(webhook_token_protection)])

# Wired in src/api/main.py (tests replace it).
pipeline: Optional[MessagePipeline] = None
error_handler = ErrorHandler()


def get_pipeline() -> MessagePipeline:
    if pipeline is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Message pipeline not configured")
    return pipeline


@router.post("/chatwoot-webhook", tags=["Chatwoot"])
@router.post("/v1/chatwoot/webhook", tags=["Chatwoot"])
async def chatwoot_webhook(request: Request, message_pipeline: MessagePipeline = Depends(get_pipeline)):
    """
    Chatwoot "message_created" receiver.
    - Skips (200) anything that isn't a public, non-empty message from a contact.
    - Otherwise answers it through the message pipeline and posts the reply back.
    """
    try:
        payload: Dict[str, Any] = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must be JSON")

    try:
        event = ChatwootWebhookEvent.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid webhook payload: {e.error_count()} error(s)")

    logger.info("Webhook received: %s", summarize_event(event))
    eligibility = check_eligibility(event)
    if not eligibility.should_process:
        logger.info("Skipping message - failed checks: %s", eligibility.failed_checks)
        return {
            "success": True,
            "message": "Message skipped - not eligible for processing",
            "reason": "Not an incoming contact message with content",
            "failed_checks": eligibility.failed_checks,
        }

    try:
        return await message_pipeline.handle(event)
    except Exception as e:
        body = error_handler.handle_exception(e, context={"conversation_id": event.conversation.id})
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
