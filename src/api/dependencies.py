import os
import hmac
import logging

from fastapi import Header, HTTPException, Query, Request, status
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def get_webhook_tokens():
    tokens = os.getenv("WEBHOOK_TOKENS", "")
    return [t.strip() for t in tokens.split(",") if t.strip()]


async def webhook_token_protection(
    request: Request = None,  # keep Request type so FastAPI injects it; default None for direct calls/tests
    token: str = Query(default=None),
    x_api_key: str = Header(default=None, alias="X-API-KEY"),
):
    """
    Chatwoot can't add headers to webhook calls, so the shared secret may also
    travel as ?token=... in the configured webhook URL.
    No configured tokens means the webhook is open.
    """
    valid_tokens = get_webhook_tokens()
    if not valid_tokens:
        return

    path = request.url.path if request is not None else "<no-request>"
    candidate = (token or x_api_key or "").strip()
    ok = bool(candidate) and any(hmac.compare_digest(candidate, t) for t in valid_tokens)
    if not ok:
        logger.warning("Rejected webhook call without valid token: path=%s", path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing webhook token",
        )
