"""Error handling helpers for the webhook message pipeline."""
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Webhook processing error: %s", exc, exc_info=True)
        return {
            "success": False,
            "error": str(exc),
            "error_type": type(exc).__name__,
            "context": context or {},
        }
