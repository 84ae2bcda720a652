"""
Inbound message handling: catalog retrieval -> system prompt -> completion -> Chatwoot reply.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from src.catalog.search import ProductSearch
from src.integrations.chatwoot.chatwoot_chat_service import ChatwootChatService
from src.integrations.chatwoot.webhook_events import ChatwootWebhookEvent
from src.integrations.contracts.catalog import CatalogSource
from src.rag.generate import ReplyGenerator
from src.rag.prompts import build_system_prompt
from src.rag.query import retrieve_products
from src.utils.bot_config_loader import BotConfig

logger = logging.getLogger(__name__)


class MessagePipeline:
    def __init__(
        self,
        cfg: BotConfig,
        catalog_source: CatalogSource,
        chat_service: ChatwootChatService,
        generator: Optional[ReplyGenerator] = None,
        searcher: Optional[ProductSearch] = None,
    ):
        self.cfg = cfg
        self.catalog_source = catalog_source
        self.chat_service = chat_service
        self.searcher = searcher or cfg.search.build_search()
        self._generator = generator

    @property
    def generator(self) -> ReplyGenerator:
        # Built on first use so the app can start (and serve /health) without API keys.
        if self._generator is None:
            self._generator = ReplyGenerator(self.cfg.generation)
        return self._generator

    async def handle(self, event: ChatwootWebhookEvent) -> Dict[str, Any]:
        """Answer one eligible message. Raises on completion or reply delivery failure."""
        message = event.content or ""
        conversation_id = event.conversation.id
        account_id = event.account.id
        logger.info("Processing message for conversation %s", conversation_id)

        retrieval = await retrieve_products(
            message,
            self.catalog_source,
            self.searcher,
            keywords=self.cfg.search.product_keywords,
            targeted_limit=self.cfg.catalog.targeted_limit,
            overview_limit=self.cfg.catalog.overview_limit,
        )
        logger.info("Product retrieval: %s", retrieval.summary())

        system_prompt = build_system_prompt(
            self.cfg.shop,
            retrieval.products,
            priority_brands=self.cfg.search.priority_brands,
            targeted=retrieval.intent.has_product_intent,
        )

        reply = await self.generator.generate(system_prompt, message)

        logger.info("Sending reply to Chatwoot conversation %s", conversation_id)
        chatwoot_response = await asyncio.to_thread(
            self.chat_service.send_message, account_id, conversation_id, reply
        )

        return {
            "success": True,
            "message_sent": reply,
            "chatwoot_response": chatwoot_response,
            "original_message": message,
            "product_data": retrieval.summary(),
        }
