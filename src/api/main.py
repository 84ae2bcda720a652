"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from pathlib import Path

from fastapi import FastAPI

import src.api.endpoints.chatwoot_webhook as chatwoot_webhook_module
from src.chatbot.message_pipeline import MessagePipeline
from src.integrations.chatwoot.chatwoot_chat_service import ChatwootChatService
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogClient
from src.integrations.clients.real_http.woocommerce_product_catalogues import WooCommerceCatalogClient
from src.integrations.contracts.catalog import CatalogSource
from src.utils.bot_config_loader import BotConfig, load_bot_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

app = FastAPI(
    title="Shop Support Bot API",
    description="Chatwoot webhook that answers customer messages with catalog-aware LLM replies",
    version="1.0.0",
)

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def build_catalog_source(cfg: BotConfig) -> CatalogSource:
    """The only place where local vs. WooCommerce catalog is chosen."""
    if cfg.catalog.source == "woocommerce":
        return WooCommerceCatalogClient(
            base_url=cfg.catalog.base_url,
            consumer_key=os.getenv(cfg.catalog.consumer_key_env, ""),
            consumer_secret=os.getenv(cfg.catalog.consumer_secret_env, ""),
            timeout_seconds=cfg.catalog.timeout_seconds,
        )

    path = Path(cfg.catalog.local_path)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return LocalCatalogClient(path)


def build_pipeline(cfg: BotConfig) -> MessagePipeline:
    chat_service = ChatwootChatService(
        api_base_url=cfg.chatwoot.base_url,
        access_token=os.getenv(cfg.chatwoot.access_token_env, ""),
        timeout=cfg.chatwoot.timeout_seconds,
    )
    return MessagePipeline(cfg, build_catalog_source(cfg), chat_service)


bot_cfg = load_bot_config()
chatwoot_webhook_module.pipeline = build_pipeline(bot_cfg)
logger.info("Catalog source: %s", bot_cfg.catalog.source)

app.include_router(chatwoot_webhook_module.router, prefix="/api")


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "catalog_source": bot_cfg.catalog.source,
        "generation_backend": bot_cfg.generation.backend,
    }
