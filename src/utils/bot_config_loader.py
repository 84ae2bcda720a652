"""
Bot configuration loader (shop persona, catalog source, search, generation, Chatwoot).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError

from src.catalog.intent import DEFAULT_PRODUCT_KEYWORDS
from src.catalog.search import (
    DEFAULT_FALLBACK_CATEGORIES,
    DEFAULT_PRIORITY_BRANDS,
    MAX_RESULTS,
    FallbackCategory,
    ProductSearch,
)

logger = logging.getLogger(__name__)


class ShopConfig(BaseModel):
    name: str = "blitzschnell.co"
    base_url: str = "https://blitzschnell.co"
    language: str = "Deutsch"
    persona: str = "ein freundlicher First-Layer-Support-Bot"
    # Free-form lines appended to the system prompt (shipping, payment, contact, ...)
    policies: List[str] = Field(default_factory=list)


class CatalogConfig(BaseModel):
    source: Literal["local", "woocommerce"] = "local"
    local_path: str = "data/catalog/products.json"
    base_url: str = "https://blitzschnell.co"
    consumer_key_env: str = "WC_CONSUMER_KEY"
    consumer_secret_env: str = "WC_CONSUMER_SECRET"
    timeout_seconds: float = Field(default=15.0, gt=0)
    targeted_limit: int = Field(default=15, ge=1, le=100)
    overview_limit: int = Field(default=8, ge=1, le=100)


class FallbackCategoryConfig(BaseModel):
    keyword: str
    synonyms: List[str] = Field(default_factory=list)
    fields: List[Literal["categories", "active_ingredient"]] = Field(
        default_factory=lambda: ["categories", "active_ingredient"]
    )


class SearchConfig(BaseModel):
    max_results: int = Field(default=MAX_RESULTS, ge=1, le=MAX_RESULTS)
    priority_brands: List[str] = Field(default_factory=lambda: list(DEFAULT_PRIORITY_BRANDS))
    product_keywords: List[str] = Field(default_factory=lambda: list(DEFAULT_PRODUCT_KEYWORDS))
    # Order matters: the first category triggered by the query wins.
    fallback_categories: List[FallbackCategoryConfig] = Field(
        default_factory=lambda: [
            FallbackCategoryConfig(keyword=c.keyword, synonyms=list(c.synonyms), fields=list(c.fields))
            for c in DEFAULT_FALLBACK_CATEGORIES
        ]
    )

    def fallback_table(self) -> Tuple[FallbackCategory, ...]:
        return tuple(
            FallbackCategory(keyword=c.keyword, synonyms=tuple(c.synonyms), fields=tuple(c.fields))
            for c in self.fallback_categories
        )

    def build_search(self) -> ProductSearch:
        return ProductSearch(
            priority_brands=tuple(self.priority_brands),
            fallback_categories=self.fallback_table(),
            max_results=self.max_results,
        )


class GenerationConfig(BaseModel):
    backend: Literal["openai", "gemini"] = "openai"
    model: str = "gpt-4o"
    api_key_env: str = "OPENAI_API_KEY"
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=600, ge=1, le=8192)
    max_attempts: int = Field(default=3, ge=1, le=10)


class ChatwootConfig(BaseModel):
    base_url: str = "https://app.chatwoot.com"
    access_token_env: str = "CHATWOOT_ACCESS_TOKEN"
    timeout_seconds: float = Field(default=10.0, gt=0)


class BotConfig(BaseModel):
    shop: ShopConfig = Field(default_factory=ShopConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    chatwoot: ChatwootConfig = Field(default_factory=ChatwootConfig)


def default_config_path() -> Path:
    env_path = os.getenv("BOT_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / "config" / "bot_config.yml"


def load_bot_config(config_path: Optional[Path] = None) -> BotConfig:
    """
    Load and validate the bot configuration from YAML.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If the config doesn't match the schema
    """
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Bot config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = BotConfig(**data)
        logger.info("Successfully loaded bot config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Bot config validation failed: %s", e)
        raise
