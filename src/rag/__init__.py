"""
Message answering pipeline (retrieval + generation).

This package wires together:
- rag.query: product intent, catalog fetch and relevance search
- rag.prompts: system prompt with the ranked product block
- rag.generate: completion backend call with retries
"""

from .query import RetrievalResult, retrieve_products

__all__ = ["RetrievalResult", "retrieve_products"]
