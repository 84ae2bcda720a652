import os
import logging
import asyncio
import random
from typing import Optional

from google import genai
from google.genai import types
from openai import OpenAI

from src.utils.bot_config_loader import GenerationConfig

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """The completion backend failed or returned no usable text."""


class ReplyGenerator:
    """
    Sends the assembled system prompt plus the customer message to the configured
    completion backend (OpenAI chat completions or Gemini via google-genai).
    """

    def __init__(self, cfg: Optional[GenerationConfig] = None):
        self.cfg = cfg or GenerationConfig()
        api_key = os.environ.get(self.cfg.api_key_env)
        if not api_key:
            raise RuntimeError(f"CRITICAL: {self.cfg.api_key_env} is missing.")

        if self.cfg.backend == "gemini":
            self.client = genai.Client(api_key=api_key)
        else:
            self.client = OpenAI(api_key=api_key)

    def _complete_openai(self, system_prompt: str, message: str) -> str:
        response = self.client.chat.completions.create(
            model=self.cfg.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": message},
            ],
            max_tokens=self.cfg.max_tokens,
            temperature=self.cfg.temperature,
        )
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise CompletionError("Completion response has no choices.")
        return (choices[0].message.content or "").strip()

    def _complete_gemini(self, system_prompt: str, message: str) -> str:
        response = self.client.models.generate_content(
            model=self.cfg.model,
            contents=message,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                temperature=self.cfg.temperature,
                max_output_tokens=self.cfg.max_tokens,
            ),
        )
        return (getattr(response, "text", "") or "").strip()

    def _complete(self, system_prompt: str, message: str) -> str:
        if self.cfg.backend == "gemini":
            return self._complete_gemini(system_prompt, message)
        return self._complete_openai(system_prompt, message)

    async def generate(self, system_prompt: str, message: str) -> str:
        logger.info(f"Generating reply with {self.cfg.backend}/{self.cfg.model} for message: {message[:100]}...")

        max_attempts = self.cfg.max_attempts
        last_error: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            try:
                text = await asyncio.to_thread(self._complete, system_prompt, message)
                if not text:
                    raise CompletionError("Completion backend returned an empty reply.")
                logger.info("Successfully generated reply (%d chars)", len(text))
                return text
            except Exception as e:
                last_error = e
                if attempt >= max_attempts:
                    logger.error(f"Completion error: {type(e).__name__}: {e}", exc_info=True)
                    break
                backoff = (2 ** (attempt - 1)) + random.uniform(0, 0.5)
                logger.warning(
                    "Completion request failed on attempt %s/%s (%s). Retrying in %.2fs...",
                    attempt,
                    max_attempts,
                    type(e).__name__,
                    backoff,
                )
                await asyncio.sleep(backoff)

        raise CompletionError(f"Completion failed after {max_attempts} attempt(s): {last_error}") from last_error
