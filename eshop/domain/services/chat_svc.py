# eshop/domain/services/chat_svc.py

from __future__ import annotations
from typing import List
import logging
from time import monotonic as _now

from openai import AsyncOpenAI, OpenAIError

from eshop.domain.errors import ProviderError

logger = logging.getLogger(__name__)


class ChatProvider:
    """Chat completion wrapper: message list in, first text output out."""

    def __init__(self, client: AsyncOpenAI, model: str, timeout_s: int = 30):
        self.client = client
        self.model = model
        self.timeout_s = timeout_s

    async def complete(self, messages: List[dict]) -> str:
        t0 = _now()
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                timeout=self.timeout_s,
            )
        except OpenAIError as e:
            raise ProviderError(f"chat completion failed: {e}") from e
        dt = _now() - t0

        # Best-effort usage logging
        u = getattr(resp, "usage", None)
        logger.info(
            f"LLM call model={getattr(resp, 'model', self.model)} duration={dt:.3f}s "
            f"tokens(prompt={getattr(u, 'prompt_tokens', None)}, completion={getattr(u, 'completion_tokens', None)})"
        )

        if not resp.choices or resp.choices[0].message.content is None:
            raise ProviderError("chat completion returned no text")
        return resp.choices[0].message.content
