"""
Text-completion and embedding client for an OpenAI-compatible HTTP API.

Every public method is fail-soft: an unconfigured key, a network error, a
timeout, a non-success status or a malformed payload all come back as
``None`` so callers can switch to their deterministic fallback. Only one
attempt is made per call.
"""

import logging
import time
from typing import Any, Iterable, Optional

import httpx

from salesbot.config import settings
from salesbot.schemas.chat_schema import ChatMessage

logger = logging.getLogger(__name__)


class GenerationClient:
    """Synchronous client for chat completions and embeddings."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.openai.com/v1",
        chat_model: str = "gpt-4o-mini",
        chat_temperature: float = 0.0,
        embedding_model: str = "text-embedding-3-small",
        chat_timeout_sec: float = 40.0,
        embed_timeout_sec: float = 30.0,
        connect_timeout_sec: float = 20.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self._chat_model = chat_model
        self._chat_temperature = max(0.0, min(2.0, chat_temperature))
        self._embedding_model = embedding_model
        self._chat_timeout = chat_timeout_sec
        self._embed_timeout = embed_timeout_sec
        self._connect_timeout = connect_timeout_sec
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: Optional[httpx.BaseTransport] = None) -> "GenerationClient":
        model = settings.model
        return cls(
            api_key=model.api_key,
            base_url=model.base_url,
            chat_model=model.chat_model,
            chat_temperature=model.chat_temperature,
            embedding_model=model.embedding_model,
            chat_timeout_sec=model.chat_timeout_sec,
            embed_timeout_sec=model.embed_timeout_sec,
            connect_timeout_sec=model.connect_timeout_sec,
            transport=transport,
        )

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        """Single-turn completion: one system and one user message."""
        return self.complete_messages(system_prompt, [ChatMessage(role="user", content=user_prompt)])

    def complete_messages(
        self, system_prompt: str, messages: Iterable[ChatMessage]
    ) -> Optional[str]:
        """Multi-turn completion with the system prompt prepended."""
        if not self.is_configured():
            return None

        payload = {
            "model": self._chat_model,
            "temperature": self._chat_temperature,
            "messages": [{"role": "system", "content": system_prompt}]
            + [{"role": m.role, "content": m.content} for m in messages],
        }
        data = self._post("/chat/completions", payload, self._chat_timeout)
        if data is None:
            return None
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Chat completion payload missing choices[0].message.content")
            return None
        if not isinstance(content, str) or not content.strip():
            return None
        return content.strip()

    def embed(self, text: Optional[str]) -> Optional[list[float]]:
        """Embed one text; ``None`` when unavailable or the input is blank."""
        if not self.is_configured() or not text or not text.strip():
            return None

        payload = {"model": self._embedding_model, "input": text}
        data = self._post("/embeddings", payload, self._embed_timeout)
        if data is None:
            return None
        try:
            vector = data["data"][0]["embedding"]
            return [float(value) for value in vector]
        except (KeyError, IndexError, TypeError, ValueError):
            logger.warning("Embedding payload missing data[0].embedding")
            return None

    def _post(self, path: str, payload: dict[str, Any], timeout_sec: float) -> Optional[dict[str, Any]]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        timeout = httpx.Timeout(timeout_sec, connect=self._connect_timeout)
        start = time.monotonic()
        try:
            with httpx.Client(
                base_url=self._base_url,
                timeout=timeout,
                headers=headers,
                transport=self._transport,
            ) as client:
                res = client.post(path, json=payload)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            if res.status_code >= 300:
                logger.warning("Generation service %s status=%s ms=%s", path, res.status_code, elapsed_ms)
                return None
            data = res.json()
        except httpx.HTTPError as exc:
            logger.warning("Generation service %s unavailable: %s", path, exc)
            return None
        except (httpx.InvalidURL, httpx.StreamError) as exc:
            logger.warning("Generation service %s request failed: %s", path, exc)
            return None
        except ValueError:
            logger.warning("Generation service %s returned invalid JSON", path)
            return None

        logger.debug("Generation service %s status=200 ms=%s", path, elapsed_ms)
        return data if isinstance(data, dict) else None
