"""
Request dispatcher: single entry point for chat requests.

Requests carrying a role-tagged message sequence go to the multi-turn
demo proxy; everything else goes through the stateful chat engine.
"""

import logging
from typing import Any, Optional, Union

from salesbot.agents.chat_engine import ChatEngine
from salesbot.agents.demo_proxy import DemoProxy
from salesbot.schemas.chat_schema import ChatRequest, ChatResponse
from salesbot.tools.generation import GenerationClient
from salesbot.tools.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)


class ChatDispatcher:
    """Routes each request to the engine or the demo proxy."""

    def __init__(self, engine: ChatEngine, proxy: DemoProxy) -> None:
        self.engine = engine
        self.proxy = proxy

    @classmethod
    def create(
        cls,
        knowledge_base: Optional[KnowledgeBase] = None,
        generation: Optional[GenerationClient] = None,
    ) -> "ChatDispatcher":
        generation = generation or GenerationClient.from_settings()
        kb = knowledge_base or KnowledgeBase.load(generation=generation)
        return cls(ChatEngine(kb, generation), DemoProxy(kb, generation))

    def handle(self, request: Union[ChatRequest, dict[str, Any]]) -> ChatResponse:
        if not isinstance(request, ChatRequest):
            request = ChatRequest.model_validate(request)
        if request.messages:
            logger.debug("Dispatching %d-message request to demo proxy", len(request.messages))
            return self.proxy.chat(request)
        return self.engine.chat(request)
