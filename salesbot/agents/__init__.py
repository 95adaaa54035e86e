from salesbot.agents.chat_engine import ChatEngine
from salesbot.agents.composer import ResponseComposer
from salesbot.agents.demo_proxy import DemoProxy
from salesbot.agents.dispatcher import ChatDispatcher

__all__ = ["ChatEngine", "ResponseComposer", "DemoProxy", "ChatDispatcher"]
