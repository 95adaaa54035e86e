from salesbot.conversation.actions import ActionDetector, DetectionResult
from salesbot.conversation.intents import Intent, IntentClassifier
from salesbot.conversation.response_cache import ResponseCache
from salesbot.conversation.session_store import SessionStore
from salesbot.conversation.state_machine import DialogueFlowController, FLOW_STEPS

__all__ = [
    "ActionDetector",
    "DetectionResult",
    "Intent",
    "IntentClassifier",
    "DialogueFlowController",
    "FLOW_STEPS",
    "SessionStore",
    "ResponseCache",
]
