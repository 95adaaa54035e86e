"""
Chat engine: one request in, one reply out.

Per message the engine resolves tenant, language and session, detects
cart actions and the intent, lets a pending guided flow answer first,
then falls through canned replies, flow starts and finally knowledge
retrieval with a generated (or deterministic) answer.
"""

import uuid
from typing import Optional

from salesbot.agents.composer import ResponseComposer
from salesbot.config import settings
from salesbot.conversation.actions import ActionDetector, DetectionResult
from salesbot.conversation.intents import Intent, IntentClassifier
from salesbot.conversation.session_store import SessionStore, session_key
from salesbot.conversation.state_machine import DialogueFlowController
from salesbot.conversation.validators import looks_like_vehicle_data
from salesbot.logging_context import get_session_logger, set_session_id
from salesbot.schemas.chat_schema import ChatRequest, ChatResponse
from salesbot.schemas.kb_schema import SearchMatch
from salesbot.tools.generation import GenerationClient
from salesbot.tools.knowledge_base import KnowledgeBase
from salesbot.tools.retriever import KnowledgeRetriever, is_recommendation_request
from salesbot.tools.tenants import normalize_tenant, requires_vehicle_data
from salesbot.utils import contains_any, normalize_text

logger = get_session_logger(__name__)

CART_VERB_TERMS = ["anade*", "agrega*", "add", "carrito", "cart"]
FILTER_TERMS = ["filtro*", "filter*"]


class ChatEngine:
    """Stateful conversation engine shared by all tenants."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        generation: Optional[GenerationClient] = None,
        sessions: Optional[SessionStore] = None,
        search_limit: Optional[int] = None,
    ) -> None:
        self.kb = knowledge_base
        self.generation = generation or GenerationClient.from_settings()
        self.sessions = sessions or SessionStore()
        self.search_limit = settings.retrieval.search_limit if search_limit is None else search_limit
        self.classifier = IntentClassifier()
        self.detector = ActionDetector()
        self.retriever = KnowledgeRetriever(knowledge_base, self.generation)
        self.composer = ResponseComposer(knowledge_base)
        self.flows = DialogueFlowController(self.composer, knowledge_base)

    @classmethod
    def from_settings(cls) -> "ChatEngine":
        generation = GenerationClient.from_settings()
        return cls(KnowledgeBase.load(generation=generation), generation)

    def chat(self, request: ChatRequest) -> ChatResponse:
        tenant = normalize_tenant(request.tenant_id, request.kb)
        lang = request.language
        message = request.message.strip()
        normalized = normalize_text(message)
        session_id = (request.session_id or "").strip() or str(uuid.uuid4())

        set_session_id(session_key(tenant, session_id))
        state = self.sessions.get_or_create(tenant, session_id, lang)

        detection = self.detector.detect(message, self.kb.list_items(tenant), request.cart)
        intent = self.classifier.classify(tenant, normalized)
        logger.debug("Intent=%s flow=%s actions=%d", intent.value, state.flow.value, len(detection.actions))

        if intent is Intent.PRIVACY:
            state.clear()
            return self.composer.privacy(lang)
        if intent is Intent.CONTACT_INFO and not self.flows.answers_pending_step(state, intent, message):
            state.clear()
            return self.composer.contact_info(tenant, lang, normalized)

        pending = self.flows.handle_pending(state, tenant, lang, message, normalized, intent, detection)
        if pending is not None:
            return pending

        if intent is Intent.APPOINTMENT:
            return self.flows.start_appointment(state, lang)
        if intent is Intent.PROPERTY_SEARCH:
            return self.flows.start_property_search(state, tenant, lang)

        canned = self.composer.canned(intent, tenant, lang, normalized)
        if canned is not None:
            return canned

        if self._needs_vehicle_data(tenant, message, normalized, detection):
            return self.flows.start_vehicle_data(state, lang)

        return self._answer_from_knowledge(tenant, lang, message, request, detection)

    @staticmethod
    def _needs_vehicle_data(tenant: str, raw: str, normalized: str, detection: DetectionResult) -> bool:
        """A filter add for a tenant that must check the vehicle first."""
        if not requires_vehicle_data(tenant) or detection.item is not None:
            return False
        return (
            contains_any(normalized, CART_VERB_TERMS)
            and contains_any(normalized, FILTER_TERMS)
            and not looks_like_vehicle_data(raw)
        )

    def _answer_from_knowledge(
        self,
        tenant: str,
        lang: str,
        message: str,
        request: ChatRequest,
        detection: DetectionResult,
    ) -> ChatResponse:
        matches = self.retriever.filter_relevant(self.retriever.search(tenant, message, self.search_limit))

        if not matches and detection.item is not None:
            matches = [SearchMatch(item=detection.item, score=1.0)]

        if not matches and not detection.has_actions:
            if not is_recommendation_request(message):
                logger.debug("No relevant knowledge, out-of-scope reply")
                return self.composer.out_of_scope(tenant, lang)
            matches = self.retriever.default_recommendations(tenant)

        system_prompt, user_prompt = self.composer.prompt_pair(
            tenant, lang, message, request.cart, detection.actions, matches
        )
        reply = self.generation.complete(system_prompt, user_prompt)
        if reply is None:
            if self.generation.is_configured():
                logger.warning("Generation unavailable, using deterministic fallback")
            reply = self.composer.fallback(
                tenant, lang, message, detection.actions, detection.item, matches, request.cart
            )

        return ChatResponse(
            reply=reply,
            actions=list(detection.actions),
            item=detection.item.to_api_map() if detection.item is not None else None,
            citations=[match.item.citation() for match in matches],
        )
