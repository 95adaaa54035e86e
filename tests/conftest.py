"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional

import pytest

from salesbot.agents.chat_engine import ChatEngine
from salesbot.agents.composer import ResponseComposer
from salesbot.conversation.session_store import SessionStore
from salesbot.conversation.state_machine import DialogueFlowController
from salesbot.schemas.chat_schema import ChatRequest
from salesbot.schemas.kb_schema import KbItem
from salesbot.schemas.session_schema import ConversationState
from salesbot.schemas.transcript_schema import ConversationTranscript, Speaker, TranscriptTurn
from salesbot.tools.generation import GenerationClient
from salesbot.tools.knowledge_base import KnowledgeBase


class StubGeneration:
    """Stand-in for GenerationClient returning canned text and vectors."""

    def __init__(
        self,
        reply: Optional[str] = None,
        vectors: Optional[dict[str, list[float]]] = None,
        configured: bool = True,
    ) -> None:
        self.reply = reply
        self.vectors = vectors or {}
        self.configured = configured
        self.prompts: list[tuple[str, str]] = []
        self.conversations: list[tuple[str, list]] = []
        self.embedded: list[str] = []

    def is_configured(self) -> bool:
        return self.configured

    def complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        self.prompts.append((system_prompt, user_prompt))
        return self.reply

    def complete_messages(self, system_prompt: str, messages) -> Optional[str]:
        self.conversations.append((system_prompt, list(messages)))
        return self.reply

    def embed(self, text: Optional[str]) -> Optional[list[float]]:
        self.embedded.append(text or "")
        return self.vectors.get(text or "")


@pytest.fixture
def knowledge_base():
    """Knowledge base loaded from the packaged tenant files."""
    return KnowledgeBase.load()


@pytest.fixture
def offline_generation():
    return GenerationClient(api_key="")


@pytest.fixture
def engine(knowledge_base, offline_generation):
    """Engine with an unconfigured generation client (deterministic fallback)."""
    return ChatEngine(knowledge_base, offline_generation, sessions=SessionStore(ttl_seconds=0))


@pytest.fixture
def composer(knowledge_base):
    return ResponseComposer(knowledge_base)


@pytest.fixture
def flow_controller(composer, knowledge_base):
    return DialogueFlowController(composer, knowledge_base)


@pytest.fixture
def state():
    return ConversationState(tenant="A", lang="es")


def make_item(
    item_id: str,
    title: str,
    item_type: str = "servicio",
    description: str = "",
    benefits: str = "",
    price: str = "100 €",
    notes: str = "",
) -> KbItem:
    """Helper to create a KbItem with sensible defaults."""
    return KbItem(
        id=item_id,
        title=title,
        type=item_type,
        description=description,
        benefits=benefits,
        price=price,
        notes=notes,
    )


def make_request(
    message: str,
    tenant: str = "A",
    lang: str = "es",
    session_id: str = "test-session",
    cart: Optional[list[dict]] = None,
) -> ChatRequest:
    """Helper to create a ChatRequest for one session."""
    return ChatRequest(kb=tenant, lang=lang, session_id=session_id, message=message, cart=cart or [])


def make_transcript(
    session_id: str = "TEST-001",
    questions: Optional[list[str]] = None,
    answers: Optional[list[str]] = None,
) -> ConversationTranscript:
    """Helper to create a ConversationTranscript with alternating turns."""
    questions = questions or ["Hola"]
    answers = answers or ["Hola, soy la asistente comercial de Urbania Nexus Inmobiliaria."]
    turns: list[TranscriptTurn] = []
    for i, (question, answer) in enumerate(zip(questions, answers)):
        turns.append(TranscriptTurn(speaker=Speaker.USER, text=question, timestamp=float(i * 2)))
        turns.append(TranscriptTurn(speaker=Speaker.ASSISTANT, text=answer, timestamp=float(i * 2 + 1)))
    return ConversationTranscript(
        session_id=session_id,
        tenant="A",
        lang="es",
        timestamp=datetime(2025, 3, 15, 10, 0),
        turns=turns,
    )
