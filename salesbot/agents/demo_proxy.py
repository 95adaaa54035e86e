"""
Multi-turn demo proxy.

Forwards a bounded window of the visitor's conversation to the generation
service under a tenant-specific system prompt. Replies are cached briefly
per tenant, language and last user message so repeated demo clicks do not
hit the service again.
"""

import logging
from typing import Optional, Sequence

from salesbot.config import settings
from salesbot.conversation.response_cache import ResponseCache
from salesbot.prompts.replies import render
from salesbot.prompts.system_prompts import proxy_system_prompt
from salesbot.schemas.chat_schema import ChatMessage, ChatRequest, ChatResponse
from salesbot.tools.generation import GenerationClient
from salesbot.tools.knowledge_base import KnowledgeBase
from salesbot.tools.tenants import TenantProfile, default_profile, display_name, normalize_tenant
from salesbot.utils import extract_field, normalize_text

logger = logging.getLogger(__name__)

VALID_ROLES = {"user", "assistant", "system"}
PROFILE_TITLE_SUFFIX = " - Perfil corporativo"


def normalize_role(role: Optional[str]) -> str:
    value = (role or "").strip().lower()
    return value if value in VALID_ROLES else "user"


def sanitize_messages(
    incoming: Sequence[ChatMessage],
    fallback_message: str,
    max_messages: int,
) -> list[ChatMessage]:
    """Normalize roles, drop blank turns and keep the most recent ``max_messages``."""
    cleaned = [
        ChatMessage(role=normalize_role(m.role), content=m.content.strip())
        for m in incoming
        if m.content and m.content.strip()
    ]
    if not cleaned and fallback_message.strip():
        cleaned.append(ChatMessage(role="user", content=fallback_message.strip()))
    return cleaned[-max_messages:]


def last_user_message(messages: Sequence[ChatMessage]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            return message.content.strip()
    return ""


class DemoProxy:
    """Stateless multi-turn assistant backed by the generation service."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        generation: GenerationClient,
        cache: Optional[ResponseCache] = None,
        max_messages: Optional[int] = None,
    ) -> None:
        self.kb = knowledge_base
        self.generation = generation
        self.cache = cache or ResponseCache()
        limit = settings.proxy.max_messages if max_messages is None else max_messages
        self.max_messages = max(1, limit)

    def chat(self, request: ChatRequest) -> ChatResponse:
        tenant = normalize_tenant(request.tenant_id, request.kb)
        lang = request.language
        conversation = sanitize_messages(request.messages, request.message, self.max_messages)
        last_message = last_user_message(conversation)

        if not last_message:
            return ChatResponse.simple(self.fallback_reply(tenant, lang))

        cache_key = f"{tenant}::{lang}::{normalize_text(last_message)}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Proxy cache hit for %s", cache_key)
            return ChatResponse.simple(cached)

        system_prompt = proxy_system_prompt(self.tenant_profile(tenant, lang), lang)
        reply = self.generation.complete_messages(system_prompt, conversation)
        if reply is None:
            logger.info("Proxy generation unavailable for tenant %s, using fallback", tenant)
            reply = self.fallback_reply(tenant, lang)

        self.cache.put(cache_key, reply)
        return ChatResponse.simple(reply)

    def fallback_reply(self, tenant: str, lang: str) -> str:
        return render("proxy_fallback", lang, company=display_name(tenant))

    def tenant_profile(self, tenant: str, lang: str) -> TenantProfile:
        """Default profile overlaid with the facts found in the tenant's company record."""
        fallback = default_profile(tenant, lang)
        company = self.kb.company_profile(tenant)
        if company is None:
            return fallback

        name = company.title.replace(PROFILE_TITLE_SUFFIX, "").strip()
        notes = company.notes or ""
        address = extract_field(notes, "Direccion central:", "Oficina principal:")
        schedule = extract_field(notes, "Horario:")
        phone = extract_field(notes, "Telefono:")
        email = extract_field(notes, "Email:")
        return TenantProfile(
            company=name or fallback.company,
            agent_name=fallback.agent_name,
            sector=fallback.sector,
            capabilities=fallback.capabilities,
            address=address or fallback.address,
            schedule=schedule or fallback.schedule,
            phone=phone or fallback.phone,
            email=email or fallback.email,
        )
