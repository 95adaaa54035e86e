"""
Response composition: canned replies, prompt pairs and the deterministic
fallback used when the generation service is unavailable.

Company facts (address, schedule, phone, email) are read from the tenant's
``empresa`` record notes, so each knowledge file stays the single source
of truth for its tenant.
"""

import logging
from typing import Any, Optional, Sequence

from salesbot.config import settings
from salesbot.conversation.intents import (
    Intent,
    asks_company_overview,
    asks_directions,
    asks_inventory,
    asks_service_list,
)
from salesbot.prompts.prompt_templates import build_context, build_user_prompt, cart_summary
from salesbot.prompts.replies import label, render
from salesbot.prompts.system_prompts import sales_system_prompt
from salesbot.schemas.chat_schema import ActionType, ChatAction, ChatResponse
from salesbot.schemas.kb_schema import KbItem, SearchMatch
from salesbot.tools.knowledge_base import KnowledgeBase
from salesbot.tools.retriever import is_recommendation_request
from salesbot.tools.tenants import (
    AUTO_PARTS_TENANT,
    REAL_ESTATE_TENANT,
    display_name,
    human_contact,
    normalize_tenant,
)
from salesbot.utils import contains_any, extract_field, normalize_text

logger = logging.getLogger(__name__)

ADDRESS_LABELS = ("Direccion central:", "Oficina principal:")
NON_SELLABLE_TYPES = {"empresa", "faq", "caso"}
PLAN_TYPES = {"plan", "servicio", "app", "producto"}

LOCATION_ONLY_TERMS = ["solo ubicacion", "solo la ubicacion", "solo direccion", "solamente la ubicacion", "just the address"]
FRUSTRATION_TERMS = ["no quiero", "te he dicho", "solamente", "solo eso", "i said", "only that"]
PARKING_TERMS = ["parking", "aparcamiento", "aparcar"]
TRANSPORT_TERMS = ["transporte", "metro", "bus", "autobus", "public transport"]
WHATSAPP_TERMS = ["whatsapp", "wsp", "wasap"]
HUMAN_TERMS = [
    "persona real", "humano", "humana", "agente", "ventas", "soporte", "responsable", "supervisor", "hablar con",
    "real person", "human", "agent", "sales", "support", "manager",
]


class CompanyFacts:
    """Contact facts extracted from a company profile's notes."""

    def __init__(self, item: KbItem) -> None:
        self.item = item
        notes = item.notes or ""
        self.address = extract_field(notes, *ADDRESS_LABELS)
        self.phone = extract_field(notes, "Telefono:")
        self.email = extract_field(notes, "Email:")
        self.schedule = extract_field(notes, "Horario:")


class ResponseComposer:
    """Builds every reply the engine can give without the generation service."""

    def __init__(self, knowledge_base: KnowledgeBase, catalog_limit: Optional[int] = None) -> None:
        self.kb = knowledge_base
        self.catalog_limit = settings.retrieval.catalog_limit if catalog_limit is None else catalog_limit

    # --- Lookups ---

    def company_facts(self, tenant: str) -> Optional[CompanyFacts]:
        company = self.kb.company_profile(tenant)
        return CompanyFacts(company) if company is not None else None

    def sellable_items(self, tenant: str) -> list[KbItem]:
        items = [i for i in self.kb.list_items(tenant) if i.type.lower() not in NON_SELLABLE_TYPES]
        return items[: self.catalog_limit]

    # --- Canned replies ---

    def canned(self, intent: Intent, tenant: str, lang: str, normalized: str) -> Optional[ChatResponse]:
        """Direct reply for intents answered without retrieval; ``None`` otherwise."""
        if intent is Intent.GREETING:
            return ChatResponse.simple(render("greeting", lang, company=display_name(tenant)))
        if intent is Intent.PERSONAL:
            return ChatResponse.simple(render("personal", lang, company=display_name(tenant)))
        if intent is Intent.SMALLTALK:
            return ChatResponse.simple(render("smalltalk", lang))
        if intent is Intent.PRIVACY:
            return self.privacy(lang)
        if intent is Intent.IDENTITY:
            return self.identity(tenant, lang)
        if intent is Intent.LOCATION:
            return self.location(tenant, lang, normalized)
        if intent is Intent.DIRECTIONS:
            return self.directions(tenant, lang, normalized)
        if intent is Intent.CONTACT_INFO:
            return self.contact_info(tenant, lang, normalized)
        if intent is Intent.CATALOG:
            return self.catalog(tenant, lang)
        return None

    def interruption(self, intent: Intent, tenant: str, lang: str, normalized: str) -> Optional[ChatResponse]:
        """Short answer given while a guided flow is waiting for input."""
        if intent in (Intent.LOCATION, Intent.DIRECTIONS, Intent.IDENTITY, Intent.CATALOG):
            return self.canned(intent, tenant, lang, normalized)
        keys = {
            Intent.PROPERTY_SEARCH: "interrupt_property",
            Intent.GREETING: "interrupt_greeting",
            Intent.SMALLTALK: "interrupt_smalltalk",
            Intent.PERSONAL: "interrupt_personal",
            Intent.PRIVACY: "interrupt_privacy",
        }
        key = keys.get(intent)
        return ChatResponse.simple(render(key, lang)) if key else None

    def privacy(self, lang: str) -> ChatResponse:
        return ChatResponse.simple(render("privacy", lang))

    def identity(self, tenant: str, lang: str) -> ChatResponse:
        facts = self.company_facts(tenant)
        if facts is None:
            return self.out_of_scope(tenant, lang)
        lines = [render("identity_intro", lang, company=display_name(tenant), description=facts.item.description)]
        lines += self._fact_lines(lang, [("office", facts.address), ("phone", facts.phone), ("email", facts.email)])
        return ChatResponse.simple("\n".join(lines))

    def location(self, tenant: str, lang: str, normalized: str) -> ChatResponse:
        facts = self.company_facts(tenant)
        if facts is None or not facts.address:
            return self.out_of_scope(tenant, lang)

        short_mode = contains_any(normalized, LOCATION_ONLY_TERMS) or contains_any(normalized, FRUSTRATION_TERMS)
        if short_mode:
            return ChatResponse.simple(render("location_short", lang, address=facts.address))

        schedule = facts.schedule or render("default_schedule", lang)
        lines = [render("location_intro", lang, address=facts.address, schedule=schedule)]
        lines += self._fact_lines(lang, [("phone", facts.phone), ("email", facts.email)])
        lines.append(render("location_outro", lang))
        return ChatResponse.simple("\n".join(lines))

    def directions(self, tenant: str, lang: str, normalized: str) -> ChatResponse:
        facts = self.company_facts(tenant)
        if facts is None or not facts.address:
            return self.out_of_scope(tenant, lang)

        lines = [render("directions_address", lang, address=facts.address)]
        if contains_any(normalized, PARKING_TERMS):
            lines.append(render("directions_parking", lang))
        if contains_any(normalized, TRANSPORT_TERMS):
            lines.append(render("directions_transport", lang))
        lines.append(render("directions_outro", lang))
        return ChatResponse.simple("\n".join(lines))

    def contact_info(self, tenant: str, lang: str, normalized: str) -> ChatResponse:
        if asks_directions(normalized):
            return self.directions(tenant, lang, normalized)
        facts = self.company_facts(tenant)
        if facts is None:
            return self.out_of_scope(tenant, lang)

        lines = [render("contact_intro", lang, company=display_name(tenant))]
        lines += self._fact_lines(lang, [
            ("address", facts.address),
            ("schedule", facts.schedule),
            ("phone", facts.phone),
            ("email", facts.email),
        ])
        if facts.phone and contains_any(normalized, WHATSAPP_TERMS):
            lines.append(render("contact_whatsapp", lang, phone=facts.phone))
        if contains_any(normalized, HUMAN_TERMS):
            lines.append(render("contact_human", lang, contact=human_contact(tenant, lang)))
        return ChatResponse.simple("\n".join(lines).strip())

    def catalog(self, tenant: str, lang: str) -> ChatResponse:
        services = self.sellable_items(tenant)
        if not services:
            return self.out_of_scope(tenant, lang)

        lines = [render("catalog_intro", lang)]
        lines += [f"- {item.title} ({item.price})" for item in services]
        key = normalize_tenant(tenant)
        if key == AUTO_PARTS_TENANT:
            lines.append(render("catalog_outro_vehicle", lang))
        elif key == REAL_ESTATE_TENANT:
            lines.append(render("catalog_outro_property", lang))
        else:
            lines.append(render("catalog_outro_default", lang))
        return ChatResponse.simple("\n".join(lines))

    def property_redirect(self, tenant: str, lang: str) -> ChatResponse:
        return ChatResponse.simple(render(
            "property_redirect", lang,
            company=display_name(tenant),
            property_company=display_name(REAL_ESTATE_TENANT),
        ))

    def out_of_scope_reply(self, tenant: str, lang: str) -> str:
        return render("out_of_scope", lang, company=display_name(tenant), contact=human_contact(tenant, lang))

    def out_of_scope(self, tenant: str, lang: str) -> ChatResponse:
        return ChatResponse.simple(self.out_of_scope_reply(tenant, lang))

    # --- Generation prompts ---

    def prompt_pair(
        self,
        tenant: str,
        lang: str,
        message: str,
        cart: Optional[Sequence[dict[str, Any]]],
        actions: Sequence[ChatAction],
        matches: Sequence[SearchMatch],
    ) -> tuple[str, str]:
        """Return ``(system_prompt, user_prompt)`` for a knowledge-grounded reply."""
        context = build_context(matches)
        return sales_system_prompt(lang), build_user_prompt(lang, tenant, message, cart, actions, context)

    # --- Deterministic fallback ---

    def fallback(
        self,
        tenant: str,
        lang: str,
        message: str,
        actions: Sequence[ChatAction],
        action_item: Optional[KbItem],
        matches: Sequence[SearchMatch],
        cart: Optional[Sequence[dict[str, Any]]],
    ) -> str:
        """Reply built from the records alone, used when no generated text is available."""
        normalized = normalize_text(message)
        parts = self._action_lines(lang, actions, action_item, cart)
        contact = human_contact(tenant, lang)

        if not matches:
            parts.append(self.out_of_scope_reply(tenant, lang))
        elif asks_inventory(normalized) and normalize_tenant(tenant) != AUTO_PARTS_TENANT:
            parts.append(render("fallback_inventory", lang, contact=contact))
        elif asks_company_overview(normalized):
            company = self._company_from(matches) or self.kb.company_profile(tenant)
            if company is None:
                parts.append(self.out_of_scope_reply(tenant, lang))
            else:
                parts.append(render(
                    "fallback_company", lang,
                    company=display_name(tenant),
                    description=company.description,
                    benefits=company.benefits,
                    notes=company.notes,
                ))
        elif asks_service_list(normalized):
            lines = [render("fallback_services_intro", lang)]
            lines += [f"- {item.title} ({item.price})" for item in self.sellable_items(tenant)]
            lines.append(render("fallback_services_outro", lang))
            parts.append("\n".join(lines))
        elif is_recommendation_request(message):
            plan = self._best_plan(tenant, matches)
            parts.append(render(
                "fallback_recommendation", lang,
                title=plan.title, price=plan.price, benefits=plan.benefits, contact=contact,
            ))
        else:
            top = matches[0].item
            parts.append(render(
                "fallback_top_match", lang,
                title=top.title, price=top.price,
                description=top.description, benefits=top.benefits, contact=contact,
            ))

        return "\n".join(parts).strip()

    # --- Helpers ---

    @staticmethod
    def _fact_lines(lang: str, facts: list[tuple[str, str]]) -> list[str]:
        return [f"- {label(name, lang)}: {value}" for name, value in facts if value]

    @staticmethod
    def _action_lines(
        lang: str,
        actions: Sequence[ChatAction],
        item: Optional[KbItem],
        cart: Optional[Sequence[dict[str, Any]]],
    ) -> list[str]:
        lines: list[str] = []
        for action in actions:
            if action.type is ActionType.ADD and item is not None:
                lines.append(render("fallback_added", lang, title=item.title, price=item.price))
            elif action.type is ActionType.REMOVE and item is not None:
                lines.append(render("fallback_removed", lang, title=item.title))
            elif action.type is ActionType.CLEAR:
                lines.append(render("fallback_cleared", lang))
            elif action.type is ActionType.SHOW:
                lines.append(render("fallback_cart_summary", lang, cart=cart_summary(cart)))
        return lines

    @staticmethod
    def _company_from(matches: Sequence[SearchMatch]) -> Optional[KbItem]:
        return next((m.item for m in matches if m.item.is_company_profile), None)

    def _best_plan(self, tenant: str, matches: Sequence[SearchMatch]) -> KbItem:
        for match in matches:
            if match.item.type.lower() in PLAN_TYPES:
                return match.item
        for item in self.kb.list_items(tenant):
            if item.type.lower() in PLAN_TYPES:
                return item
        items = self.kb.list_items(tenant)
        return items[0] if items else matches[0].item
