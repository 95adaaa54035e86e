"""Dynamic prompt construction for knowledge-grounded replies."""

from typing import Any, Optional, Sequence

from salesbot.schemas.chat_schema import ChatAction
from salesbot.schemas.kb_schema import SearchMatch
from salesbot.tools.tenants import display_name, human_contact

CONTEXT_SEPARATOR = "\n\n---\n\n"


def cart_summary(cart: Optional[Sequence[dict[str, Any]]]) -> str:
    """One-line cart description, e.g. ``Plan Growth(B-01) x1 490 €``; ``[]`` when empty."""
    if not cart:
        return "[]"
    lines = []
    for entry in cart:
        title = entry.get("title", "item")
        item_id = entry.get("id", "N/A")
        qty = entry.get("qty", 1)
        price = entry.get("price", "0 EUR")
        lines.append(f"{title}({item_id}) x{qty} {price}")
    return "; ".join(lines)


def action_text(actions: Optional[Sequence[ChatAction]]) -> str:
    if not actions:
        return "none"
    return ", ".join(action.describe() for action in actions)


def build_context(matches: Sequence[SearchMatch]) -> str:
    return CONTEXT_SEPARATOR.join(match.item.to_context_block() for match in matches)


def build_user_prompt(
    lang: str,
    tenant: str,
    message: str,
    cart: Optional[Sequence[dict[str, Any]]],
    actions: Optional[Sequence[ChatAction]],
    context: str,
) -> str:
    """User turn sent with the sales system prompt."""
    company = display_name(tenant)
    if lang == "en":
        return (
            f"Selected company: {company} ({tenant})\n"
            f"Assigned specialist for handoff: {human_contact(tenant, 'en')}\n"
            f"Detected actions: {action_text(actions)}\n"
            f"Cart: {cart_summary(cart)}\n"
            f"User message: {message}\n\n"
            f"Context:\n{context}\n\n"
            "Write in English and keep a human conversational style."
        )
    return (
        f"Empresa seleccionada: {company} ({tenant})\n"
        f"Especialista asignado para escalado: {human_contact(tenant, 'es')}\n"
        f"Acciones detectadas: {action_text(actions)}\n"
        f"Carrito: {cart_summary(cart)}\n"
        f"Mensaje usuario: {message}\n\n"
        f"Contexto:\n{context}\n\n"
        "Escribe en espanol con estilo humano y cercano."
    )
