"""
Cart action detection from free-text messages.

Detects add/remove/clear/show requests and resolves the knowledge record
an add or remove refers to. Resolution tries the tenant's records first
(id, then title, then token overlap) and falls back to what is already in
the visitor's cart.

Usage:
    detector = ActionDetector()
    result = detector.detect("Añade el Plan Growth", kb.list_items("B"), cart=[])
    result.actions  # [ChatAction(type=ADD, item_id="B-01")]
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from salesbot.config import settings
from salesbot.schemas.chat_schema import ActionType, ChatAction
from salesbot.schemas.kb_schema import KbItem
from salesbot.utils import contains_any, normalize_text, tokenize

logger = logging.getLogger(__name__)

ID_MATCH_SCORE = 1.0
TITLE_MATCH_SCORE = 0.9

ADD_TERMS = [
    "anade*", "anadir", "agrega*", "agregar", "suma", "sumame", "incluye*", "mete*",
    "add", "include", "put in cart", "add to cart",
]
REMOVE_TERMS = ["quita*", "elimina*", "saca*", "borra*", "remove", "delete", "drop"]
CLEAR_TERMS = ["vaciar carrito", "vacia carrito", "vacia el carrito", "limpia carrito", "clear cart", "empty cart"]
SHOW_TERMS = [
    "ver carrito", "ver el carrito", "mostrar carrito", "muestrame carrito", "muestrame el carrito",
    "show cart", "view cart", "total carrito", "cart total",
]


@dataclass
class DetectionResult:
    """Cart actions found in one message and the record they target."""
    actions: list[ChatAction] = field(default_factory=list)
    item: Optional[KbItem] = None

    @property
    def has_actions(self) -> bool:
        return bool(self.actions)


def score_item_match(normalized_message: str, item: KbItem) -> float:
    """How strongly a message refers to a record, in ``[0, 1]``."""
    if contains_any(normalized_message, [item.id]):
        return ID_MATCH_SCORE
    if contains_any(normalized_message, [item.title]):
        return TITLE_MATCH_SCORE

    message_tokens = tokenize(normalized_message)
    item_tokens = tokenize(normalize_text(f"{item.title} {item.type}"))
    if not message_tokens or not item_tokens:
        return 0.0
    overlap = sum(1 for token in message_tokens if token in item_tokens)
    return overlap / len(item_tokens)


class ActionDetector:
    """Maps a message to cart actions against a tenant's records."""

    def __init__(self, item_match_min_score: Optional[float] = None) -> None:
        self.item_match_min_score = (
            settings.retrieval.item_match_min_score
            if item_match_min_score is None
            else item_match_min_score
        )

    def detect(
        self,
        raw_message: str,
        kb_items: Sequence[KbItem],
        cart: Optional[Sequence[dict[str, Any]]] = None,
    ) -> DetectionResult:
        normalized = normalize_text(raw_message)
        wants_add = contains_any(normalized, ADD_TERMS)
        wants_remove = contains_any(normalized, REMOVE_TERMS)
        wants_clear = contains_any(normalized, CLEAR_TERMS)
        wants_show = contains_any(normalized, SHOW_TERMS)

        item: Optional[KbItem] = None
        if wants_add or wants_remove:
            item = self._best_item_match(normalized, kb_items)
            if item is None:
                item = self._match_from_cart(normalized, cart or [], kb_items)

        result = DetectionResult(item=item)
        if wants_add and item is not None:
            result.actions.append(ChatAction(type=ActionType.ADD, item_id=item.id))
        if wants_remove and item is not None:
            result.actions.append(ChatAction(type=ActionType.REMOVE, item_id=item.id))
        if wants_clear:
            result.actions.append(ChatAction(type=ActionType.CLEAR))
        if wants_show:
            result.actions.append(ChatAction(type=ActionType.SHOW))

        if result.actions:
            logger.debug("Detected cart actions: %s", [a.describe() for a in result.actions])
        return result

    def _best_item_match(self, normalized: str, items: Sequence[KbItem]) -> Optional[KbItem]:
        winner: Optional[KbItem] = None
        winner_score = 0.0
        for item in items:
            score = score_item_match(normalized, item)
            if score > winner_score:
                winner, winner_score = item, score
        return winner if winner_score >= self.item_match_min_score else None

    @staticmethod
    def _match_from_cart(
        normalized: str,
        cart: Sequence[dict[str, Any]],
        items: Sequence[KbItem],
    ) -> Optional[KbItem]:
        for entry in cart:
            entry_id = entry.get("id")
            entry_title = entry.get("title")
            if entry_id is not None and contains_any(normalized, [str(entry_id)]):
                return _find(items, lambda i: i.id.lower() == str(entry_id).strip().lower())
            if entry_title is not None and contains_any(normalized, [str(entry_title)]):
                return _find(items, lambda i: i.title.lower() == str(entry_title).strip().lower())
        return None


def _find(items: Sequence[KbItem], predicate) -> Optional[KbItem]:
    return next((item for item in items if predicate(item)), None)
