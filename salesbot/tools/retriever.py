"""
Hybrid lexical/vector retrieval over a tenant's knowledge records.

Scoring per record:
- cosine similarity when both the query and the record have an embedding
- otherwise the share of query tokens found in the record's text

Results are ranked by score (stable on ties) and later filtered by a
relevance floor. When nothing survives and the visitor asks for a
recommendation, a few default records are offered instead.
"""

import logging
import math
from typing import Optional, Sequence

from salesbot.config import settings
from salesbot.schemas.kb_schema import SearchMatch
from salesbot.tools.generation import GenerationClient
from salesbot.tools.knowledge_base import KnowledgeBase
from salesbot.utils import contains_any, normalize_text, tokenize

logger = logging.getLogger(__name__)

NO_MATCH_SCORE = -1.0

RECOMMENDATION_TERMS = [
    "propon*", "recomiend*", "que me recomiendas", "que me propones", "que opcion",
    "suggest*", "recommend*", "proposal", "best option", "start with",
]


def cosine_similarity(a: Optional[Sequence[float]], b: Optional[Sequence[float]]) -> float:
    """Cosine of the angle between two vectors, ``-1.0`` when undefined."""
    if not a or not b or len(a) != len(b):
        return NO_MATCH_SCORE
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return NO_MATCH_SCORE
    return dot / (norm_a * norm_b)


def lexical_score(query: str, document: str) -> float:
    """Share of distinct query tokens (3+ chars) present in the document."""
    query_tokens = tokenize(query)
    doc_tokens = tokenize(document)
    if not query_tokens or not doc_tokens:
        return 0.0
    overlap = sum(1 for token in query_tokens if token in doc_tokens)
    return overlap / len(query_tokens)


def is_recommendation_request(message: str) -> bool:
    return contains_any(normalize_text(message), RECOMMENDATION_TERMS)


class KnowledgeRetriever:
    """Ranks knowledge records against a free-text query."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        generation: Optional[GenerationClient] = None,
        min_relevance_score: Optional[float] = None,
        default_score: Optional[float] = None,
        default_count: Optional[int] = None,
    ) -> None:
        cfg = settings.retrieval
        floor = cfg.min_relevance_score if min_relevance_score is None else min_relevance_score
        self.kb = knowledge_base
        self.generation = generation
        self.min_relevance_score = max(0.0, min(1.0, floor))
        self.default_score = cfg.default_recommendation_score if default_score is None else default_score
        self.default_count = cfg.default_recommendation_count if default_count is None else default_count

    def search(self, tenant: str, query: str, limit: int) -> list[SearchMatch]:
        items = self.kb.list_items(tenant)
        if not items or limit <= 0:
            return []

        query_vector = None
        if self.generation is not None and self.kb.has_vectors(tenant):
            query_vector = self.generation.embed(query)

        matches: list[SearchMatch] = []
        for item in items:
            item_vector = self.kb.vector_for(tenant, item.id) if query_vector is not None else None
            if query_vector is not None and item_vector is not None:
                score = cosine_similarity(query_vector, item_vector)
            else:
                score = lexical_score(query, item.searchable_text())
            matches.append(SearchMatch(item=item, score=score))

        ranked = sorted(matches, key=lambda m: m.score, reverse=True)[:limit]
        logger.debug(
            "Search tenant=%s mode=%s top=%s",
            tenant,
            "vector" if query_vector is not None else "lexical",
            [(m.item.id, round(m.score, 3)) for m in ranked[:3]],
        )
        return ranked

    def filter_relevant(self, matches: list[SearchMatch]) -> list[SearchMatch]:
        return [m for m in matches if m.score >= self.min_relevance_score]

    def default_recommendations(self, tenant: str) -> list[SearchMatch]:
        """Flat-scored non-company records offered when nothing matched."""
        candidates = [item for item in self.kb.list_items(tenant) if not item.is_company_profile]
        return [
            SearchMatch(item=item, score=self.default_score)
            for item in candidates[: self.default_count]
        ]
