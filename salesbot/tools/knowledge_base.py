"""
Tenant knowledge base loaded from line-oriented text files.

Each file holds ``KEY: value`` lines; a new record starts at every ``ID:``
line. Records are immutable once loaded. When the generation client is
configured, an embedding is precomputed for every record so the retriever
can score by cosine similarity.
"""

import logging
from pathlib import Path
from typing import Optional

from salesbot.config import settings
from salesbot.schemas.kb_schema import KbItem
from salesbot.tools.generation import GenerationClient
from salesbot.tools.tenants import get_tenant_ids, kb_file, normalize_tenant

logger = logging.getLogger(__name__)

FIELD_KEYS: dict[str, str] = {
    "ID": "id",
    "TITLE": "title",
    "TYPE": "type",
    "DESCRIPTION": "description",
    "BENEFITS": "benefits",
    "USE_CASES": "use_cases",
    "PRICE": "price",
    "NOTES": "notes",
}


def _to_item(fields: dict[str, str]) -> KbItem:
    values = {FIELD_KEYS[k]: v for k, v in fields.items() if k in FIELD_KEYS}
    values.setdefault("id", "N/A")
    return KbItem(**values)


def parse_records(text: str) -> list[KbItem]:
    """Parse knowledge records from the contents of one knowledge file."""
    items: list[KbItem] = []
    fields: dict[str, str] = {}

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("ID:") and fields:
            items.append(_to_item(fields))
            fields = {}
        key, sep, value = line.partition(":")
        if sep and key.strip():
            fields[key.strip().upper()] = value.strip()

    if fields:
        items.append(_to_item(fields))
    return items


class KnowledgeBase:
    """Per-tenant record store with optional precomputed embeddings."""

    def __init__(
        self,
        items: dict[str, list[KbItem]],
        vectors: Optional[dict[str, dict[str, list[float]]]] = None,
    ) -> None:
        self._items = {normalize_tenant(t): list(v) for t, v in items.items()}
        self._vectors = vectors or {}

    @classmethod
    def load(
        cls,
        kb_dir: Optional[Path] = None,
        generation: Optional[GenerationClient] = None,
    ) -> "KnowledgeBase":
        """Load every tenant's knowledge file and embed its records."""
        directory = Path(kb_dir or settings.kb_dir)
        items: dict[str, list[KbItem]] = {}
        for tenant in get_tenant_ids():
            path = directory / kb_file(tenant)
            if not path.exists():
                logger.warning("Knowledge file for tenant %s not found: %s", tenant, path)
                items[tenant] = []
                continue
            items[tenant] = parse_records(path.read_text(encoding="utf-8"))
            logger.info("Loaded %d knowledge records for tenant %s", len(items[tenant]), tenant)

        vectors: dict[str, dict[str, list[float]]] = {}
        if generation is not None and generation.is_configured():
            for tenant, records in items.items():
                tenant_vectors: dict[str, list[float]] = {}
                for item in records:
                    vector = generation.embed(item.searchable_text())
                    if vector is not None:
                        tenant_vectors[item.id] = vector
                vectors[tenant] = tenant_vectors
                logger.info("Embedded %d/%d records for tenant %s", len(tenant_vectors), len(records), tenant)

        return cls(items, vectors)

    def list_items(self, tenant: str) -> list[KbItem]:
        return list(self._items.get(normalize_tenant(tenant), []))

    def find_by_id(self, tenant: str, item_id: Optional[str]) -> Optional[KbItem]:
        if not item_id:
            return None
        wanted = item_id.strip().lower()
        for item in self._items.get(normalize_tenant(tenant), []):
            if item.id.lower() == wanted:
                return item
        return None

    def find_by_title(self, tenant: str, title: Optional[str]) -> Optional[KbItem]:
        if not title:
            return None
        wanted = title.strip().lower()
        for item in self._items.get(normalize_tenant(tenant), []):
            if item.title.lower() == wanted:
                return item
        return None

    def vector_for(self, tenant: str, item_id: str) -> Optional[list[float]]:
        return self._vectors.get(normalize_tenant(tenant), {}).get(item_id)

    def has_vectors(self, tenant: str) -> bool:
        return bool(self._vectors.get(normalize_tenant(tenant)))

    def company_profile(self, tenant: str) -> Optional[KbItem]:
        for item in self._items.get(normalize_tenant(tenant), []):
            if item.is_company_profile:
                return item
        return None
