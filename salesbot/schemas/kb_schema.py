"""Knowledge base record and retrieval result models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

COMPANY_TYPE = "empresa"


class KbItem(BaseModel):
    """A single knowledge record loaded from a tenant's knowledge file."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = "Sin título"
    type: str = "servicio"
    description: str = ""
    benefits: str = ""
    use_cases: str = ""
    price: str = "0 €"
    notes: str = ""

    @property
    def is_company_profile(self) -> bool:
        return self.type.lower() == COMPANY_TYPE

    def searchable_text(self) -> str:
        """Concatenated text used for lexical scoring and embeddings."""
        return "\n".join([
            self.id, self.title, self.type, self.description,
            self.benefits, self.use_cases, self.price, self.notes,
        ])

    def to_context_block(self) -> str:
        return (
            f"ID: {self.id}\n"
            f"TITLE: {self.title}\n"
            f"TYPE: {self.type}\n"
            f"DESCRIPTION: {self.description}\n"
            f"BENEFITS: {self.benefits}\n"
            f"USE_CASES: {self.use_cases}\n"
            f"PRICE: {self.price}\n"
            f"NOTES: {self.notes}"
        )

    def to_api_map(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "description": self.description,
            "price": self.price,
            "notes": self.notes,
        }

    def citation(self) -> str:
        return f"{self.id} - {self.title}"


@dataclass(frozen=True)
class SearchMatch:
    """A knowledge record paired with its relevance score for one query."""

    item: KbItem
    score: float
