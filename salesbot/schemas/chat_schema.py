"""Chat request/response models exchanged with the transport layer."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionType(str, Enum):
    ADD = "ADD"
    REMOVE = "REMOVE"
    CLEAR = "CLEAR"
    SHOW = "SHOW"


class ChatAction(BaseModel):
    """A cart operation the client should apply."""

    model_config = ConfigDict(populate_by_name=True)

    type: ActionType
    item_id: Optional[str] = Field(default=None, alias="itemId")

    def describe(self) -> str:
        return self.type.value + (f"({self.item_id})" if self.item_id else "")


class ChatMessage(BaseModel):
    """One role-tagged turn of a multi-turn conversation."""

    role: str = "user"
    content: str = ""

    @field_validator("role", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatRequest(BaseModel):
    """Inbound chat message with tenant, language, session and cart context."""

    model_config = ConfigDict(populate_by_name=True)

    kb: str = "A"
    tenant_id: Optional[str] = Field(default=None, alias="tenantId")
    lang: str = "es"
    message: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    cart: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("kb", "lang", "message", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("messages", mode="before")
    @classmethod
    def _drop_null_messages(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [m for m in value if isinstance(m, (dict, ChatMessage))]

    @field_validator("cart", mode="before")
    @classmethod
    def _drop_malformed_cart_entries(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [entry for entry in value if isinstance(entry, dict)]

    @property
    def language(self) -> str:
        return "en" if self.lang.strip().lower() == "en" else "es"


class ChatResponse(BaseModel):
    """Outbound reply with cart actions, the resolved item and citations."""

    reply: str
    actions: list[ChatAction] = Field(default_factory=list)
    item: Optional[dict[str, Any]] = None
    citations: list[str] = Field(default_factory=list)

    @classmethod
    def simple(cls, reply: str) -> "ChatResponse":
        return cls(reply=reply)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
