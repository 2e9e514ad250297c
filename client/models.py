from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ModelMetadata(BaseModel):
    """A persona model as published in the model directory."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    role: str
    text_sample: str = Field(..., alias="textSample")
    address: str = ""
    visibility: Literal["public", "private"] = "public"
    created_at: datetime = Field(default_factory=_now, alias="createdAt")

    @field_validator("visibility", mode="before")
    @classmethod
    def _default_visibility(cls, value):
        return value or "public"

    @field_validator("created_at", mode="before")
    @classmethod
    def _default_created_at(cls, value):
        return value or _now()

    @property
    def display_name(self) -> str:
        sample = self.text_sample[:15]
        if len(self.text_sample) > 15:
            sample += "..."
        return f"{self.role} ({sample})"

    @property
    def short_address(self) -> str:
        return f"{self.address[:8]}...{self.address[-6:]}"

    @property
    def is_private(self) -> bool:
        return self.visibility == "private"

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class UserContext:
    user_id: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None
    history: Optional[list] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "preferences": self.preferences,
            "history": self.history,
        }


@dataclass(frozen=True)
class ChatContext:
    """Everything the chat view needs from the session, passed in explicitly."""

    metadata: ModelMetadata
    user_context: Optional[UserContext] = None
