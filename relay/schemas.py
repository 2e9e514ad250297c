from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    role: Literal["system", "user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str


class RelayMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str = "assistant"
    text_sample: str = Field("general knowledge", alias="textSample")


class RelayRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="User's latest message")
    metadata: Optional[RelayMetadata] = None
    user_context: Optional[Dict[str, Any]] = Field(
        None,
        alias="userContext",
        description="Personalization data, only sent for private models",
    )
    history: Optional[List[ChatTurn]] = Field(
        default_factory=list,
        description="Prior user/assistant turns, frontend-managed",
    )


class RelayResponse(BaseModel):
    content: str
    history: List[ChatTurn]
