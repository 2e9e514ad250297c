from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Dict, Optional

from pydantic import ValidationError

from client.models import ChatContext, ModelMetadata, UserContext


logger = logging.getLogger(__name__)

METADATA_KEY = "chatbotMetadata"


class View(str, Enum):
    SELECTION = "selection"
    CHAT = "chat"


class SessionMissing(Exception):
    """No usable model metadata in the session; go back to model selection."""


class NoModelSelected(Exception):
    pass


class SessionStore:
    """Session-scoped string storage, alive as long as the client session."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


def start_chat(store: SessionStore, selected: Optional[ModelMetadata]) -> View:
    if selected is None:
        raise NoModelSelected("Select a model before starting a chat")
    store.set_item(METADATA_KEY, json.dumps(selected.to_payload()))
    return View.CHAT


def stub_user_context() -> UserContext:
    # TODO: fetch the real profile once a user-profile service exists.
    return UserContext(
        user_id="user123",
        preferences={"theme": "dark", "language": "en"},
        history=[],
    )


def load_session(store: SessionStore) -> ChatContext:
    """Read the selected model back out of the session.

    Absent and unparsable metadata are treated the same: ``SessionMissing``.
    """
    raw = store.get_item(METADATA_KEY)
    if not raw:
        raise SessionMissing("No model metadata in session")

    try:
        metadata = ModelMetadata.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as exc:
        logger.error("Error parsing metadata: %s", exc)
        raise SessionMissing("Stored model metadata is invalid") from exc

    user_context = stub_user_context() if metadata.is_private else None
    return ChatContext(metadata=metadata, user_context=user_context)
