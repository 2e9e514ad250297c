"""
Client side of the conversation relay.

A chat session keeps one ordered log. Each entry says whether the user sees
it and whether it is part of the history replayed to the relay:

    entry            visible   in history
    system prompt    no        yes
    welcome          yes       no
    user / reply     yes       yes
    fallback reply   yes       no

The display log and the wire log are both projections of that one list, so
they cannot drift apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from client.models import ChatContext
from client.session import SessionMissing, SessionStore, load_session
from config.settings import get_settings
from relay.prompt import build_twin_prompt, build_welcome_message


logger = logging.getLogger(__name__)

MALFORMED_REPLY = "Sorry, I couldn't process your request."
ERROR_REPLY = "Sorry, there was an error processing your request."


class ChatState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    AWAITING_RESPONSE = "awaiting-response"
    REDIRECTED = "redirected"


class MalformedResponse(Exception):
    """The relay answered, but without a usable ``content`` field."""


@dataclass(frozen=True)
class LogEntry:
    role: str
    content: str
    visible_to_user: bool = True
    in_history: bool = True

    def as_message(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class RelayClient:
    """Posts one chat turn to the relay endpoint and returns the decoded body."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.url = url or settings.relay_url
        self.timeout = timeout if timeout is not None else settings.relay_timeout
        self._transport = transport

    async def send(self, payload: Dict[str, Any]) -> Any:
        # Error statuses still carry a JSON body ({"error": ...}); let the caller inspect it.
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, json=payload)
            return response.json()


def _reply_content(data: Any) -> str:
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, str) or not content:
        error = data.get("error") if isinstance(data, dict) else None
        raise MalformedResponse(error or "Response has no content")
    return content


class ChatSession:
    def __init__(self, store: SessionStore, relay: RelayClient):
        self.store = store
        self.relay = relay
        self.state = ChatState.UNINITIALIZED
        self.context: Optional[ChatContext] = None
        self._log: List[LogEntry] = []

    @property
    def is_loading(self) -> bool:
        return self.state is ChatState.AWAITING_RESPONSE

    @property
    def wire_log(self) -> List[LogEntry]:
        return [entry for entry in self._log if entry.in_history]

    @property
    def display_log(self) -> List[LogEntry]:
        return [entry for entry in self._log if entry.visible_to_user]

    def history(self) -> List[Dict[str, str]]:
        """Wire log without the system prompt, as sent to the relay."""
        return [entry.as_message() for entry in self.wire_log if entry.role != "system"]

    def initialize(self) -> ChatState:
        if self.state is not ChatState.UNINITIALIZED:
            return self.state

        try:
            context = load_session(self.store)
        except SessionMissing as exc:
            logger.info("Redirecting to model selection: %s", exc)
            self.state = ChatState.REDIRECTED
            return self.state

        metadata = context.metadata
        self.context = context
        self._log = [
            LogEntry(
                "system",
                build_twin_prompt(metadata.role, metadata.text_sample),
                visible_to_user=False,
            ),
            LogEntry(
                "assistant",
                build_welcome_message(metadata.role, metadata.text_sample, metadata.visibility),
                in_history=False,
            ),
        ]
        self.state = ChatState.READY
        return self.state

    def can_submit(self, text: str) -> bool:
        return bool(text.strip()) and self.context is not None and self.state is ChatState.READY

    def _build_request(self, text: str, history: List[Dict[str, str]]) -> Dict[str, Any]:
        metadata = self.context.metadata
        payload: Dict[str, Any] = {
            "message": text,
            "metadata": metadata.to_payload(),
            "history": history,
        }
        if metadata.is_private and self.context.user_context is not None:
            payload["userContext"] = self.context.user_context.to_payload()
        return payload

    async def submit(self, text: str) -> Optional[LogEntry]:
        """Send one user message and record the reply.

        Returns the assistant entry that was appended to the display log, or
        ``None`` when the submission was ignored (blank input, or a request
        is already in flight).
        """
        if not self.can_submit(text):
            if self.is_loading:
                logger.warning("Ignoring submission while a response is pending")
            return None

        # Captured before the user turn is appended; the relay adds it itself.
        history = self.history()
        self._log.append(LogEntry("user", text))
        self.state = ChatState.AWAITING_RESPONSE

        try:
            data = await self.relay.send(self._build_request(text, history))
            content = _reply_content(data)
        except MalformedResponse as exc:
            logger.warning("Relay returned no content: %s", exc)
            reply = LogEntry("assistant", MALFORMED_REPLY, in_history=False)
        except Exception as exc:
            logger.exception("Error sending message to relay: %s", exc)
            reply = LogEntry("assistant", ERROR_REPLY, in_history=False)
        else:
            reply = LogEntry("assistant", content)
        finally:
            self.state = ChatState.READY

        self._log.append(reply)
        return reply
