from __future__ import annotations

import logging
from typing import Callable, List

from langchain_core.language_models.chat_models import BaseChatModel

from config.settings import Settings
from relay.errors import ConfigurationError, InvalidRequest, ProviderError
from relay.llm import build_llm, extract_reply, to_lc_messages
from relay.prompt import build_system_prompt
from relay.schemas import ChatTurn, RelayMetadata, RelayRequest, RelayResponse


logger = logging.getLogger(__name__)

LLMFactory = Callable[[Settings], BaseChatModel]


def _replayable_history(history: List[ChatTurn]) -> List[dict]:
    turns = []
    for turn in history:
        if turn.role == "system":
            # The relay owns the one system message; never replay or echo a client one.
            logger.warning("Dropping system entry from client history")
            continue
        turns.append(turn.model_dump())
    return turns


def relay_chat(
    req: RelayRequest,
    settings: Settings,
    llm_factory: LLMFactory = build_llm,
) -> RelayResponse:
    """Forward one user message to the provider and return the updated history.

    The outbound conversation is ``[system] + history + [user]``. The returned
    history is ``history + [user] + [assistant]``; the system prompt is never
    sent back.
    """
    message = req.message or ""
    if not message.strip():
        raise InvalidRequest("Message is required")

    if not settings.groq_api_key:
        raise ConfigurationError(
            "GROQ_API_KEY is not configured in environment variables"
        )

    metadata = req.metadata or RelayMetadata()
    history = _replayable_history(req.history or [])
    system_prompt = build_system_prompt(metadata.role, metadata.text_sample)

    logger.info(
        "Relaying chat: role=%s history_turns=%s message_len=%s private_context=%s",
        metadata.role,
        len(history),
        len(message),
        req.user_context is not None,
    )

    try:
        llm = llm_factory(settings)
        result = llm.invoke(to_lc_messages(system_prompt, history, message))
    except Exception as exc:
        logger.exception("Provider call failed: %s", exc)
        raise ProviderError(str(exc) or "Failed to process request") from exc

    reply = extract_reply(result)
    logger.info("Model responded: %s chars", len(reply))

    updated = history + [
        {"role": "user", "content": message},
        {"role": "assistant", "content": reply},
    ]
    return RelayResponse(content=reply, history=[ChatTurn(**turn) for turn in updated])
