from __future__ import annotations

from typing import List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_groq import ChatGroq

from config.settings import Settings

FALLBACK_REPLY = "Sorry, I couldn't generate a response."


def build_llm(settings: Settings) -> BaseChatModel:
    if not settings.groq_api_key:
        raise RuntimeError(
            "GROQ_API_KEY not set. Please configure it in environment or .env"
        )

    # No retries: a failed provider call is terminal for the request.
    return ChatGroq(
        model=settings.groq_model,
        api_key=settings.groq_api_key,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.provider_timeout,
        max_retries=0,
    )


def to_lc_messages(system_prompt: str, history: List[dict], message: str) -> List[BaseMessage]:
    """Outbound sequence: one system message, the replayed turns, then the new user turn."""
    messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]
    for item in history or []:
        role = (item.get("role") or "").lower()
        content = item.get("content") or ""
        if role == "assistant":
            messages.append(AIMessage(content=content))
        else:
            messages.append(HumanMessage(content=content))
    messages.append(HumanMessage(content=message))
    return messages


def extract_reply(result: object) -> str:
    content = getattr(result, "content", None)
    if isinstance(content, list):
        # Content blocks: keep the text parts only.
        content = "".join(
            block if isinstance(block, str) else str(block.get("text", ""))
            for block in content
            if isinstance(block, (str, dict))
        )
    if not isinstance(content, str) or not content:
        return FALLBACK_REPLY
    return content
