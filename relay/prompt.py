from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

PLATFORM_CONTEXT = "I'm an AI twin created on the AI Cloning Platform"

PRIVATE_CLOSING = (
    " Since I'm configured as a private model, I'll personalize my responses"
    " to you. Would you mind sharing a bit about yourself so I can assist you better?"
)
PUBLIC_CLOSING = " How can I help you today?"


def build_system_prompt(role: str, text_sample: str) -> str:
    """System prompt the relay puts in front of every provider call."""
    return (
        f"You are an AI with the role of {role}.\n"
        f'You have expertise in "{text_sample}" and should incorporate this knowledge into your responses.\n'
        f"Always respond in a style and with knowledge consistent with your role as {role} "
        f"and your expertise in {text_sample}.\n"
        f"If relevant, you may reference concepts, techniques, or terminologies related to "
        f"{text_sample} in your responses.\n"
        f"Your tone should match what would be expected from someone in the role of {role}."
    )


def build_twin_prompt(role: str, text_sample: str) -> str:
    """System entry the chat client keeps at the head of its own log."""
    return (
        "You are an AI twin created on the AI Cloning Platform with the role of "
        f'{role} and expertise in "{text_sample}".'
    )


class Role(str, Enum):
    CHATBOT = "chatbot"
    ASSISTANT = "assistant"
    TEACHER = "teacher"
    COACH = "coach"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "Role":
        key = (value or "").lower()
        for member in cls:
            if member is not cls.OTHER and member.value == key:
                return member
        return cls.OTHER


_GREETINGS: Dict[Role, Callable[[str, str], str]] = {
    Role.CHATBOT: lambda role, expertise: f"Hello! {PLATFORM_CONTEXT} as a {role} {expertise}.",
    Role.ASSISTANT: lambda role, expertise: f"Hi there! {PLATFORM_CONTEXT} as your personal {role} {expertise}.",
    Role.TEACHER: lambda role, expertise: f"Welcome! {PLATFORM_CONTEXT} as a {role} {expertise}.",
    Role.COACH: lambda role, expertise: f"Hey there! {PLATFORM_CONTEXT} as your {role} {expertise}.",
    Role.OTHER: lambda role, expertise: f'Hello! {PLATFORM_CONTEXT} with the role of "{role}" {expertise}.',
}


def build_welcome_message(role: str, text_sample: str, visibility: str) -> str:
    expertise = f'with expertise in "{text_sample}"'
    greeting = _GREETINGS[Role.parse(role)](role, expertise)
    if visibility == "private":
        return greeting + PRIVATE_CLOSING
    return greeting + PUBLIC_CLOSING
