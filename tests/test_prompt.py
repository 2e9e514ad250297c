import pytest

from relay.prompt import (
    PRIVATE_CLOSING,
    PUBLIC_CLOSING,
    Role,
    build_system_prompt,
    build_welcome_message,
)


@pytest.mark.parametrize(
    "role,expected",
    [
        ("Teacher", Role.TEACHER),
        ("COACH", Role.COACH),
        (" chatbot ", Role.OTHER),
        ("chatbot", Role.CHATBOT),
        ("assistant", Role.ASSISTANT),
        ("Sommelier", Role.OTHER),
        ("other", Role.OTHER),
        ("", Role.OTHER),
    ],
)
def test_role_parse(role, expected):
    assert Role.parse(role) is expected


def test_teacher_welcome():
    text = build_welcome_message("Teacher", "algebra", "public")
    assert text.startswith("Welcome!")
    assert 'as a Teacher with expertise in "algebra".' in text
    assert text.endswith(PUBLIC_CLOSING)


@pytest.mark.parametrize(
    "role,opening",
    [
        ("chatbot", "Hello!"),
        ("Assistant", "Hi there!"),
        ("coach", "Hey there!"),
    ],
)
def test_known_role_openings(role, opening):
    assert build_welcome_message(role, "chess", "public").startswith(opening)


def test_padded_role_uses_default_template():
    text = build_welcome_message(" teacher ", "algebra", "public")
    assert text.startswith("Hello!")
    assert 'with the role of " teacher "' in text


def test_unknown_role_uses_default_template():
    text = build_welcome_message("Sommelier", "Burgundy wines", "public")
    assert text.startswith("Hello!")
    assert 'with the role of "Sommelier"' in text
    assert "Burgundy wines" in text


def test_private_closing():
    text = build_welcome_message("coach", "running", "private")
    assert text.endswith(PRIVATE_CLOSING)
    assert PUBLIC_CLOSING not in text


def test_system_prompt_mentions_role_and_subject():
    prompt = build_system_prompt("Teacher", "algebra")
    assert prompt.startswith("You are an AI with the role of Teacher.")
    assert 'expertise in "algebra"' in prompt
    assert "tone" in prompt
    assert build_system_prompt("Teacher", "algebra") == prompt
