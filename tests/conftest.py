import pytest
from unittest.mock import MagicMock

from langchain_core.messages import AIMessage

from client.models import ModelMetadata
from config.settings import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test starts without a provider key and with fresh settings."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def groq_key(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "test-key")
    get_settings.cache_clear()
    return "test-key"


@pytest.fixture
def fake_llm():
    llm = MagicMock()
    llm.invoke.return_value = AIMessage(content="Let's solve for x.")
    return llm


@pytest.fixture
def teacher_model():
    return ModelMetadata(
        role="Teacher",
        textSample="algebra",
        address="0x1234567890abcdef1234567890abcdef12345678",
    )


@pytest.fixture
def private_model():
    return ModelMetadata(
        role="Coach",
        textSample="marathon training",
        address="0xfeedfacefeedfacefeedfacefeedfacefeedface",
        visibility="private",
    )
