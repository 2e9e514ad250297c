"""
Tests for session bootstrap and model directory fetching.
"""

import json
from datetime import datetime

import httpx
import pytest

from client.directory import ModelDirectory
from client.session import (
    METADATA_KEY,
    NoModelSelected,
    SessionMissing,
    SessionStore,
    View,
    load_session,
    start_chat,
)


RECORD = {
    "role": "Teacher",
    "textSample": "linear algebra and calculus",
    "address": "0x1234567890abcdef1234567890abcdef12345678",
}


# ---------------------------------------------------------------------------
# Session bootstrap
# ---------------------------------------------------------------------------

def test_start_chat_stores_metadata(teacher_model):
    store = SessionStore()
    assert start_chat(store, teacher_model) is View.CHAT

    stored = json.loads(store.get_item(METADATA_KEY))
    assert stored["role"] == "Teacher"
    assert stored["textSample"] == "algebra"
    assert stored["visibility"] == "public"


def test_session_store_is_plain_item_storage():
    store = SessionStore()
    assert store.get_item(METADATA_KEY) is None
    store.set_item(METADATA_KEY, "{}")
    assert store.get_item(METADATA_KEY) == "{}"
    assert not hasattr(store, "remove_item")


def test_start_chat_requires_selection():
    store = SessionStore()
    with pytest.raises(NoModelSelected):
        start_chat(store, None)
    assert store.get_item(METADATA_KEY) is None


def test_load_session_backfills_defaults():
    store = SessionStore()
    store.set_item(METADATA_KEY, json.dumps(RECORD))

    context = load_session(store)

    assert context.metadata.visibility == "public"
    assert isinstance(context.metadata.created_at, datetime)
    assert context.user_context is None


def test_load_session_private_gets_user_context():
    store = SessionStore()
    store.set_item(METADATA_KEY, json.dumps(dict(RECORD, visibility="private")))

    context = load_session(store)

    assert context.user_context.user_id == "user123"
    assert context.user_context.history == []


@pytest.mark.parametrize(
    "raw",
    [None, "", "not json", "42", json.dumps({"role": "Teacher"}), json.dumps(dict(RECORD, visibility="secret"))],
)
def test_load_session_missing_or_invalid(raw):
    store = SessionStore()
    if raw is not None:
        store.set_item(METADATA_KEY, raw)
    with pytest.raises(SessionMissing):
        load_session(store)


def test_metadata_display_helpers():
    store = SessionStore()
    store.set_item(METADATA_KEY, json.dumps(RECORD))
    metadata = load_session(store).metadata

    assert metadata.display_name == "Teacher (linear algebra ...)"
    assert metadata.short_address == "0x123456...345678"


# ---------------------------------------------------------------------------
# Model directory
# ---------------------------------------------------------------------------

def _directory(handler):
    return ModelDirectory(
        metadata_url="http://ipfs.test/record",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


def test_directory_returns_single_model():
    models = _directory(lambda request: httpx.Response(200, json=RECORD)).fetch_models()
    assert len(models) == 1
    assert models[0].role == "Teacher"
    assert models[0].visibility == "public"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "gateway down"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=[RECORD]),
        httpx.Response(200, json={"role": "Teacher"}),
    ],
)
def test_directory_soft_fails(response):
    assert _directory(lambda request: response).fetch_models() == []


def test_directory_network_error_is_empty():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    assert _directory(handler).fetch_models() == []
