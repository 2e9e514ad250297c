#!/usr/bin/env python3
"""
twin-chat: talk to an AI twin from the terminal.

    COMMAND     WHAT IT DOES
    -------     ------------------------------------------
    chat        Pick a model from the directory and chat (default)
    serve       Start the chat relay server

Inside a chat, ``/change`` goes back to model selection and ``/quit`` exits.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from client.conversation import ChatSession, ChatState, RelayClient
from client.directory import ModelDirectory
from client.models import ModelMetadata
from client.session import SessionStore, View, start_chat


logger = logging.getLogger(__name__)

CHANGE_MODEL = "/change"
QUIT = "/quit"


def _prompt(text: str) -> Optional[str]:
    try:
        return input(text)
    except EOFError:
        return None


def select_model(directory: ModelDirectory) -> Optional[ModelMetadata]:
    print("\n  AI Chat - Model Selection")
    print("  Select a model to create a custom AI chatbot using its metadata\n")
    print("  Loading models...")
    models: List[ModelMetadata] = directory.fetch_models()

    if not models:
        print("  No models found")
        return None

    for index, model in enumerate(models, start=1):
        print(f"  [{index}] {model.display_name}")
        print(f"      Address: {model.short_address}")
    print(f"\n  Metadata: {directory.metadata_url}")

    while True:
        choice = _prompt("\n  Model number to chat with (q to quit): ")
        if choice is None or choice.strip().lower() in {"q", "quit"}:
            return None
        if choice.strip().isdigit() and 1 <= int(choice) <= len(models):
            return models[int(choice) - 1]
        print("  Pick one of the listed numbers.")


def _print_header(session: ChatSession) -> None:
    metadata = session.context.metadata
    kind = "Private Model" if metadata.is_private else "Public Model"
    print(f"\n== {metadata.role} ==")
    print(f"Based on: {metadata.text_sample}")
    print(f"{kind} - Created: {metadata.created_at.date().isoformat()}")
    print(f"({CHANGE_MODEL} to pick another model, {QUIT} to exit)\n")


def _print_entry(role: str, content: str) -> None:
    label = "you" if role == "user" else "twin"
    print(f"[{label}] {content}\n")


async def run_chat(session: ChatSession) -> Optional[View]:
    if session.initialize() is ChatState.REDIRECTED:
        return View.SELECTION

    _print_header(session)
    for entry in session.display_log:
        _print_entry(entry.role, entry.content)

    while True:
        text = await asyncio.to_thread(_prompt, "> ")
        if text is None or text.strip() == QUIT:
            return None
        if text.strip() == CHANGE_MODEL:
            return View.SELECTION
        if not session.can_submit(text):
            continue
        print("Sending...")
        reply = await session.submit(text)
        if reply is not None:
            _print_entry(reply.role, reply.content)


def cmd_chat(args) -> int:
    directory = ModelDirectory(metadata_url=args.directory_url)
    relay = RelayClient(url=args.relay_url)
    store = SessionStore()

    view: Optional[View] = View.SELECTION
    while view is not None:
        if view is View.SELECTION:
            selected = select_model(directory)
            if selected is None:
                return 0
            view = start_chat(store, selected)
        else:
            view = asyncio.run(run_chat(ChatSession(store, relay)))
    return 0


def cmd_serve(args) -> int:
    from app.main import run

    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twin-chat", description="Chat with an AI twin.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.set_defaults(func=cmd_chat, relay_url=None, directory_url=None)
    sub = parser.add_subparsers(dest="command")

    chat = sub.add_parser("chat", help="Pick a model and chat (default)")
    chat.add_argument("--relay-url", default=None, help="Chat relay endpoint (env: RELAY_URL)")
    chat.add_argument(
        "--directory-url", default=None, help="Model metadata source (env: MODEL_DIRECTORY_URL)"
    )
    chat.set_defaults(func=cmd_chat)

    serve = sub.add_parser("serve", help="Start the chat relay server")
    serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s - %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
