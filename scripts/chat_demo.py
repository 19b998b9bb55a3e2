#!/usr/bin/env python
"""Interactive demo for lofty_chat.

Runs a terminal chat against Gemini (or the simulator when no key is
configured) and keeps state in the configured JSON file.

Usage:
    python scripts/chat_demo.py

Commands:
    /new            start a new session
    /sessions       list sessions
    /model ID       select a model
    /verify FILE    check a text file against the strategy in .env
    /quit           exit

Environment variables (via .env):
    LOFTY_GEMINI_API_KEY=your_api_key
    LOFTY_STORAGE_PATH=~/.lofty_chat/state.json
    LOFTY_DEMO_STRATEGY=Grow recurring revenue with small firms
    LOFTY_DEMO_MISSION=Help small firms make better decisions
"""

import asyncio
import logging
import os
from pathlib import Path

from lofty_chat import DocumentFile, JSONFileStore, LoftyChat, VerificationRequest
from lofty_chat.logging import configure_logging

configure_logging(level=logging.WARNING)


async def verify(chat: LoftyChat, file_name: str) -> None:
    path = Path(file_name).expanduser()
    request = VerificationRequest(
        document=DocumentFile(name=path.name, mime_type="text/plain", content=path.read_bytes()),
        business_strategy=os.environ.get("LOFTY_DEMO_STRATEGY", ""),
        mission_vision=os.environ.get("LOFTY_DEMO_MISSION", ""),
    )
    result = await chat.analyze_document(request)
    print(f"\nAlignment score: {result.alignment_score}")
    print(result.summary)
    for point in result.key_points:
        print(f"  {'+' if point.aligned else '-'} {point.point}")
    for recommendation in result.recommendations:
        print(f"  > {recommendation}")


async def main() -> None:
    async with LoftyChat(store_class=JSONFileStore) as chat:
        print(f"Model: {chat.system_prompt.selected_model} (type /quit to exit)")
        while True:
            line = (await asyncio.to_thread(input, "\nyou> ")).strip()
            if line == "/quit":
                break
            if line == "/new":
                await chat.create_session()
                continue
            if line == "/sessions":
                for session in chat.sessions:
                    marker = "*" if session == chat.active_session else " "
                    print(f" {marker} {session.title} ({len(session.messages)} messages)")
                continue
            if line.startswith("/model "):
                await chat.select_model(line.removeprefix("/model ").strip())
                continue
            if line.startswith("/verify "):
                await verify(chat, line.removeprefix("/verify ").strip())
                continue

            reply = await chat.send_message(line)
            if reply is not None:
                print(f"\nlofty> {reply.content}")
            for notification in chat.notifications.drain():
                print(f"[{notification.level}] {notification.title}: {notification.description}")


if __name__ == "__main__":
    asyncio.run(main())
