"""Identifier and clock helpers for lofty_chat.

Session and message ids are opaque random identifiers; timestamps are
epoch seconds.
"""

import time
import uuid

__all__ = [
    "new_id",
    "now_epoch",
]


def new_id() -> str:
    """Generate an opaque identifier (uuid4 hex)."""
    return uuid.uuid4().hex


def now_epoch() -> int:
    """Current time in epoch seconds."""
    return int(time.time())
