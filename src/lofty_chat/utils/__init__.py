"""Utility functions for lofty_chat.

This module contains internal utility functions.
"""

from lofty_chat.utils.ids import new_id, now_epoch
from lofty_chat.utils.imports import optional_import
from lofty_chat.utils.text import truncate_title

__all__ = [
    "new_id",
    "now_epoch",
    "optional_import",
    "truncate_title",
]
