"""Interface contracts for lofty_chat.

This module exports all Protocol-based interfaces for dependency injection.
"""

from lofty_chat.interfaces.extractor import TextExtractorInterface
from lofty_chat.interfaces.gateway import ModelGatewayInterface
from lofty_chat.interfaces.notifier import NotifierInterface
from lofty_chat.interfaces.storage import KeyValueStoreInterface

__all__ = [
    "KeyValueStoreInterface",
    "ModelGatewayInterface",
    "NotifierInterface",
    "TextExtractorInterface",
]
