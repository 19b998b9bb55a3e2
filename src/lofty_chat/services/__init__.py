"""Service layer for lofty_chat.

This module exports the main service entry points.
"""

from lofty_chat.services.alignment import DocumentAlignmentAnalyzer, build_analysis_prompt
from lofty_chat.services.alignment_parsing import parse_verification_text
from lofty_chat.services.dispatch import MessageDispatcher
from lofty_chat.services.notifications import NotificationCenter
from lofty_chat.services.persistence import PersistenceAdapter
from lofty_chat.services.prompt_templates import (
    PROMPT_TEMPLATES,
    get_prompt_templates,
    get_template_by_id,
)
from lofty_chat.services.prompt_validator import validate_prompt
from lofty_chat.services.session_store import SessionStore
from lofty_chat.services.settings_store import SettingsStore
from lofty_chat.services.text_extraction import PlainTextExtractor

__all__ = [
    "PROMPT_TEMPLATES",
    "DocumentAlignmentAnalyzer",
    "MessageDispatcher",
    "NotificationCenter",
    "PersistenceAdapter",
    "PlainTextExtractor",
    "SessionStore",
    "SettingsStore",
    "build_analysis_prompt",
    "get_prompt_templates",
    "get_template_by_id",
    "parse_verification_text",
    "validate_prompt",
]
