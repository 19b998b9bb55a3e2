"""Public models for lofty_chat.

This module exports all value objects used across the package.
"""

from lofty_chat.models.message import AttachmentMeta, Message, MessageRole
from lofty_chat.models.model_option import (
    LocalModel,
    LocalReason,
    ModelOption,
    ModelRoute,
    RemoteModel,
)
from lofty_chat.models.notification import Notification, NotificationLevel
from lofty_chat.models.prompt import PromptTemplate, PromptValidationResult, TemplateCategory
from lofty_chat.models.session import Session
from lofty_chat.models.settings import (
    NotificationSettings,
    SecuritySettings,
    SystemPromptSettings,
    UserProfile,
    push_prompt_history,
)
from lofty_chat.models.verification import (
    DocumentFile,
    KeyPoint,
    VerificationRequest,
    VerificationResult,
)

__all__ = [
    "AttachmentMeta",
    "DocumentFile",
    "KeyPoint",
    "LocalModel",
    "LocalReason",
    "Message",
    "MessageRole",
    "ModelOption",
    "ModelRoute",
    "Notification",
    "NotificationLevel",
    "NotificationSettings",
    "PromptTemplate",
    "PromptValidationResult",
    "RemoteModel",
    "SecuritySettings",
    "Session",
    "SystemPromptSettings",
    "TemplateCategory",
    "UserProfile",
    "VerificationRequest",
    "VerificationResult",
    "push_prompt_history",
]
