"""Exception hierarchy for lofty_chat.

Gateway failures are caught inside the dispatcher and the alignment analyzer
and turned into degraded responses. Lookup and validation failures reach the
caller, since they point at a usage error the UI should prevent.
"""

__all__ = [
    "GatewayError",
    "LoftyChatError",
    "MalformedResponseError",
    "MissingCredentialError",
    "ModelGatewayError",
    "NotFoundError",
    "RequestValidationError",
    "SessionNotFoundError",
    "StorageError",
    "TemplateNotFoundError",
]


class LoftyChatError(Exception):
    """Base class for all lofty_chat errors."""


class ModelGatewayError(LoftyChatError):
    """Base class for failures talking to the completion API."""


class MissingCredentialError(ModelGatewayError):
    """No API key was available for a call that requires one."""

    def __init__(self, message: str = "Gemini API key is required") -> None:
        super().__init__(message)


class GatewayError(ModelGatewayError):
    """The completion API answered with a non-2xx status or was unreachable.

    Attributes:
        status_code: HTTP status, or None for transport errors and timeouts
        raw_body: Response body (or the transport error text)
    """

    def __init__(self, status_code: int | None, raw_body: str) -> None:
        self.status_code = status_code
        self.raw_body = raw_body
        if status_code is None:
            message = f"Gemini API unreachable: {raw_body[:200]}"
        else:
            message = f"Gemini API error: HTTP {status_code}"
        super().__init__(message)


class MalformedResponseError(ModelGatewayError):
    """The completion API answered 2xx but without candidate text."""

    def __init__(self, message: str = "No text response from Gemini API") -> None:
        super().__init__(message)


class NotFoundError(LoftyChatError, LookupError):
    """An operation referenced an unknown identifier."""


class SessionNotFoundError(NotFoundError):
    """No session with the given id exists."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class TemplateNotFoundError(NotFoundError):
    """No prompt template with the given id exists."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Prompt template not found: {template_id}")


class RequestValidationError(LoftyChatError, ValueError):
    """A request is missing required fields."""


class StorageError(LoftyChatError):
    """The durable key-value store could not complete an operation."""
