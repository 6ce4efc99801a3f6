"""Custom exceptions for the application."""

from __future__ import annotations


class QueryGenieError(Exception):
    """Base class for all application errors."""

    pass


class PreconditionError(QueryGenieError):
    """Raised when a required input (API key, prompt, schema) is missing."""

    pass


class LLMError(QueryGenieError):
    """Raised when the chat-completion call fails."""

    pass


class TransportError(LLMError):
    """Raised on network failure or an unreadable response."""

    pass


class UpstreamError(LLMError):
    """Raised when the service answers with a structured error payload."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
