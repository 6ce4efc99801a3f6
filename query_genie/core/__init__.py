"""Core infrastructure module.

Contains configuration, models, and exceptions.
"""

from .config import (
    Settings,
    get_settings,
    get_cached_settings,
    clear_settings_cache,
)
from .exceptions import (
    LLMError,
    PreconditionError,
    QueryGenieError,
    TransportError,
    UpstreamError,
)
from .models import (
    ErrorDetail,
    ExtractRequest,
    ExtractResponse,
    GenerateRequest,
    GenerateResponse,
    SlotValue,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    # Exceptions
    "LLMError",
    "PreconditionError",
    "QueryGenieError",
    "TransportError",
    "UpstreamError",
    # Models
    "ErrorDetail",
    "ExtractRequest",
    "ExtractResponse",
    "GenerateRequest",
    "GenerateResponse",
    "SlotValue",
]
