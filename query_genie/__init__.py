"""Query Genie.

Turns a pasted relational schema and a natural-language request into a SQL
statement or a Rails Active Record query, using an OpenAI-compatible
chat-completion model.

Package Structure:
    core/       - Core infrastructure (config, models, exceptions)
    schema/     - Lenient schema-text extraction and summary rendering
    llm/        - LLM interaction (client, prompts, composition, generation)
    storage/    - Persisted API key / schema slots behind a storage port
    main        - FastAPI application
    cli         - Command-line entry point
"""

# Core
from .core.config import (
    Settings,
    get_settings,
    get_cached_settings,
    clear_settings_cache,
)
from .core.exceptions import (
    LLMError,
    PreconditionError,
    QueryGenieError,
    TransportError,
    UpstreamError,
)

# Schema
from .schema import (
    Relationship,
    SchemaExtraction,
    SchemaModel,
    TableDef,
    extract,
    parse_schema,
    render_summary,
)

# LLM
from .llm import (
    GenerationResult,
    GenerationState,
    QueryStyle,
    build_model_names,
    call_chat_completion,
    clean_response,
    compose_messages,
    generate_query,
    to_model_name,
)

# Storage
from .storage import JsonFileStorage, MemoryStorage, StoragePort, Workspace

__all__ = [
    # Core - Config
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    # Core - Exceptions
    "LLMError",
    "PreconditionError",
    "QueryGenieError",
    "TransportError",
    "UpstreamError",
    # Schema
    "Relationship",
    "SchemaExtraction",
    "SchemaModel",
    "TableDef",
    "extract",
    "parse_schema",
    "render_summary",
    # LLM
    "GenerationResult",
    "GenerationState",
    "QueryStyle",
    "build_model_names",
    "call_chat_completion",
    "clean_response",
    "compose_messages",
    "generate_query",
    "to_model_name",
    # Storage
    "JsonFileStorage",
    "MemoryStorage",
    "StoragePort",
    "Workspace",
]
