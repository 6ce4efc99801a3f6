"""LLM interaction module.

Contains the chat-completion client, prompts, and query generation:
- Prompt composition per query style
- Response clean-up
- The generation pipeline
"""

from .client import UPSTREAM_FALLBACK_MESSAGE, call_chat_completion
from .composer import QueryStyle, build_model_names, compose_messages, to_model_name
from .generator import GenerationResult, GenerationState, generate_query
from .output import clean_response
from .prompts import RAILS_SYSTEM, SQL_SYSTEM

__all__ = [
    "UPSTREAM_FALLBACK_MESSAGE",
    "call_chat_completion",
    "QueryStyle",
    "build_model_names",
    "compose_messages",
    "to_model_name",
    "GenerationResult",
    "GenerationState",
    "generate_query",
    "clean_response",
    "RAILS_SYSTEM",
    "SQL_SYSTEM",
]
