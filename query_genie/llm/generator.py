"""Query generation: validate inputs, extract schema, compose prompt, call the model.

Each call walks one pass of the generation state machine:

    IDLE -> VALIDATING -> EXTRACTING -> COMPOSING -> AWAITING_MODEL
         -> DISPLAYING | DISPLAYING_ERROR

Missing inputs raise PreconditionError before any network attempt. Model
failures are terminal for the call and come back as an error result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Callable

from ..core.exceptions import LLMError, PreconditionError
from ..schema import extract
from .client import call_chat_completion
from .composer import QueryStyle, compose_messages
from .output import clean_response

logger = logging.getLogger(__name__)

MISSING_API_KEY = "Please enter and save your OpenAI API key."
MISSING_PROMPT = "Please enter a prompt."
MISSING_SCHEMA = "Please provide a schema."
GENERIC_FAILURE = "Failed to generate query"

ChatFunction = Callable[[list[dict[str, str]], str], str]


class GenerationState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    COMPOSING = "composing"
    AWAITING_MODEL = "awaiting_model"
    DISPLAYING = "displaying"
    DISPLAYING_ERROR = "displaying_error"


TERMINAL_STATES = frozenset({GenerationState.DISPLAYING, GenerationState.DISPLAYING_ERROR})


@dataclass
class GenerationResult:
    style: QueryStyle
    ok: bool
    output: str = ""
    error: str | None = None
    table_names: list[str] = field(default_factory=list)
    states: list[GenerationState] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.style.title

    @property
    def copyable(self) -> bool:
        # Copy is only offered for a successful result
        return self.ok

    @property
    def state(self) -> GenerationState:
        return self.states[-1] if self.states else GenerationState.IDLE


def _validate(api_key: str, user_request: str, schema_text: str) -> None:
    if not api_key:
        raise PreconditionError(MISSING_API_KEY)
    if not user_request:
        raise PreconditionError(MISSING_PROMPT)
    if not schema_text:
        raise PreconditionError(MISSING_SCHEMA)


def generate_query(
    style: QueryStyle | str,
    user_request: str | None,
    schema_text: str | None,
    api_key: str | None,
    chat: ChatFunction = call_chat_completion,
) -> GenerationResult:
    """Generate a query in the requested style from a natural-language request.

    Args:
        style: QueryStyle (or its value, "sql" / "rails")
        user_request: The natural-language request
        schema_text: Raw schema definition text
        api_key: Credential passed to the chat function
        chat: Callable taking (messages, api_key) and returning the raw model text

    Raises:
        PreconditionError: if the API key, request or schema is missing
    """
    style = QueryStyle(style)
    states = [GenerationState.IDLE]

    def advance(state: GenerationState) -> None:
        states.append(state)
        logger.debug(f"Generation state: {state.value}")

    advance(GenerationState.VALIDATING)
    api_key = (api_key or "").strip()
    user_request = (user_request or "").strip()
    schema_text = (schema_text or "").strip()
    _validate(api_key, user_request, schema_text)

    advance(GenerationState.EXTRACTING)
    summary, table_names, _ = extract(schema_text)

    advance(GenerationState.COMPOSING)
    messages = compose_messages(style, schema_text, summary, table_names, user_request)

    advance(GenerationState.AWAITING_MODEL)
    logger.info(f"Generating {style.value} query over {len(table_names)} tables")
    try:
        content = chat(messages, api_key)
    except LLMError as exc:
        logger.error(f"Query generation failed: {exc}")
        advance(GenerationState.DISPLAYING_ERROR)
        return GenerationResult(
            style=style,
            ok=False,
            error=str(exc) or GENERIC_FAILURE,
            table_names=table_names,
            states=states,
        )

    advance(GenerationState.DISPLAYING)
    output = clean_response(content, style)
    logger.info(f"Generated {style.value} query ({len(output)} chars)")
    return GenerationResult(
        style=style,
        ok=True,
        output=output,
        table_names=table_names,
        states=states,
    )
