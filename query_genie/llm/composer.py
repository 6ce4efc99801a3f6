"""Prompt composition for the two supported query styles."""

from __future__ import annotations

from enum import Enum

from .prompts import (
    MODEL_NAMES_HEADER,
    PROCESS_HEADER,
    RAILS_PROCESS_STEPS,
    RAILS_SYSTEM,
    SCHEMA_DEFINITION_HEADER,
    SCHEMA_DETAILS_HEADER,
    SQL_PROCESS_STEPS,
    SQL_SYSTEM,
    TABLE_NAMES_HEADER,
    USER_REQUEST_HEADER,
)


class QueryStyle(str, Enum):
    """Output conventions the generator can target."""
    SQL = "sql"
    RAILS = "rails"

    @property
    def fence_tag(self) -> str:
        """Language tag the model tends to put on fenced output."""
        return "ruby" if self is QueryStyle.RAILS else "sql"

    @property
    def title(self) -> str:
        if self is QueryStyle.RAILS:
            return "Generated Rails Active Record Query"
        return "Generated SQL"

    @property
    def system_prompt(self) -> str:
        return RAILS_SYSTEM if self is QueryStyle.RAILS else SQL_SYSTEM

    @property
    def process_steps(self) -> tuple[str, ...]:
        return RAILS_PROCESS_STEPS if self is QueryStyle.RAILS else SQL_PROCESS_STEPS


def to_model_name(table: str) -> str:
    """Naive Rails model name: drop one trailing 's', capitalize the first letter.

    Irregular plurals are not handled. Names ending in "ss" (address, business)
    are already singular and keep their last letter.
    """
    singular = table[:-1] if table.endswith("s") and not table.endswith("ss") else table
    return singular[:1].upper() + singular[1:]


def build_model_names(table_names: list[str]) -> str:
    return ", ".join(f"{to_model_name(t)} (from table: {t})" for t in table_names)


def _numbered(steps: tuple[str, ...]) -> str:
    return "\n".join(f"{i}. {step}" for i, step in enumerate(steps, start=1))


def build_user_message(
    style: QueryStyle,
    schema_text: str,
    summary: str,
    table_names: list[str],
    user_request: str,
) -> str:
    sections = [f"{TABLE_NAMES_HEADER}\n{', '.join(table_names)}"]
    if style is QueryStyle.RAILS:
        sections.append(f"{MODEL_NAMES_HEADER}\n{build_model_names(table_names)}")
    sections += [
        f"{SCHEMA_DETAILS_HEADER}\n{summary}",
        f"{SCHEMA_DEFINITION_HEADER}\n{schema_text}",
        f"{USER_REQUEST_HEADER}\n{user_request}",
        f"{PROCESS_HEADER}\n{_numbered(style.process_steps)}",
    ]
    return "\n\n".join(sections)


def compose_messages(
    style: QueryStyle,
    schema_text: str,
    summary: str,
    table_names: list[str],
    user_request: str,
) -> list[dict[str, str]]:
    """Build the [system, user] message pair for a generation request."""
    style = QueryStyle(style)
    return [
        {"role": "system", "content": style.system_prompt},
        {
            "role": "user",
            "content": build_user_message(style, schema_text, summary, table_names, user_request),
        },
    ]
