"""Lenient, line-oriented extraction of table structure from schema text.

Pasted schemas are often partial or hand-written, so this is deliberately not
a DDL grammar. Each line is matched against a handful of patterns while a
"current table" cursor tracks the most recent CREATE TABLE:

- ``CREATE TABLE [IF NOT EXISTS] name`` opens (or resets) a table
- ``name TYPE ...`` adds a column
- ``PRIMARY KEY (col)`` / ``col ... PRIMARY KEY`` sets the primary key
- ``FOREIGN KEY (col) REFERENCES t(c)`` / ``col ... REFERENCES t(c)`` adds a relationship

Nothing here raises on malformed input; unrecognised lines are ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple

from .models import Relationship, SchemaModel

logger = logging.getLogger(__name__)

NO_SCHEMA_SUMMARY = "No schema provided"
NO_TABLES_MESSAGE = (
    "No tables found in schema. Please ensure the schema contains CREATE TABLE statements."
)

# Leading identifiers that never name a column
SKIP_KEYWORDS = frozenset({
    "CONSTRAINT", "PRIMARY", "FOREIGN", "KEY", "UNIQUE",
    "CHECK", "INDEX", "CREATE", "ALTER", "DROP",
})

COMMENT_PREFIXES = ("--", "/*")

_Q = r"[\"'`]?"
_IDENT = rf"{_Q}(\w+){_Q}"
# Optional schema qualifier, e.g. public.accounts
_QUALIFIED = rf"(?:{_Q}\w+{_Q}\.)?{_IDENT}"
_TARGET_COLUMN = rf"(?:\s*\(\s*{_IDENT})?"

CREATE_TABLE_RE = re.compile(
    rf"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?{_QUALIFIED}", re.IGNORECASE
)
COLUMN_RE = re.compile(rf"^{_IDENT}\s+")
CONSTRAINT_LINE_RE = re.compile(
    r"^(?:CONSTRAINT|PRIMARY|FOREIGN|KEY|UNIQUE|CHECK|INDEX)\b", re.IGNORECASE
)
TABLE_PK_RE = re.compile(rf"PRIMARY\s+KEY\s*\(\s*{_IDENT}", re.IGNORECASE)
INLINE_PK_RE = re.compile(rf"^{_IDENT}\s+.*PRIMARY\s+KEY", re.IGNORECASE)
TABLE_FK_RE = re.compile(
    rf"FOREIGN\s+KEY\s*\(\s*{_IDENT}\s*\)\s*REFERENCES\s+{_QUALIFIED}{_TARGET_COLUMN}",
    re.IGNORECASE,
)
INLINE_FK_RE = re.compile(
    rf"^{_IDENT}\s+.*REFERENCES\s+{_QUALIFIED}{_TARGET_COLUMN}", re.IGNORECASE
)


class SchemaExtraction(NamedTuple):
    summary: str
    table_names: list[str]
    model: SchemaModel


SchemaParser = Callable[[str], SchemaModel]


def _column_name(line: str) -> str | None:
    match = COLUMN_RE.match(line)
    if not match:
        return None
    column = match.group(1)
    if column.upper() in SKIP_KEYWORDS or CONSTRAINT_LINE_RE.match(line):
        return None
    return column


def _primary_key(line: str) -> str | None:
    # Table-level constraint wins over the inline modifier on the same line
    match = TABLE_PK_RE.search(line) or INLINE_PK_RE.match(line)
    return match.group(1) if match else None


def _foreign_key(table: str, line: str) -> Relationship | None:
    match = TABLE_FK_RE.search(line) or INLINE_FK_RE.match(line)
    if not match:
        return None
    from_column, to_table, to_column = match.groups()
    return Relationship(
        from_table=table,
        from_column=from_column,
        to_table=to_table,
        to_column=to_column or "id",
    )


def parse_schema(schema_text: str) -> SchemaModel:
    """Build a SchemaModel from raw schema text in a single pass."""
    model = SchemaModel()
    current = None

    for raw_line in schema_text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        create = CREATE_TABLE_RE.search(line)
        if create:
            current = model.start_table(create.group(1))
            continue

        if current is None:
            continue

        column = _column_name(line)
        if column:
            current.add_column(column)

        primary_key = _primary_key(line)
        if primary_key:
            current.primary_key = primary_key

        relationship = _foreign_key(current.name, line)
        if relationship:
            model.relationships.append(relationship)

    return model


def render_summary(model: SchemaModel) -> str:
    """Render the model as the text block shown to the language model."""
    table_names = model.table_names
    parts = [
        f"AVAILABLE TABLE NAMES (use ONLY these exact names): {', '.join(table_names)}\n\n",
        "Available Tables and Columns:\n",
    ]

    if not table_names:
        parts.append(NO_TABLES_MESSAGE)
    else:
        # Detail blocks keep declaration order
        for table in model.tables.values():
            parts.append(f"\nTable: {table.name}\n")
            if table.primary_key:
                parts.append(f"  Primary Key: {table.primary_key}\n")
            columns = ", ".join(table.columns) if table.columns else "(none found)"
            parts.append(f"  Columns: {columns}\n")

    if model.relationships:
        parts.append("\n\nTable Relationships:\n")
        for rel in model.relationships:
            parts.append(f"\n{rel.source} -> {rel.target}\n  (Join: {rel.join_condition})\n")

    return "".join(parts)


def extract(schema_text: str | None, parser: SchemaParser = parse_schema) -> SchemaExtraction:
    """Extract the schema summary, sorted table names and model from schema text."""
    if not schema_text or not schema_text.strip():
        return SchemaExtraction(NO_SCHEMA_SUMMARY, [], SchemaModel())

    model = parser(schema_text)
    logger.info(
        f"Extracted {len(model.tables)} tables, {len(model.relationships)} relationships"
    )
    return SchemaExtraction(render_summary(model), model.table_names, model)
