"""Schema text extraction.

Turns pasted schema definitions into a SchemaModel and the summary text
disclosed to the language model.
"""

from .extractor import (
    NO_SCHEMA_SUMMARY,
    NO_TABLES_MESSAGE,
    SchemaExtraction,
    extract,
    parse_schema,
    render_summary,
)
from .models import Relationship, SchemaModel, TableDef

__all__ = [
    "NO_SCHEMA_SUMMARY",
    "NO_TABLES_MESSAGE",
    "SchemaExtraction",
    "extract",
    "parse_schema",
    "render_summary",
    "Relationship",
    "SchemaModel",
    "TableDef",
]
