from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    error_code: str
    message: str
    details: dict[str, Any] | None = None


class ExtractRequest(BaseModel):
    schema_text: str


class RelationshipOut(BaseModel):
    from_table: str
    from_column: str
    to_table: str
    to_column: str


class TableOut(BaseModel):
    name: str
    columns: list[str] = Field(default_factory=list)
    primary_key: str | None = None


class ExtractResponse(BaseModel):
    summary: str
    table_names: list[str] = Field(default_factory=list)
    tables: list[TableOut] = Field(default_factory=list)
    relationships: list[RelationshipOut] = Field(default_factory=list)


class GenerateRequest(BaseModel):
    style: Literal["sql", "rails"]
    prompt: str
    # Falls back to the stored schema when omitted
    schema_text: str | None = None


class GenerateResponse(BaseModel):
    ok: bool
    title: str
    output: str = ""
    error: str | None = None
    copyable: bool = False
    table_names: list[str] = Field(default_factory=list)


class SlotValue(BaseModel):
    value: str
