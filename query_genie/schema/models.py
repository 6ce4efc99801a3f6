from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TableDef:
    name: str
    columns: list[str] = field(default_factory=list)
    primary_key: str | None = None

    def add_column(self, column: str) -> None:
        if column not in self.columns:
            self.columns.append(column)


@dataclass(frozen=True)
class Relationship:
    from_table: str
    from_column: str
    to_table: str
    to_column: str = "id"

    @property
    def source(self) -> str:
        return f"{self.from_table}.{self.from_column}"

    @property
    def target(self) -> str:
        return f"{self.to_table}.{self.to_column}"

    @property
    def join_condition(self) -> str:
        return f"{self.source} = {self.target}"


@dataclass
class SchemaModel:
    """Tables in first-seen order plus the foreign-key relationships between them."""

    tables: dict[str, TableDef] = field(default_factory=dict)
    relationships: list[Relationship] = field(default_factory=list)

    @property
    def table_names(self) -> list[str]:
        """Exact table names, sorted for disclosure to the model."""
        return sorted(self.tables)

    def start_table(self, name: str) -> TableDef:
        # A repeated CREATE TABLE replaces the earlier definition
        table = TableDef(name=name)
        self.tables[name] = table
        return table
