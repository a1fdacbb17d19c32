"""
Core data models for automapper.

Defines the value types used to describe a table reference, the per-table
mapping configuration, and the resolved column/table metadata produced by
catalog introspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TableRef:
    """
    Identifies a table by catalog, schema and table name.

    Catalog and schema are optional; when absent the catalog provider
    falls back to its own defaults (e.g. the connection's current schema).
    """

    table_name: str
    schema: Optional[str] = None
    catalog: Optional[str] = None

    @classmethod
    def parse(cls, name: str) -> TableRef:
        """
        Build a TableRef from dotted text.

        Accepts "table", "schema.table" or "catalog.schema.table".

        Raises:
            ValueError: If the text is empty, has empty parts, or has more
                than three parts
        """
        parts = name.strip().split(".")
        if len(parts) > 3 or any(not p for p in parts):
            raise ValueError(
                f"Table reference must be in the form `[catalog.][schema.]table`, got {name!r}."
            )
        if len(parts) == 3:
            return cls(catalog=parts[0], schema=parts[1], table_name=parts[2])
        if len(parts) == 2:
            return cls(schema=parts[0], table_name=parts[1])
        return cls(table_name=parts[0])

    def with_default_schema(self, schema: Optional[str]) -> TableRef:
        """Return a copy with schema filled in when it is not set."""
        if self.schema is not None or schema is None:
            return self
        return TableRef(catalog=self.catalog, schema=schema, table_name=self.table_name)

    def __str__(self) -> str:
        return ".".join(p for p in (self.catalog, self.schema, self.table_name) if p)


@dataclass(frozen=True)
class TableConfiguration:
    """
    Per-table mapping settings.

    Attributes:
        table_ref: Table to resolve
        identifier_column: Explicit identifier column (overrides primary key lookup)
        geometry_column: Explicit geometry column (overrides type-based detection)
        excluded_columns: Column names left out of the metadata (case-insensitive)
    """

    table_ref: TableRef
    identifier_column: Optional[str] = None
    geometry_column: Optional[str] = None
    excluded_columns: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of names but store an immutable set
        if not isinstance(self.excluded_columns, frozenset):
            object.__setattr__(self, "excluded_columns", frozenset(self.excluded_columns))

    @property
    def catalog(self) -> Optional[str]:
        return self.table_ref.catalog

    @property
    def schema(self) -> Optional[str]:
        return self.table_ref.schema

    @property
    def table_name(self) -> str:
        return self.table_ref.table_name

    def is_excluded(self, column_name: str) -> bool:
        """Check if column is in the exclude list (case-insensitive)."""
        lowered = column_name.lower()
        return any(lowered == excluded.lower() for excluded in self.excluded_columns)


@dataclass(frozen=True)
class CatalogColumn:
    """A column as reported by the catalog, before any resolution."""

    name: str
    type_name: str
    type_code: int


@dataclass(frozen=True)
class ColumnMetaData:
    """
    A resolved table column.

    type_code is the database-reported numeric type (a type OID for
    PostgreSQL), type_name the database-reported type name.
    """

    name: str
    type_name: str
    type_code: int
    is_identifier: bool = False
    is_geometry: bool = False


@dataclass(frozen=True)
class TableMetaData:
    """
    Resolved metadata for a single table.

    Columns keep the order in which the catalog reported them. At most one
    column is flagged as identifier and at most one as geometry.
    """

    table_ref: TableRef
    columns: tuple[ColumnMetaData, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))
        if not self.columns:
            raise ValueError(f"Table metadata for {self.table_ref} has no columns")

        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names in metadata for {self.table_ref}")
        if sum(c.is_identifier for c in self.columns) > 1:
            raise ValueError(f"More than one identifier column for {self.table_ref}")
        if sum(c.is_geometry for c in self.columns) > 1:
            raise ValueError(f"More than one geometry column for {self.table_ref}")

    @property
    def column_names(self) -> list[str]:
        """Column names in catalog order."""
        return [c.name for c in self.columns]

    @property
    def identifier(self) -> Optional[ColumnMetaData]:
        """Get the identifier column."""
        for col in self.columns:
            if col.is_identifier:
                return col
        return None

    @property
    def geometry(self) -> Optional[ColumnMetaData]:
        """Get the geometry column."""
        for col in self.columns:
            if col.is_geometry:
                return col
        return None

    def get_column(self, name: str) -> Optional[ColumnMetaData]:
        """Get column by exact name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None


@dataclass(frozen=True)
class ResolutionWarning:
    """
    A non-fatal problem found while resolving a table.

    Attributes:
        kind: "identifier" or "geometry"
        column: Column name that could not be matched
        message: Human-readable description (same text as the log record)
    """

    kind: str
    column: str
    message: str


@dataclass(frozen=True)
class ResolvedTable:
    """Resolved table metadata together with any non-fatal warnings."""

    metadata: TableMetaData
    warnings: tuple[ResolutionWarning, ...] = ()

    @property
    def table_ref(self) -> TableRef:
        return self.metadata.table_ref

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
