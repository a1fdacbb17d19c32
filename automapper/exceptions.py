"""Custom exceptions with helpful error messages."""

from automapper.models import ResolutionWarning, TableRef


class AutomapperError(Exception):
    """Base exception for automapper errors."""

    pass


class MetadataResolutionError(AutomapperError):
    """Expected failure to resolve table metadata."""

    def __init__(self, table_ref: TableRef, message: str):
        self.table_ref = table_ref
        super().__init__(message)


class TableNotFoundError(MetadataResolutionError):
    """Catalog reports no columns for the table."""

    def __init__(self, table_ref: TableRef, message: str | None = None):
        if message is None:
            message = (
                f"Table '{table_ref}' not found in catalog (no columns reported).\n\n"
                f"Suggestions:\n"
                f"1. Check table name spelling and case\n"
                f"2. Check the schema (defaults to the connection's current schema)\n"
                f"3. Ensure the connected role can see the table"
            )
        super().__init__(table_ref, message)


class AllColumnsExcludedError(TableNotFoundError):
    """Every column of an existing table is in the exclude list."""

    def __init__(self, table_ref: TableRef, excluded: list[str]):
        self.excluded = excluded
        super().__init__(
            table_ref,
            f"All columns of table '{table_ref}' are excluded by configuration: "
            f"{', '.join(excluded)}\n\n"
            f"Suggestions:\n"
            f"1. Remove some names from exclude_columns for this table\n"
            f"2. Check the global exclude_columns list",
        )


class MissingIdentifierError(MetadataResolutionError):
    """No usable identifier column could be determined."""

    def __init__(
        self,
        table_ref: TableRef,
        unmatched_column: str | None = None,
        warnings: tuple[ResolutionWarning, ...] = (),
    ):
        self.unmatched_column = unmatched_column
        self.warnings = tuple(warnings)
        detail = ""
        if unmatched_column is not None:
            detail = f" Column '{unmatched_column}' is not among the table's (non-excluded) columns."
        super().__init__(
            table_ref,
            f"No identifier column could be determined for table '{table_ref}'.{detail}\n\n"
            f"Suggestions:\n"
            f"1. Configure one explicitly:\n"
            f"   [[tables]]\n"
            f"   name = \"{table_ref}\"\n"
            f"   identifier_column = \"...\"\n\n"
            f"2. Add a single-column primary key to the table\n"
            f"3. Check that the primary key column is not excluded "
            f"(composite keys are not supported)",
        )


class CatalogAccessError(AutomapperError):
    """Querying the database catalog failed."""

    def __init__(self, table_ref: TableRef, cause: BaseException):
        self.table_ref = table_ref
        self.cause = cause
        super().__init__(f"Catalog query for table '{table_ref}' failed: {cause}")
