"""Catalog access: the abstract provider contract and its PostgreSQL implementation."""

from abc import ABC, abstractmethod

import psycopg
from psycopg import Connection

from automapper.exceptions import CatalogAccessError
from automapper.models import CatalogColumn, TableRef


class Catalog(ABC):
    """
    Answers column and primary key questions about a single table.

    Implementations must return an empty list (not raise) when the table
    does not exist, and raise CatalogAccessError for infrastructure failures.
    """

    @abstractmethod
    def get_columns(self, table_ref: TableRef) -> list[CatalogColumn]:
        """
        List the columns of a table in catalog order.

        Args:
            table_ref: Table to inspect

        Returns:
            Columns in ordinal order, empty if the table is unknown
        """
        pass

    @abstractmethod
    def get_primary_keys(self, table_ref: TableRef) -> list[str]:
        """
        List the primary key column names of a table in key order.

        Args:
            table_ref: Table to inspect

        Returns:
            Key column names, empty if the table has no primary key
        """
        pass


class PostgresCatalog(Catalog):
    """Read column and key metadata from PostgreSQL system catalogs."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def get_columns(self, table_ref: TableRef) -> list[CatalogColumn]:
        """Get all columns for a table (single pg_catalog query)."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT a.attname, t.typname, a.atttypid::int
                    FROM pg_catalog.pg_attribute a
                    JOIN pg_catalog.pg_class c ON c.oid = a.attrelid
                    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                    JOIN pg_catalog.pg_type t ON t.oid = a.atttypid
                    WHERE c.relname = %s
                      AND n.nspname = COALESCE(%s, current_schema())
                      AND (%s::text IS NULL OR %s = current_database())
                      AND c.relkind IN ('r', 'v', 'm', 'f', 'p')
                      AND a.attnum > 0
                      AND NOT a.attisdropped
                    ORDER BY a.attnum
                    """,
                    (
                        table_ref.table_name,
                        table_ref.schema,
                        table_ref.catalog,
                        table_ref.catalog,
                    ),
                )
                rows = cur.fetchall()
        except psycopg.Error as e:
            raise CatalogAccessError(table_ref, e) from e

        return [CatalogColumn(name=row[0], type_name=row[1], type_code=row[2]) for row in rows]

    def get_primary_keys(self, table_ref: TableRef) -> list[str]:
        """Get primary key columns for a table, ordered by key position."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT a.attname
                    FROM pg_catalog.pg_index i
                    JOIN pg_catalog.pg_class c ON c.oid = i.indrelid
                    JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                    CROSS JOIN LATERAL unnest(i.indkey) WITH ORDINALITY AS k(attnum, pos)
                    JOIN pg_catalog.pg_attribute a
                      ON a.attrelid = c.oid AND a.attnum = k.attnum
                    WHERE i.indisprimary
                      AND c.relname = %s
                      AND n.nspname = COALESCE(%s, current_schema())
                      AND (%s::text IS NULL OR %s = current_database())
                    ORDER BY k.pos
                    """,
                    (
                        table_ref.table_name,
                        table_ref.schema,
                        table_ref.catalog,
                        table_ref.catalog,
                    ),
                )
                rows = cur.fetchall()
        except psycopg.Error as e:
            raise CatalogAccessError(table_ref, e) from e

        return [row[0] for row in rows]
