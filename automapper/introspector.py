"""Resolve table metadata from a database catalog."""

import logging
from collections.abc import Iterable
from typing import Optional

from automapper.catalog import Catalog
from automapper.exceptions import (
    AllColumnsExcludedError,
    MissingIdentifierError,
    TableNotFoundError,
)
from automapper.geometry import POSTGIS_GEOMETRY_TEST, GeometryColumnTest
from automapper.models import (
    CatalogColumn,
    ColumnMetaData,
    ResolutionWarning,
    ResolvedTable,
    TableConfiguration,
    TableMetaData,
    TableRef,
)

logger = logging.getLogger(__name__)


class CatalogIntrospector:
    """
    Resolve the columns, identifier and geometry of a table.

    Configured identifier/geometry columns take precedence. Without them the
    identifier comes from a single-column primary key and the geometry from
    the first column accepted by the geometry test.

    The introspector keeps no state between calls and does not cache.

    Example:
        >>> introspector = CatalogIntrospector()
        >>> resolved = introspector.resolve(
        ...     TableConfiguration(TableRef.parse("public.parcels")),
        ...     PostgresCatalog(conn),
        ... )
        >>> resolved.metadata.identifier.name
        'id'
    """

    def __init__(self, geometry_test: GeometryColumnTest = POSTGIS_GEOMETRY_TEST):
        self.geometry_test = geometry_test

    def resolve(self, cfg: TableConfiguration, catalog: Catalog) -> ResolvedTable:
        """
        Resolve metadata for one table.

        Args:
            cfg: Table configuration (reference, overrides, exclusions)
            catalog: Catalog provider to query

        Returns:
            ResolvedTable with the metadata and any non-fatal warnings

        Raises:
            TableNotFoundError: Catalog reports no columns for the table
            AllColumnsExcludedError: Every reported column is excluded
            MissingIdentifierError: No identifier column could be determined
            CatalogAccessError: Catalog query failed (propagated unchanged)
        """
        logger.info(f"Reading metadata for table {cfg.table_ref}")
        warnings: list[ResolutionWarning] = []

        columns = self._read_columns(cfg, catalog)
        identifier = self._determine_identifier(cfg, catalog, columns, warnings)
        geometry = self._determine_geometry(cfg, columns, warnings)

        metadata = TableMetaData(
            table_ref=cfg.table_ref,
            columns=tuple(
                ColumnMetaData(
                    name=col.name,
                    type_name=col.type_name,
                    type_code=col.type_code,
                    is_identifier=col.name == identifier,
                    is_geometry=col.name == geometry,
                )
                for col in columns
            ),
        )
        logger.debug(
            f"Resolved {cfg.table_ref}: {len(metadata.columns)} columns, "
            f"identifier={identifier}, geometry={geometry}"
        )
        return ResolvedTable(metadata=metadata, warnings=tuple(warnings))

    def read(self, cfg: TableConfiguration, catalog: Catalog) -> TableMetaData:
        """Resolve metadata for one table, discarding warnings."""
        return self.resolve(cfg, catalog).metadata

    def resolve_all(
        self, configurations: Iterable[TableConfiguration], catalog: Catalog
    ) -> dict[TableRef, ResolvedTable]:
        """
        Resolve several tables in order.

        Stops at the first failure; each table is resolved independently.
        """
        return {cfg.table_ref: self.resolve(cfg, catalog) for cfg in configurations}

    def _read_columns(self, cfg: TableConfiguration, catalog: Catalog) -> list[CatalogColumn]:
        reported = catalog.get_columns(cfg.table_ref)
        if not reported:
            raise TableNotFoundError(cfg.table_ref)

        columns = []
        excluded = []
        for col in reported:
            if cfg.is_excluded(col.name):
                logger.info(f"Column {col.name} in exclude list of configuration, so excluded.")
                excluded.append(col.name)
                continue
            columns.append(col)

        if not columns:
            raise AllColumnsExcludedError(cfg.table_ref, excluded)
        return columns

    def _determine_identifier(
        self,
        cfg: TableConfiguration,
        catalog: Catalog,
        columns: list[CatalogColumn],
        warnings: list[ResolutionWarning],
    ) -> str:
        if cfg.identifier_column is not None:
            candidate = cfg.identifier_column
        else:
            candidate = self._determine_primary_key(cfg.table_ref, catalog)

        if candidate is None:
            raise MissingIdentifierError(cfg.table_ref)
        if _find(columns, candidate) is not None:
            return candidate

        warnings.append(_unmatched("identifier", candidate, cfg.table_ref))
        raise MissingIdentifierError(cfg.table_ref, unmatched_column=candidate, warnings=tuple(warnings))

    def _determine_primary_key(self, table_ref: TableRef, catalog: Catalog) -> Optional[str]:
        keys = catalog.get_primary_keys(table_ref)
        if len(keys) == 1:
            return keys[0]
        if len(keys) > 1:
            logger.info(
                f"Table {table_ref} has a composite primary key ({', '.join(keys)}), "
                f"which cannot be used as identifier."
            )
        return None

    def _determine_geometry(
        self,
        cfg: TableConfiguration,
        columns: list[CatalogColumn],
        warnings: list[ResolutionWarning],
    ) -> Optional[str]:
        if cfg.geometry_column is not None:
            if _find(columns, cfg.geometry_column) is not None:
                return cfg.geometry_column
            warnings.append(_unmatched("geometry", cfg.geometry_column, cfg.table_ref))
            return None

        for col in columns:
            candidate = ColumnMetaData(name=col.name, type_name=col.type_name, type_code=col.type_code)
            if self.geometry_test(candidate):
                return col.name
        return None


def _find(columns: list[CatalogColumn], name: str) -> Optional[CatalogColumn]:
    for col in columns:
        if col.name == name:
            return col
    return None


def _unmatched(kind: str, column: str, table_ref: TableRef) -> ResolutionWarning:
    message = (
        f"Attempted to set column {column} as {kind} for table {table_ref}, "
        f"but no corresponding column found."
    )
    logger.warning(message)
    return ResolutionWarning(kind=kind, column=column, message=message)
