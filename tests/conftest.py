"""Pytest configuration and shared fixtures."""

import pytest

from automapper.catalog import Catalog
from automapper.models import CatalogColumn, TableConfiguration, TableRef


class FakeCatalog(Catalog):
    """
    In-memory catalog provider.

    Tables are registered with their columns (name, type_name, type_code)
    and primary key names. Every query is recorded in `calls`.
    """

    def __init__(self):
        self.columns: dict[TableRef, list[CatalogColumn]] = {}
        self.primary_keys: dict[TableRef, list[str]] = {}
        self.calls: list[tuple[str, TableRef]] = []

    def add_table(
        self,
        table_ref: TableRef,
        columns: list[tuple[str, str, int]],
        primary_keys: list[str] | None = None,
    ) -> None:
        self.columns[table_ref] = [
            CatalogColumn(name=name, type_name=type_name, type_code=type_code)
            for name, type_name, type_code in columns
        ]
        self.primary_keys[table_ref] = list(primary_keys or [])

    def get_columns(self, table_ref: TableRef) -> list[CatalogColumn]:
        self.calls.append(("columns", table_ref))
        return list(self.columns.get(table_ref, []))

    def get_primary_keys(self, table_ref: TableRef) -> list[str]:
        self.calls.append(("primary_keys", table_ref))
        return list(self.primary_keys.get(table_ref, []))


@pytest.fixture
def parcels_ref() -> TableRef:
    return TableRef(schema="public", table_name="parcels")


@pytest.fixture
def catalog(parcels_ref: TableRef) -> FakeCatalog:
    """
    Provide a catalog containing the `public.parcels` table.

    parcels(id INTEGER PRIMARY KEY, geom GEOMETRY, owner VARCHAR)
    """
    fake = FakeCatalog()
    fake.add_table(
        parcels_ref,
        [("id", "INTEGER", 4), ("geom", "GEOMETRY", 1111), ("owner", "VARCHAR", 12)],
        primary_keys=["id"],
    )
    return fake


@pytest.fixture
def parcels_cfg(parcels_ref: TableRef) -> TableConfiguration:
    return TableConfiguration(table_ref=parcels_ref)
