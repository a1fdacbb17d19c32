"""
automapper - Catalog-driven table metadata for object-relational mapping.

This package provides tools for:
- Reading a table's columns from a database catalog
- Determining the identifier column (configured or single-column primary key)
- Detecting the geometry column of spatial tables
"""

__version__ = "0.1.0"

from automapper.catalog import Catalog, PostgresCatalog
from automapper.exceptions import (
    AllColumnsExcludedError,
    AutomapperError,
    CatalogAccessError,
    MetadataResolutionError,
    MissingIdentifierError,
    TableNotFoundError,
)
from automapper.geometry import POSTGIS_GEOMETRY_TEST, GeometryColumnTest, TypeNameGeometryTest
from automapper.introspector import CatalogIntrospector
from automapper.models import (
    CatalogColumn,
    ColumnMetaData,
    ResolutionWarning,
    ResolvedTable,
    TableConfiguration,
    TableMetaData,
    TableRef,
)

__all__ = [
    "AllColumnsExcludedError",
    "AutomapperError",
    "Catalog",
    "CatalogAccessError",
    "CatalogColumn",
    "CatalogIntrospector",
    "ColumnMetaData",
    "GeometryColumnTest",
    "MetadataResolutionError",
    "MissingIdentifierError",
    "POSTGIS_GEOMETRY_TEST",
    "PostgresCatalog",
    "ResolutionWarning",
    "ResolvedTable",
    "TableConfiguration",
    "TableMetaData",
    "TableNotFoundError",
    "TableRef",
    "TypeNameGeometryTest",
    "__version__",
]
