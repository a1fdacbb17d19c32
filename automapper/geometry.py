"""Geometry column classifiers."""

from collections.abc import Callable, Iterable

from automapper.models import ColumnMetaData

# Predicate deciding whether a column holds spatial data
GeometryColumnTest = Callable[[ColumnMetaData], bool]


class TypeNameGeometryTest:
    """
    Classify columns as geometry by their database type name.

    Example:
        >>> test = TypeNameGeometryTest(["geometry", "geography"])
        >>> test(ColumnMetaData(name="geom", type_name="GEOMETRY", type_code=16390))
        True
    """

    def __init__(self, type_names: Iterable[str]):
        self.type_names = frozenset(name.lower() for name in type_names)

    def __call__(self, column: ColumnMetaData) -> bool:
        return column.type_name.lower() in self.type_names

    def __repr__(self) -> str:
        return f"TypeNameGeometryTest({sorted(self.type_names)})"


POSTGIS_GEOMETRY_TEST = TypeNameGeometryTest(["geometry", "geography"])
