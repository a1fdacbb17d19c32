"""Tests for geometry classifiers."""

from automapper.geometry import POSTGIS_GEOMETRY_TEST, TypeNameGeometryTest
from automapper.models import ColumnMetaData


def _column(type_name: str) -> ColumnMetaData:
    return ColumnMetaData(name="c", type_code=0, type_name=type_name)


def test_type_name_match_is_case_insensitive():
    test = TypeNameGeometryTest(["SDO_GEOMETRY"])

    assert test(_column("sdo_geometry")) is True
    assert test(_column("SDO_GEOMETRY")) is True
    assert test(_column("varchar")) is False


def test_postgis_types():
    assert POSTGIS_GEOMETRY_TEST(_column("geometry"))
    assert POSTGIS_GEOMETRY_TEST(_column("geography"))
    assert not POSTGIS_GEOMETRY_TEST(_column("box2d"))
    assert not POSTGIS_GEOMETRY_TEST(_column("text"))
