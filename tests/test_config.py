"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from automapper.config import Config, GeometryConfig, TableSettings
from automapper.geometry import TypeNameGeometryTest
from automapper.models import ColumnMetaData, TableRef

SAMPLE = """
exclude_columns = ["last_modified"]

[database]
url = "postgresql://gis@localhost/gis"
default_schema = "cadastre"

[geometry]
type_names = ["geometry", "sdo_geometry"]

[[tables]]
name = "parcels"
identifier_column = "parcel_id"
exclude_columns = ["internal_notes"]

[[tables]]
name = "public.roads"
geometry_column = "centerline"
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "automapper.toml"
    path.write_text(SAMPLE)
    return path


def test_defaults() -> None:
    config = Config()

    assert config.database.default_schema == "public"
    assert config.geometry.type_names == ["geometry", "geography"]
    assert config.tables == []
    assert config.exclude_columns == []


def test_from_toml(config_file: Path) -> None:
    config = Config.from_toml(config_file)

    assert config.database.url == "postgresql://gis@localhost/gis"
    assert config.database.default_schema == "cadastre"
    assert [t.name for t in config.tables] == ["parcels", "public.roads"]
    assert config.tables[0].identifier_column == "parcel_id"


def test_from_toml_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Config.from_toml(tmp_path / "nope.toml")


def test_from_toml_invalid(tmp_path: Path) -> None:
    path = tmp_path / "automapper.toml"
    path.write_text('[[tables]]\nidentifier_column = "id"\n')

    with pytest.raises(ValidationError):
        Config.from_toml(path)


def test_find_and_load_walks_up(config_file: Path) -> None:
    nested = config_file.parent / "a" / "b"
    nested.mkdir(parents=True)

    config = Config.find_and_load(nested)

    assert config.database.default_schema == "cadastre"


def test_find_and_load_not_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Path, "exists", lambda self: False)

    with pytest.raises(FileNotFoundError, match="automapper init"):
        Config.find_and_load(tmp_path)


def test_table_configurations(config_file: Path) -> None:
    parcels, roads = Config.from_toml(config_file).table_configurations()

    assert parcels.table_ref == TableRef(schema="cadastre", table_name="parcels")
    assert parcels.identifier_column == "parcel_id"
    assert parcels.excluded_columns == frozenset({"internal_notes", "last_modified"})
    assert roads.table_ref == TableRef(schema="public", table_name="roads")
    assert roads.geometry_column == "centerline"
    assert roads.excluded_columns == frozenset({"last_modified"})


def test_get_table_configured(config_file: Path) -> None:
    config = Config.from_toml(config_file)

    cfg = config.get_table("cadastre.parcels")

    assert cfg.identifier_column == "parcel_id"


def test_get_table_unconfigured(config_file: Path) -> None:
    cfg = Config.from_toml(config_file).get_table("buildings")

    assert cfg.table_ref == TableRef(schema="cadastre", table_name="buildings")
    assert cfg.identifier_column is None
    assert cfg.geometry_column is None
    assert cfg.excluded_columns == frozenset({"last_modified"})


def test_to_toml_round_trip(config_file: Path, tmp_path: Path) -> None:
    config = Config.from_toml(config_file)
    out = tmp_path / "copy.toml"

    config.to_toml(out)

    assert Config.from_toml(out) == config


def test_default_to_toml_round_trip(tmp_path: Path) -> None:
    out = tmp_path / "automapper.toml"

    Config().to_toml(out)

    assert Config.from_toml(out) == Config()


def test_geometry_config_to_test() -> None:
    test = GeometryConfig(type_names=["SDO_GEOMETRY"]).to_geometry_test()

    assert isinstance(test, TypeNameGeometryTest)
    assert test(ColumnMetaData(name="shape", type_code=0, type_name="sdo_geometry"))


def test_table_settings_without_default_schema() -> None:
    cfg = TableSettings(name="parcels").to_table_configuration()

    assert cfg.table_ref == TableRef(table_name="parcels")
