"""
Configuration management for automapper.

Loads and validates configuration from automapper.toml files using Pydantic.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from automapper.geometry import TypeNameGeometryTest
from automapper.models import TableConfiguration, TableRef

CONFIG_FILENAME = "automapper.toml"


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = SettingsConfigDict(env_prefix="AUTOMAPPER_DATABASE_")

    url: str = Field(
        default="postgresql://localhost/postgres",
        description="PostgreSQL connection URL",
    )
    default_schema: Optional[str] = Field(
        default="public",
        description="Schema used for table names without one (None: connection's current schema)",
    )


class GeometryConfig(BaseSettings):
    """Geometry column detection configuration."""

    type_names: list[str] = Field(
        default=["geometry", "geography"],
        description="Database type names treated as geometry (case-insensitive)",
    )

    def to_geometry_test(self) -> TypeNameGeometryTest:
        """Convert to a geometry classifier."""
        return TypeNameGeometryTest(self.type_names)


class TableSettings(BaseModel):
    """Mapping settings for one table."""

    name: str = Field(description="Table name: [catalog.][schema.]table")
    identifier_column: Optional[str] = Field(
        default=None, description="Identifier column (overrides primary key detection)"
    )
    geometry_column: Optional[str] = Field(
        default=None, description="Geometry column (overrides type-based detection)"
    )
    exclude_columns: list[str] = Field(
        default_factory=list, description="Columns left out of the metadata"
    )

    def to_table_configuration(
        self,
        default_schema: Optional[str] = None,
        extra_excludes: Optional[list[str]] = None,
    ) -> TableConfiguration:
        """Convert to TableConfiguration instance."""
        return TableConfiguration(
            table_ref=TableRef.parse(self.name).with_default_schema(default_schema),
            identifier_column=self.identifier_column,
            geometry_column=self.geometry_column,
            excluded_columns=frozenset(self.exclude_columns) | frozenset(extra_excludes or []),
        )


class Config(BaseSettings):
    """Main configuration for automapper."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    exclude_columns: list[str] = Field(
        default_factory=list, description="Columns excluded from every table"
    )
    tables: list[TableSettings] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to automapper.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            pydantic.ValidationError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from automapper.toml.

        Searches for automapper.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories. "
            f"Run 'automapper init' to create one."
        )

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write automapper.toml
        """
        lines = [
            "# automapper configuration",
            "",
            f"exclude_columns = {_toml(self.exclude_columns)}",
            "",
            "[database]",
            f"url = {_toml(self.database.url)}",
        ]
        if self.database.default_schema is not None:
            lines.append(f"default_schema = {_toml(self.database.default_schema)}")
        lines += [
            "",
            "[geometry]",
            f"type_names = {_toml(self.geometry.type_names)}",
        ]
        for table in self.tables:
            lines += ["", "[[tables]]", f"name = {_toml(table.name)}"]
            if table.identifier_column is not None:
                lines.append(f"identifier_column = {_toml(table.identifier_column)}")
            if table.geometry_column is not None:
                lines.append(f"geometry_column = {_toml(table.geometry_column)}")
            if table.exclude_columns:
                lines.append(f"exclude_columns = {_toml(table.exclude_columns)}")

        Path(path).write_text("\n".join(lines) + "\n")

    def table_configurations(self) -> list[TableConfiguration]:
        """Get a TableConfiguration for every configured table."""
        return [
            table.to_table_configuration(self.database.default_schema, self.exclude_columns)
            for table in self.tables
        ]

    def get_table(self, name: str) -> TableConfiguration:
        """
        Get the configuration for a table.

        Tables without an entry get a bare configuration carrying only the
        global exclusions.
        """
        default_schema = self.database.default_schema
        table_ref = TableRef.parse(name).with_default_schema(default_schema)
        for table in self.tables:
            cfg = table.to_table_configuration(default_schema, self.exclude_columns)
            if cfg.table_ref == table_ref:
                return cfg
        return TableConfiguration(
            table_ref=table_ref, excluded_columns=frozenset(self.exclude_columns)
        )


def _toml(value: str | list[str]) -> str:
    # JSON string and array syntax is valid TOML for plain strings
    return json.dumps(value)


# Default configuration instance
DEFAULT_CONFIG = Config()
