"""CLI commands for automapper."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
import psycopg
from pydantic import ValidationError

from automapper.catalog import PostgresCatalog
from automapper.config import CONFIG_FILENAME, Config, tomllib
from automapper.exceptions import AutomapperError
from automapper.introspector import CatalogIntrospector
from automapper.models import ResolvedTable, TableConfiguration


@click.group()
@click.version_option(package_name="automapper")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors")
def cli(verbose: bool, quiet: bool) -> None:
    """automapper - resolve table metadata for object-relational mapping."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.option("--path", type=click.Path(path_type=Path), default=CONFIG_FILENAME,
              help=f"File to write (default: {CONFIG_FILENAME})")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path, force: bool) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    Config().to_toml(path)
    click.echo(f"Wrote {path}")


@cli.command()
@click.argument("table")
@click.option("--config", "config_path", type=click.Path(path_type=Path),
              help="Configuration file (default: search for automapper.toml)")
@click.option("--url", help="PostgreSQL connection URL (overrides configuration)")
@click.option("--identifier", help="Identifier column (overrides configuration)")
@click.option("--geometry", help="Geometry column (overrides configuration)")
@click.option("--exclude", multiple=True, help="Column to exclude (repeatable)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect(
    table: str,
    config_path: Optional[Path],
    url: Optional[str],
    identifier: Optional[str],
    geometry: Optional[str],
    exclude: tuple[str, ...],
    output_json: bool,
) -> None:
    """Resolve metadata for TABLE ([catalog.][schema.]table)."""
    config = _load_config(config_path)

    try:
        cfg = config.get_table(table)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    cfg = TableConfiguration(
        table_ref=cfg.table_ref,
        identifier_column=identifier if identifier is not None else cfg.identifier_column,
        geometry_column=geometry if geometry is not None else cfg.geometry_column,
        excluded_columns=cfg.excluded_columns | frozenset(exclude),
    )

    results = _resolve(config, [cfg], url)
    _print_results(results, output_json, as_list=False)


@cli.command("inspect-all")
@click.option("--config", "config_path", type=click.Path(path_type=Path),
              help="Configuration file (default: search for automapper.toml)")
@click.option("--url", help="PostgreSQL connection URL (overrides configuration)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect_all(config_path: Optional[Path], url: Optional[str], output_json: bool) -> None:
    """Resolve metadata for every configured table."""
    config = _load_config(config_path)
    try:
        configurations = config.table_configurations()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if not configurations:
        click.echo("Error: no tables configured", err=True)
        sys.exit(1)

    results = _resolve(config, configurations, url)
    _print_results(results, output_json, as_list=True)


def _load_config(config_path: Optional[Path]) -> Config:
    try:
        if config_path is not None:
            return Config.from_toml(config_path)
        try:
            return Config.find_and_load()
        except FileNotFoundError:
            return Config()
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        click.echo(f"Error: invalid TOML in configuration: {e}", err=True)
        sys.exit(1)


def _resolve(
    config: Config, configurations: list[TableConfiguration], url: Optional[str]
) -> list[ResolvedTable]:
    introspector = CatalogIntrospector(config.geometry.to_geometry_test())
    try:
        with psycopg.connect(url or config.database.url) as conn:
            catalog = PostgresCatalog(conn)
            return [introspector.resolve(cfg, catalog) for cfg in configurations]
    except psycopg.Error as e:
        click.echo(f"Error: could not connect to database: {e}", err=True)
        sys.exit(1)
    except AutomapperError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _print_results(results: list[ResolvedTable], output_json: bool, as_list: bool) -> None:
    for resolved in results:
        for warning in resolved.warnings:
            click.echo(f"Warning: {warning.message}", err=True)

    if output_json:
        payload = [_to_dict(r) for r in results]
        click.echo(json.dumps(payload if as_list else payload[0], indent=2))
        return

    for resolved in results:
        metadata = resolved.metadata
        click.echo(f"Table: {metadata.table_ref}")
        width = max(len(c.name) for c in metadata.columns)
        for col in metadata.columns:
            flags = []
            if col.is_identifier:
                flags.append("identifier")
            if col.is_geometry:
                flags.append("geometry")
            suffix = f"  [{', '.join(flags)}]" if flags else ""
            click.echo(f"  {col.name:<{width}}  {col.type_name} ({col.type_code}){suffix}")


def _to_dict(resolved: ResolvedTable) -> dict[str, Any]:
    metadata = resolved.metadata
    return {
        "table": str(metadata.table_ref),
        "identifier": metadata.identifier.name if metadata.identifier else None,
        "geometry": metadata.geometry.name if metadata.geometry else None,
        "columns": [
            {
                "name": col.name,
                "type_name": col.type_name,
                "type_code": col.type_code,
                "is_identifier": col.is_identifier,
                "is_geometry": col.is_geometry,
            }
            for col in metadata.columns
        ],
        "warnings": [
            {"kind": w.kind, "column": w.column, "message": w.message}
            for w in resolved.warnings
        ],
    }


if __name__ == "__main__":
    cli()
