"""Tests for the exception hierarchy."""

from automapper.exceptions import (
    AllColumnsExcludedError,
    AutomapperError,
    CatalogAccessError,
    MetadataResolutionError,
    MissingIdentifierError,
    TableNotFoundError,
)
from automapper.models import TableRef

REF = TableRef(schema="public", table_name="parcels")


def test_domain_errors_share_base():
    for error in (
        TableNotFoundError(REF),
        AllColumnsExcludedError(REF, ["id"]),
        MissingIdentifierError(REF),
    ):
        assert isinstance(error, MetadataResolutionError)
        assert isinstance(error, AutomapperError)
        assert error.table_ref == REF


def test_catalog_error_is_not_a_resolution_error():
    cause = RuntimeError("timeout")
    error = CatalogAccessError(REF, cause)

    assert isinstance(error, AutomapperError)
    assert not isinstance(error, MetadataResolutionError)
    assert error.cause is cause
    assert "public.parcels" in str(error)


def test_messages_include_suggestions():
    assert "Suggestions:" in str(TableNotFoundError(REF))
    assert "identifier_column" in str(MissingIdentifierError(REF))
    assert "id, geom" in str(AllColumnsExcludedError(REF, ["id", "geom"]))
