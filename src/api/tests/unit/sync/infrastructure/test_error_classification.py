"""Unit tests for backing-store failure classification."""

import pytest
from sqlalchemy.exc import DBAPIError, InterfaceError, ProgrammingError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from sync.domain.value_objects import SyncErrorType
from sync.infrastructure.error_classification import (
    classify_backing_store_error,
    extract_sqlstate,
)


class FakeDriverError(Exception):
    """Stands in for the adapted asyncpg error SQLAlchemy wraps."""

    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def wrapped(sqlstate: str | None, message: str = "driver failure", **kwargs):
    return ProgrammingError(
        "SELECT 1", {}, FakeDriverError(message, sqlstate), **kwargs
    )


def classify(exc):
    return classify_backing_store_error(exc, schema="app_private", table="shopify_shops")


class TestExtractSqlstate:
    def test_reads_wrapped_driver_code(self):
        assert extract_sqlstate(wrapped("42P01")) == "42P01"

    def test_reads_pgcode(self):
        orig = Exception("x")
        orig.pgcode = "42501"

        assert extract_sqlstate(DBAPIError("SELECT 1", {}, orig)) == "42501"

    def test_none_without_code(self):
        assert extract_sqlstate(RuntimeError("x")) is None


class TestClassifyBySqlstate:
    @pytest.mark.parametrize(
        ("sqlstate", "error_type", "status_code"),
        [
            ("3F000", SyncErrorType.SCHEMA_NOT_EXPOSED, 500),
            ("42501", SyncErrorType.PERMISSION_DENIED, 403),
            ("42P01", SyncErrorType.TABLE_NOT_FOUND, 500),
        ],
    )
    def test_known_codes(self, sqlstate, error_type, status_code):
        error = classify(wrapped(sqlstate))

        assert error.error_type is error_type
        assert error.status_code == status_code
        assert error.details == sqlstate

    def test_messages_name_schema_and_table(self):
        error = classify(wrapped("42P01"))

        assert "app_private.shopify_shops" in error.message

    def test_unmapped_code_is_unknown(self):
        error = classify(wrapped("23505", message="duplicate key"))

        assert error.error_type is SyncErrorType.UNKNOWN
        assert error.message == (
            "Unexpected backing-store error while accessing app_private.shopify_shops."
        )
        assert error.details.startswith("[23505] ")
        assert "duplicate key" in error.details

    def test_unknown_message_carries_no_driver_text(self):
        error = classify(wrapped("XX001", message="relfilenode corrupt at db-prod-7"))

        assert "db-prod-7" not in error.message
        assert "SELECT 1" not in error.message
        assert "db-prod-7" in error.details

    def test_message_text_is_not_inspected(self):
        """Only the code decides; a message mentioning a schema means nothing."""
        error = classify(wrapped(None, message='schema "app_private" does not exist'))

        assert error.error_type is SyncErrorType.UNKNOWN


class TestClassifyNetwork:
    @pytest.mark.parametrize(
        "exc",
        [
            wrapped("08006"),
            wrapped("08001"),
            wrapped(None, connection_invalidated=True),
            OSError("Connection refused"),
            TimeoutError(),
            PoolTimeoutError("QueuePool limit reached"),
            InterfaceError("SELECT 1", {}, FakeDriverError("connection is closed")),
        ],
    )
    def test_connection_failures(self, exc):
        error = classify(exc)

        assert error.error_type is SyncErrorType.NETWORK_ERROR
        assert error.status_code == 503

    def test_network_message_carries_no_driver_text(self):
        error = classify(wrapped("08006", message="connection to db-prod-7 lost"))

        assert error.message == (
            "Network error connecting to the backing store while accessing "
            "app_private.shopify_shops."
        )
        assert error.details.startswith("[08006] ")
        assert "db-prod-7" in error.details
