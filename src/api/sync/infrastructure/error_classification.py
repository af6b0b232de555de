"""Backing-store failure classification.

Maps driver failures to ``SyncErrorType`` through a lookup table keyed by
PostgreSQL SQLSTATE. Codes not present in the table are classified as
``unknown``; message text is never inspected.

Messages are fixed sentences naming only the schema and table. Driver text
(SQL statement, server message) is kept in ``details``, which callers show
only outside production.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import DBAPIError, InterfaceError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import SyncErrorType

# SQLSTATE class 08: connection exception
CONNECTION_EXCEPTION_CLASS = "08"


@dataclass(frozen=True)
class _Classification:
    error_type: SyncErrorType
    message: str
    status_code: int | None = None


SQLSTATE_CLASSIFICATIONS: dict[str, _Classification] = {
    "3F000": _Classification(
        SyncErrorType.SCHEMA_NOT_EXPOSED,
        "Schema '{schema}' is not accessible. Create it or point "
        "BRIDGE_DB_PRIVATE_SCHEMA at the schema holding the shop bindings.",
    ),
    "42501": _Classification(
        SyncErrorType.PERMISSION_DENIED,
        "Permission denied accessing {schema}.{table}. Check that the "
        "service role has USAGE on the schema and SELECT on the table.",
        status_code=403,
    ),
    "42P01": _Classification(
        SyncErrorType.TABLE_NOT_FOUND,
        "Table '{schema}.{table}' does not exist. Ensure the table is "
        "created in the backing store.",
    ),
}

_NETWORK_CLASSIFICATION = _Classification(
    SyncErrorType.NETWORK_ERROR,
    "Network error connecting to the backing store while accessing "
    "{schema}.{table}.",
    status_code=503,
)

UNKNOWN_MESSAGE = "Unexpected backing-store error while accessing {schema}.{table}."


def extract_sqlstate(exc: BaseException) -> str | None:
    """Get the SQLSTATE carried by a driver error, if any.

    SQLAlchemy wraps asyncpg errors in ``DBAPIError``; the adapted driver
    error exposes the code as ``sqlstate`` (or ``pgcode``).
    """
    candidates: list[object] = [exc]
    if isinstance(exc, DBAPIError):
        candidates.insert(0, exc.orig)

    for candidate in candidates:
        for attribute in ("sqlstate", "pgcode"):
            code = getattr(candidate, attribute, None)
            if isinstance(code, str) and code:
                return code
    return None


def _is_network_failure(exc: BaseException, sqlstate: str | None) -> bool:
    if sqlstate is not None and sqlstate.startswith(CONNECTION_EXCEPTION_CLASS):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, (OSError, TimeoutError, PoolTimeoutError, InterfaceError))


def _describe(exc: BaseException, sqlstate: str | None) -> str:
    text = str(exc) or exc.__class__.__name__
    return f"[{sqlstate}] {text}" if sqlstate is not None else text


def classify_backing_store_error(
    exc: BaseException,
    schema: str,
    table: str,
) -> BackingStoreError:
    """Translate a driver failure into a classified ``BackingStoreError``.

    Args:
        exc: The failure raised by SQLAlchemy or the driver
        schema: Schema the query targeted (used in the actionable message)
        table: Table the query targeted

    Returns:
        BackingStoreError with error type and status hint. Details hold the
        SQLSTATE for table-mapped codes and the driver text otherwise.
    """
    sqlstate = extract_sqlstate(exc)

    if _is_network_failure(exc, sqlstate):
        return BackingStoreError(
            _NETWORK_CLASSIFICATION.message.format(schema=schema, table=table),
            error_type=_NETWORK_CLASSIFICATION.error_type,
            status_code=_NETWORK_CLASSIFICATION.status_code,
            details=_describe(exc, sqlstate),
        )

    classification = SQLSTATE_CLASSIFICATIONS.get(sqlstate) if sqlstate else None
    if classification is None:
        return BackingStoreError(
            UNKNOWN_MESSAGE.format(schema=schema, table=table),
            error_type=SyncErrorType.UNKNOWN,
            details=_describe(exc, sqlstate),
        )

    return BackingStoreError(
        classification.message.format(schema=schema, table=table),
        error_type=classification.error_type,
        status_code=classification.status_code,
        details=sqlstate,
    )
