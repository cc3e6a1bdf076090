"""Persistence error taxonomy.

The persistence adapter translates driver/ORM failures into a single
StoreError carrying a StoreErrorKind, so services branch on the kind
instead of inspecting error text.

Classification order:
1. A SQLSTATE reported by the driver decides alone: 42P01
   (undefined_table) is a missing table, anything else is not.
2. Without a SQLSTATE, the driver message (never the wrapping statement
   text) must name the table in a missing-relation form:
   'relation "<table>" does not exist', or the table name next to a
   proxy marker ("pgrst205", "(404)").
"""

import enum
import re

from sqlalchemy.exc import DBAPIError

__all__ = [
    "StoreError",
    "StoreErrorKind",
    "classify_db_error",
]

_UNDEFINED_TABLE_SQLSTATE = "42P01"

_PROXY_MISSING_MARKERS = ("pgrst205", "(404)")


class StoreErrorKind(enum.Enum):
    """What went wrong inside the persistence layer."""

    TABLE_MISSING = "table_missing"
    OTHER = "other"


class StoreError(Exception):
    """Persistence operation failed.

    Attributes:
        kind: Discriminator callers use to decide whether to recover.
        table: Table the failing operation targeted.
    """

    def __init__(self, kind: StoreErrorKind, table: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.table = table

    @property
    def is_table_missing(self) -> bool:
        return self.kind is StoreErrorKind.TABLE_MISSING


def _driver_error(exc: BaseException) -> BaseException:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return exc.orig
    return exc


def _sqlstate(error: BaseException) -> str | None:
    for attr in ("sqlstate", "pgcode"):
        code = getattr(error, attr, None)
        if isinstance(code, str) and code:
            return code
    return None


def classify_db_error(exc: BaseException, table: str) -> StoreErrorKind:
    """Map a database exception to a StoreErrorKind.

    Args:
        exc: Exception raised while talking to the database.
        table: Table the operation targeted (e.g., "onboarding_states").

    Returns:
        TABLE_MISSING when the target table does not exist, OTHER otherwise.
    """
    error = _driver_error(exc)
    sqlstate = _sqlstate(error)
    if sqlstate is not None:
        if sqlstate == _UNDEFINED_TABLE_SQLSTATE:
            return StoreErrorKind.TABLE_MISSING
        return StoreErrorKind.OTHER

    message = str(error).lower()
    name = table.lower()
    # 'column "x" of relation "t" does not exist' names the table too
    missing_relation = (
        rf'(?<!of )relation "(?:public\.)?{re.escape(name)}" does not exist'
    )
    if re.search(missing_relation, message):
        return StoreErrorKind.TABLE_MISSING
    if name in message and any(
        marker in message for marker in _PROXY_MISSING_MARKERS
    ):
        return StoreErrorKind.TABLE_MISSING

    return StoreErrorKind.OTHER
