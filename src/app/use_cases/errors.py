"""Translation of store constraint violations into use case errors"""

from sqlalchemy.exc import IntegrityError
from libs.result import Error

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"


def constraint_violation_error(e: IntegrityError) -> Error:
    """
    Classify an IntegrityError into a client-facing error

    Categories:
        DUPLICATE_ENTRY: unique constraint
        INVALID_REFERENCE: foreign key constraint
        REQUIRED_FIELD_MISSING: not-null constraint
        CONSTRAINT_VIOLATION: anything else (check constraints)
    """
    sqlstate = getattr(e.orig, "sqlstate", None) or getattr(e.orig, "pgcode", None)
    text = str(e.orig).lower()

    if sqlstate == UNIQUE_VIOLATION or "unique" in text or "duplicate key" in text:
        return Error(
            code="DUPLICATE_ENTRY",
            message="Duplicate entry. This record already exists.",
            reason=str(e.orig),
        )
    if sqlstate == FOREIGN_KEY_VIOLATION or "foreign key" in text:
        return Error(
            code="INVALID_REFERENCE",
            message="Invalid reference. Related record does not exist.",
            reason=str(e.orig),
        )
    if sqlstate == NOT_NULL_VIOLATION or "not null" in text or "null value" in text:
        return Error(
            code="REQUIRED_FIELD_MISSING",
            message="Required field is missing.",
            reason=str(e.orig),
        )
    return Error(
        code="CONSTRAINT_VIOLATION",
        message="The request violates a data constraint.",
        reason=str(e.orig),
    )
