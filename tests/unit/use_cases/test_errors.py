"""Unit tests for constraint violation classification"""

from sqlalchemy.exc import IntegrityError

from src.app.use_cases.errors import constraint_violation_error


class FakeDriverError(Exception):
    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(message, sqlstate=None):
    return IntegrityError("INSERT ...", {}, FakeDriverError(message, sqlstate))


class TestConstraintViolationError:

    def test_unique_by_sqlstate(self):
        error = constraint_violation_error(integrity_error("violates constraint", "23505"))
        assert error.code == "DUPLICATE_ENTRY"

    def test_unique_by_sqlite_message(self):
        error = constraint_violation_error(
            integrity_error("UNIQUE constraint failed: customers.customer_code")
        )
        assert error.code == "DUPLICATE_ENTRY"
        assert "customers.customer_code" in error.reason

    def test_foreign_key(self):
        error = constraint_violation_error(integrity_error("FOREIGN KEY constraint failed"))
        assert error.code == "INVALID_REFERENCE"

    def test_not_null(self):
        error = constraint_violation_error(integrity_error("x", "23502"))
        assert error.code == "REQUIRED_FIELD_MISSING"

    def test_check_constraint(self):
        error = constraint_violation_error(
            integrity_error("CHECK constraint failed: allocated_amount_positive")
        )
        assert error.code == "CONSTRAINT_VIOLATION"
