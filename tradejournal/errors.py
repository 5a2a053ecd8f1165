"""Exceptions raised by the trade journal."""

from typing import Optional


class JournalError(Exception):
    """Base class for trade journal errors."""


class FieldError:
    """A single violated field on a trade submission."""

    __slots__ = ("field", "reason")

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason

    def __repr__(self) -> str:
        return f"FieldError({self.field!r}, {self.reason!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return (self.field, self.reason) == (other.field, other.reason)


class ValidationError(JournalError):
    """A trade candidate violates one or more trade invariants."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        details = "; ".join(f"{e.field}: {e.reason}" for e in self.errors)
        super().__init__(f"Invalid trade ({details})")

    @property
    def fields(self) -> list[str]:
        """Names of the violated fields, in report order."""
        return [e.field for e in self.errors]


class StoreUnavailable(JournalError):
    """The ledger store could not be read or written."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DuplicateId(JournalError):
    """A trade with the same id is already in the ledger."""

    def __init__(self, trade_id: str):
        super().__init__(f"Trade id already exists: {trade_id}")
        self.trade_id = trade_id
