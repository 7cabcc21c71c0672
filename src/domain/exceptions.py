"""Domain-specific exceptions."""

from enum import Enum


class CashflowErrorCode(str, Enum):
    """Error codes attached to validation failures."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_AMOUNT = "INVALID_AMOUNT"


class CashflowError(Exception):
    """Base exception for the projection engine."""


class CashflowValidationError(CashflowError, ValueError):
    """Raised when input entities are rejected before simulation.

    Attributes:
        code: Machine-readable error category.
        details: Optional context (entity id, field name, offending value).
    """

    def __init__(
        self,
        message: str,
        code: CashflowErrorCode = CashflowErrorCode.INVALID_INPUT,
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class SnapshotFormatError(CashflowError):
    """Raised when a stored snapshot document cannot be read at all."""


__all__ = [
    "CashflowErrorCode",
    "CashflowError",
    "CashflowValidationError",
    "SnapshotFormatError",
]
