"""
OperationResult -- typed outcome of every public ledger operation.

Module services never raise for expected failures (missing tenant, missing
entity, bad input, cancellation).  They return an ``OperationResult`` whose
``status`` is machine-readable and whose ``error_code`` carries the
``code`` of the kernel exception that caused the failure.  Infrastructure
errors (database unavailable, integrity violations) are not expected
failures and propagate to the caller unchanged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from ledger_kernel.exceptions import (
    LedgerKernelError,
    NotFoundError,
    OperationCancelledError,
    PostingError,
    TenantError,
    ValidationError,
)

T = TypeVar("T")


class OperationStatus(str, Enum):
    """Result status of a ledger operation."""

    OK = "ok"
    COMPANY_CONTEXT_MISSING = "company_context_missing"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Status plus either a value (OK) or error information.

    ``value`` is None for every non-OK status; a failed or cancelled
    operation never exposes partial output.
    """

    status: OperationStatus
    value: T | None = None
    error_code: str | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        """Create a successful result."""
        return cls(status=OperationStatus.OK, value=value)

    @classmethod
    def failure(
        cls,
        status: OperationStatus,
        error_code: str,
        message: str,
    ) -> "OperationResult[T]":
        """Create a failure result."""
        return cls(status=status, error_code=error_code, message=message)

    @classmethod
    def from_error(cls, error: LedgerKernelError) -> "OperationResult[T]":
        """Map a typed kernel exception onto the matching failure status."""
        return cls.failure(status_for(error), error.code, str(error))

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.OK


def status_for(error: LedgerKernelError) -> OperationStatus:
    """Status category for a kernel exception."""
    if isinstance(error, TenantError):
        return OperationStatus.COMPANY_CONTEXT_MISSING
    if isinstance(error, NotFoundError):
        return OperationStatus.NOT_FOUND
    if isinstance(error, OperationCancelledError):
        return OperationStatus.CANCELLED
    if isinstance(error, (ValidationError, PostingError)):
        return OperationStatus.VALIDATION_FAILED
    raise TypeError(f"No result status for {type(error).__name__}")
