"""Pure domain layer: tenant scoping, clocks, cancellation, results, DTOs."""

from ledger_kernel.domain.cancellation import CancellationToken, check_cancelled
from ledger_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ledger_kernel.domain.dtos import LineSpec
from ledger_kernel.domain.results import OperationResult, OperationStatus
from ledger_kernel.domain.tenant import TenantContext

__all__ = [
    "CancellationToken",
    "check_cancelled",
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "LineSpec",
    "OperationResult",
    "OperationStatus",
    "TenantContext",
]
