"""
Shared helpers for module service operations.

Used by ledger_modules/*/service.py so that every public operation resolves
the tenant, binds log context, converts kernel exceptions into
OperationResults and handles commit/rollback the same way.

Architecture: Modules layer. Imports only from ledger_kernel.
"""

import logging
import time
from collections.abc import Callable
from typing import TypeVar
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from ledger_kernel.domain.results import OperationResult
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import LedgerKernelError
from ledger_kernel.logging_config import LogContext

T = TypeVar("T")


def run_operation(
    operation: str,
    tenant: TenantContext,
    body: Callable[[UUID], T],
    *,
    logger: logging.Logger,
    session: Session | None = None,
    auto_commit: bool = False,
    report: str | None = None,
) -> OperationResult[T]:
    """
    Run ``body(company_id)`` as one public operation.

    Kernel exceptions become failure results and never escape.  Anything
    else (database errors included) is logged and re-raised.  When
    ``auto_commit`` is set, ``session`` is committed on success and rolled
    back on any failure.

    Args:
        operation: snake_case operation name used in logs and errors.
        tenant: Caller's tenant context.
        body: Receives the resolved company id and returns the value.
        logger: Module logger.
        session: Session to commit or roll back (write operations only).
        auto_commit: Own the transaction boundary.
        report: Statement name bound into the log context.
    """
    t0 = time.monotonic()
    owns_tx = auto_commit and session is not None

    # Nested operations (a posting helper calling the writer) share one id
    correlation_id = (
        tenant.correlation_id or LogContext.current("correlation_id") or uuid4().hex
    )

    with LogContext.bind(
        correlation_id=correlation_id,
        company_id=str(tenant.company_id) if tenant.has_company else None,
        actor_id=str(tenant.user_id) if tenant.user_id else None,
        report=report,
    ):
        try:
            company_id = tenant.require_company(operation)
            value = body(company_id)
        except LedgerKernelError as exc:
            if owns_tx:
                session.rollback()
            result: OperationResult[T] = OperationResult.from_error(exc)
            logger.warning(
                "operation_rejected",
                extra={
                    "operation": operation,
                    "status": result.status.value,
                    "error_code": exc.code,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
            return result
        except Exception:
            if owns_tx:
                session.rollback()
            logger.error(
                "operation_failed",
                extra={
                    "operation": operation,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        if owns_tx:
            session.commit()

        logger.info(
            "operation_completed",
            extra={
                "operation": operation,
                "duration_ms": round((time.monotonic() - t0) * 1000, 2),
            },
        )
        return OperationResult.success(value)
