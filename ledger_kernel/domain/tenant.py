"""
TenantContext -- explicit tenant scoping for every ledger operation.

Every public operation receives a ``TenantContext`` as a parameter.  There is
no ambient or thread-local "current company": whatever the caller hands in is
the only tenant the operation can see.
"""

from dataclasses import dataclass
from uuid import UUID

from ledger_kernel.exceptions import CompanyContextMissingError


@dataclass(frozen=True)
class TenantContext:
    """
    Company (and optionally user) on whose behalf an operation runs.

    ``user_id`` only feeds the created_by/updated_by audit columns.
    ``correlation_id`` is the caller's request id; it is stamped on every
    log record the operation writes.
    """

    company_id: UUID | None
    user_id: UUID | None = None
    correlation_id: str | None = None

    @property
    def has_company(self) -> bool:
        return self.company_id is not None

    def require_company(self, operation: str) -> UUID:
        """
        Return the company id or raise.

        Raises:
            CompanyContextMissingError: If no company is in scope.
        """
        if self.company_id is None:
            raise CompanyContextMissingError(operation)
        return self.company_id
