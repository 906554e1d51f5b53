"""
Auto-posting from upstream business modules (``ledger_modules.gl.posting``).

Responsibility
--------------
Turns sales, purchases, inventory losses and customer payments into
balanced journal entries against the standard accounts, resolving each
posting role to an account of the tenant through ``GLConfig``.

Architecture position
---------------------
**Modules layer** -- composes ``AccountSelector`` (role resolution) and the
kernel ``JournalWriter`` (the only creation path for entries).

Invariants enforced
-------------------
* Every entry passes ``JournalWriter.create_entry`` and is therefore
  balanced, one-sided per line and tenant-scoped.
* A role resolves only to an active, non-deleted account; otherwise the
  posting fails with ``NOT_FOUND`` and nothing is written.

Failure modes
-------------
* ``StandardAccountMissingError`` -> ``NOT_FOUND`` (run
  ``import_standard_chart`` first).
* Posting errors (e.g. negative amounts) -> ``VALIDATION_FAILED``.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.cancellation import CancellationToken, check_cancelled
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.dtos import LineSpec
from ledger_kernel.domain.results import OperationResult
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import StandardAccountMissingError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.journal import JournalSourceModule
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.services.journal_writer import JournalWriter
from ledger_modules._operation_helpers import run_operation
from ledger_modules.gl.config import GLConfig, PostingRole

logger = get_logger("modules.gl.posting")


class AccountingPostingService:
    """
    Posts business events as journal entries.

    Contract
    --------
    * Every method returns ``OperationResult[UUID]`` carrying the new
      journal entry id.
    * With ``auto_commit=True`` the session is committed on success and
      rolled back on failure; otherwise the caller commits.
    """

    def __init__(
        self,
        session: Session,
        config: GLConfig | None = None,
        clock: Clock | None = None,
        auto_commit: bool = False,
    ):
        self._session = session
        self._config = config or GLConfig.with_defaults()
        self._clock = clock or SystemClock()
        self._auto_commit = auto_commit

        self._accounts = AccountSelector(session)
        self._writer = JournalWriter(session, self._clock)

    def _resolve(self, company_id: UUID, role: PostingRole) -> UUID:
        code = self._config.code_for(role)
        account = self._accounts.get_by_code(company_id, code)
        if account is None or not account.is_active:
            raise StandardAccountMissingError(code)
        return account.id

    def _post(
        self,
        operation: str,
        tenant: TenantContext,
        build_lines,
        *,
        entry_date: date,
        reference: str,
        source_module: str,
        source_id: UUID | None,
        description: str | None,
        cancel_token: CancellationToken | None,
    ) -> OperationResult[UUID]:
        def body(company_id: UUID) -> UUID:
            lines = build_lines(company_id)
            check_cancelled(cancel_token, operation)
            entry = self._writer.create_entry(
                tenant,
                entry_date=entry_date,
                reference=reference,
                source_module=source_module,
                lines=lines,
                source_id=source_id,
                description=description,
            )
            return entry.id

        return run_operation(
            operation,
            tenant,
            body,
            logger=logger,
            session=self._session,
            auto_commit=self._auto_commit,
        )

    def post_journal_entry(
        self,
        tenant: TenantContext,
        entry_date: date,
        reference: str,
        source_module: str,
        lines: list[LineSpec],
        source_id: UUID | None = None,
        description: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[UUID]:
        """Post caller-supplied lines as one entry."""
        return self._post(
            "post_journal_entry",
            tenant,
            lambda company_id: list(lines),
            entry_date=entry_date,
            reference=reference,
            source_module=source_module,
            source_id=source_id,
            description=description,
            cancel_token=cancel_token,
        )

    def post_sale(
        self,
        tenant: TenantContext,
        source_id: UUID,
        reference: str,
        entry_date: date,
        total_amount: Decimal,
        tax_amount: Decimal,
        is_cash_sale: bool,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[UUID]:
        """
        Dr CASH (cash sale) or AR (credit sale) for the total;
        Cr REVENUE for total less tax; Cr TAX for the tax when positive.
        """

        def build_lines(company_id: UUID) -> list[LineSpec]:
            debit_role = PostingRole.CASH if is_cash_sale else PostingRole.RECEIVABLE
            lines = [LineSpec.dr(self._resolve(company_id, debit_role), total_amount)]
            revenue_amount = total_amount - tax_amount
            if revenue_amount != ZERO:
                lines.append(
                    LineSpec.cr(self._resolve(company_id, PostingRole.REVENUE), revenue_amount)
                )
            if tax_amount > ZERO:
                lines.append(
                    LineSpec.cr(self._resolve(company_id, PostingRole.TAX), tax_amount)
                )
            return lines

        return self._post(
            "post_sale",
            tenant,
            build_lines,
            entry_date=entry_date,
            reference=reference,
            source_module=JournalSourceModule.SALE.value,
            source_id=source_id,
            description=f"Sale {reference}",
            cancel_token=cancel_token,
        )

    def post_purchase(
        self,
        tenant: TenantContext,
        source_id: UUID,
        reference: str,
        entry_date: date,
        total_amount: Decimal,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[UUID]:
        """Dr INVENTORY / Cr AP for the total."""

        def build_lines(company_id: UUID) -> list[LineSpec]:
            return [
                LineSpec.dr(self._resolve(company_id, PostingRole.INVENTORY), total_amount),
                LineSpec.cr(self._resolve(company_id, PostingRole.PAYABLE), total_amount),
            ]

        return self._post(
            "post_purchase",
            tenant,
            build_lines,
            entry_date=entry_date,
            reference=reference,
            source_module=JournalSourceModule.PURCHASE.value,
            source_id=source_id,
            description=f"Purchase {reference}",
            cancel_token=cancel_token,
        )

    def post_adjustment_loss(
        self,
        tenant: TenantContext,
        source_id: UUID | None,
        reference: str,
        entry_date: date,
        loss_amount: Decimal,
        source_module: str = JournalSourceModule.ADJUSTMENT.value,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[UUID]:
        """Dr EXPENSE / Cr INVENTORY for a stock write-off."""

        def build_lines(company_id: UUID) -> list[LineSpec]:
            return [
                LineSpec.dr(self._resolve(company_id, PostingRole.EXPENSE), loss_amount),
                LineSpec.cr(self._resolve(company_id, PostingRole.INVENTORY), loss_amount),
            ]

        return self._post(
            "post_adjustment_loss",
            tenant,
            build_lines,
            entry_date=entry_date,
            reference=reference,
            source_module=source_module,
            source_id=source_id,
            description=f"Adjustment {reference}",
            cancel_token=cancel_token,
        )

    def post_payment(
        self,
        tenant: TenantContext,
        source_id: UUID | None,
        reference: str,
        entry_date: date,
        amount: Decimal,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[UUID]:
        """Dr CASH / Cr AR for a customer payment."""

        def build_lines(company_id: UUID) -> list[LineSpec]:
            return [
                LineSpec.dr(self._resolve(company_id, PostingRole.CASH), amount),
                LineSpec.cr(self._resolve(company_id, PostingRole.RECEIVABLE), amount),
            ]

        return self._post(
            "post_payment",
            tenant,
            build_lines,
            entry_date=entry_date,
            reference=reference,
            source_module=JournalSourceModule.PAYMENT.value,
            source_id=source_id,
            description=f"Payment {reference}",
            cancel_token=cancel_token,
        )
