"""
Reporting Module Service (``ledger_modules.reporting.service``).

Responsibility
--------------
Orchestrates statement generation -- balance sheet, profit and loss and
cash-flow summary -- by bridging the kernel selectors (``LedgerSelector``,
``AccountSelector``) to the pure transformation functions in
``statements.py``.  This is a **read-only** service.

Architecture position
---------------------
**Modules layer** -- thin ERP glue.  ``ReportingService`` is the sole
public entry point for statements.  Constructor: ``session`` + ``clock``
+ ``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to accounts or the journal.
* Tenant scoping -- every query filters on the tenant's company id.
* Account metadata is loaded once per statement into an id-indexed dict.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.

Failure modes
-------------
* Missing company -> ``COMPANY_CONTEXT_MISSING``.
* from_date after to_date -> ``VALIDATION_FAILED`` before any query.
* Cancellation -> ``CANCELLED``, no partial statement.
* Selector query failure -> exception propagates.

Audit relevance
---------------
Structured log events emitted for every statement, carrying the window
and headline totals.  Statements are derived from the journal at call
time; nothing is cached or stored.
"""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.cancellation import CancellationToken, check_cancelled
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.results import OperationResult
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import InvalidDateRangeError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.selectors.ledger_selector import LedgerSelector
from ledger_modules._operation_helpers import run_operation
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheet,
    CashFlowSummary,
    ProfitAndLoss,
    ReportType,
)
from ledger_modules.reporting.statements import (
    AccountInfo,
    build_balance_sheet,
    build_cash_flow,
    build_profit_and_loss,
    empty_cash_flow,
    render_to_dict,
)

logger = get_logger("modules.reporting.service")


def _check_window(from_date: date, to_date: date) -> None:
    if from_date > to_date:
        raise InvalidDateRangeError(from_date.isoformat(), to_date.isoformat())


class ReportingService:
    """
    Generates financial statements from the journal.

    Contract
    --------
    * Every public method returns ``OperationResult``; the value is a
      frozen statement dataclass.
    * Every public method accepts an optional ``CancellationToken``.

    Non-goals
    ---------
    * Does NOT post journal entries.
    * Does NOT classify COGS; ``ProfitAndLoss.cogs`` is always zero.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(session)
        self._accounts = AccountSelector(session)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _load_accounts(self, company_id: UUID) -> dict[UUID, AccountInfo]:
        """
        Load the tenant's non-deleted accounts as AccountInfo, keyed by id.

        AccountInfo is the bridge type used by the pure functions in
        statements.py.
        """
        accounts = {
            account_id: AccountInfo(
                account_id=dto.id,
                code=dto.code,
                name=dto.name,
                account_type=dto.account_type,
            )
            for account_id, dto in self._accounts.account_lookup(company_id).items()
        }
        logger.debug(
            "accounts_loaded_for_reporting",
            extra={"account_count": len(accounts)},
        )
        return accounts

    # =========================================================================
    # Public API
    # =========================================================================

    def balance_sheet(
        self,
        tenant: TenantContext,
        as_of_date: date,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[BalanceSheet]:
        """
        Balance sheet from every line dated on or before ``as_of_date``.

        Net income to date appears as the synthetic retained-earnings line
        at the end of the equity section.
        """

        def body(company_id: UUID) -> BalanceSheet:
            check_cancelled(cancel_token, "balance_sheet")
            accounts = self._load_accounts(company_id)
            lines = self._ledger.lines_as_of(company_id, as_of_date)
            report = build_balance_sheet(
                as_of_date, lines, accounts, self._config, cancel_token
            )
            logger.info(
                "balance_sheet_generated",
                extra={
                    "as_of_date": as_of_date.isoformat(),
                    "total_assets": str(report.total_assets),
                    "total_liabilities": str(report.total_liabilities),
                    "total_equity": str(report.total_equity),
                    "is_balanced": report.is_balanced,
                },
            )
            return report

        return run_operation(
            "balance_sheet",
            tenant,
            body,
            logger=logger,
            report=ReportType.BALANCE_SHEET.value,
        )

    def profit_and_loss(
        self,
        tenant: TenantContext,
        from_date: date,
        to_date: date,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[ProfitAndLoss]:
        """Revenue and expenses for the inclusive window."""

        def body(company_id: UUID) -> ProfitAndLoss:
            _check_window(from_date, to_date)
            check_cancelled(cancel_token, "profit_and_loss")
            accounts = self._load_accounts(company_id)
            lines = self._ledger.lines_between(company_id, from_date, to_date)
            report = build_profit_and_loss(
                from_date, to_date, lines, accounts, cancel_token
            )
            logger.info(
                "profit_and_loss_generated",
                extra={
                    "from_date": from_date.isoformat(),
                    "to_date": to_date.isoformat(),
                    "revenue": str(report.revenue),
                    "expenses": str(report.expenses),
                    "net_profit": str(report.net_profit),
                },
            )
            return report

        return run_operation(
            "profit_and_loss",
            tenant,
            body,
            logger=logger,
            report=ReportType.PROFIT_AND_LOSS.value,
        )

    def cash_flow(
        self,
        tenant: TenantContext,
        from_date: date,
        to_date: date,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[CashFlowSummary]:
        """
        Cash inflows and outflows for the inclusive window.

        Cash accounts are the active, non-deleted accounts whose code is in
        ``ReportingConfig.cash_account_codes``.  Without any, every figure
        is zero.
        """

        def body(company_id: UUID) -> CashFlowSummary:
            _check_window(from_date, to_date)
            check_cancelled(cancel_token, "cash_flow")
            cash_accounts = self._accounts.cash_accounts(
                company_id, self._config.cash_account_codes
            )
            if not cash_accounts:
                logger.info(
                    "cash_flow_no_cash_accounts",
                    extra={"cash_account_codes": list(self._config.cash_account_codes)},
                )
                return empty_cash_flow(from_date, to_date)

            lines = self._ledger.lines_between(
                company_id,
                from_date,
                to_date,
                account_ids=[a.id for a in cash_accounts],
            )
            report = build_cash_flow(
                from_date, to_date, lines, self._config, cancel_token
            )
            logger.info(
                "cash_flow_generated",
                extra={
                    "from_date": from_date.isoformat(),
                    "to_date": to_date.isoformat(),
                    "cash_account_count": len(cash_accounts),
                    "net_change": str(report.net_change),
                },
            )
            return report

        return run_operation(
            "cash_flow",
            tenant,
            body,
            logger=logger,
            report=ReportType.CASH_FLOW.value,
        )

    def to_dict(self, report: object) -> dict:
        """
        Convert any statement DTO to a plain dict for JSON serialization.

        Delegates to the pure render_to_dict function.
        """
        return render_to_dict(report)
