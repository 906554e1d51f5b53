"""
Pure financial statement transformation functions.

These functions turn ledger lines and account metadata into statements.
ZERO I/O. ZERO side effects.

All monetary values are Decimal. All outputs are frozen dataclasses.

Functions in this module follow the ledger_kernel/domain/ purity convention:
- No database access
- No clock access
- No file I/O
- Deterministic: same inputs always produce same outputs

Long aggregations poll an optional CancellationToken and raise
OperationCancelledError; a statement is either complete or not produced.
"""

import dataclasses
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.cancellation import CancellationToken, check_cancelled
from ledger_kernel.models.account import AccountType, NormalBalance
from ledger_kernel.selectors.ledger_selector import LedgerLine
from ledger_modules.reporting.config import CASH_FLOW_CATEGORY_BY_SOURCE, ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheet,
    CashFlowCategory,
    CashFlowSummary,
    ProfitAndLoss,
    StatementLine,
)

__all__ = [
    "AccountInfo",
    "AccountTotals",
    "CASH_FLOW_CATEGORY_BY_SOURCE",
    "RETAINED_EARNINGS_ACCOUNT_ID",
    "natural_balance",
    "total_by_account",
    "build_balance_sheet",
    "build_profit_and_loss",
    "build_cash_flow",
    "empty_cash_flow",
    "render_to_dict",
]

# Sentinel account id of the synthetic retained-earnings line
RETAINED_EARNINGS_ACCOUNT_ID = UUID(int=0)

# Lines aggregated between two cancellation polls
_CANCEL_CHECK_INTERVAL = 256


# =========================================================================
# Bridge type: account metadata for pure functions
# =========================================================================


@dataclasses.dataclass(frozen=True)
class AccountInfo:
    """
    Snapshot of account metadata needed for classification.

    The service converts AccountDTOs to AccountInfo before calling any
    function here, keeping this module free of the ORM.
    """

    account_id: UUID
    code: str
    name: str
    account_type: AccountType

    @property
    def normal_balance(self) -> NormalBalance:
        return self.account_type.normal_balance


@dataclasses.dataclass(frozen=True)
class AccountTotals:
    """Debit and credit totals of one account over a set of lines."""

    account: AccountInfo
    debit_total: Decimal
    credit_total: Decimal

    @property
    def natural(self) -> Decimal:
        return natural_balance(
            self.debit_total, self.credit_total, self.account.normal_balance
        )


# =========================================================================
# Helpers
# =========================================================================


def natural_balance(
    debit_total: Decimal,
    credit_total: Decimal,
    normal_balance: NormalBalance,
) -> Decimal:
    """
    Balance adjusted for the normal balance side.

    DEBIT-normal (ASSET, EXPENSE): debit_total - credit_total
    CREDIT-normal (LIABILITY, EQUITY, REVENUE): credit_total - debit_total
    """
    if normal_balance == NormalBalance.DEBIT:
        return debit_total - credit_total
    return credit_total - debit_total


def _poll(index: int, cancel_token: CancellationToken | None, operation: str) -> None:
    if index % _CANCEL_CHECK_INTERVAL == 0:
        check_cancelled(cancel_token, operation)


def total_by_account(
    lines: Iterable[LedgerLine],
    accounts: dict[UUID, AccountInfo],
    cancel_token: CancellationToken | None = None,
    operation: str = "aggregate",
) -> dict[UUID, AccountTotals]:
    """
    Sum debits and credits per account.

    Lines whose account is not in ``accounts`` (another tenant's, or
    soft-deleted) are ignored.
    """
    check_cancelled(cancel_token, operation)
    debits: dict[UUID, Decimal] = {}
    credits: dict[UUID, Decimal] = {}
    for index, line in enumerate(lines):
        _poll(index, cancel_token, operation)
        if line.account_id not in accounts:
            continue
        debits[line.account_id] = debits.get(line.account_id, ZERO) + line.debit
        credits[line.account_id] = credits.get(line.account_id, ZERO) + line.credit
    check_cancelled(cancel_token, operation)

    return {
        account_id: AccountTotals(
            account=accounts[account_id],
            debit_total=debits[account_id],
            credit_total=credits[account_id],
        )
        for account_id in debits
    }


def _line(totals: AccountTotals) -> StatementLine:
    return StatementLine(
        account_id=totals.account.account_id,
        code=totals.account.code,
        name=totals.account.name,
        amount=totals.natural,
    )


def _of_type(
    totals: dict[UUID, AccountTotals],
    account_type: AccountType,
) -> list[AccountTotals]:
    return [t for t in totals.values() if t.account.account_type == account_type]


def _sum(lines: Iterable[StatementLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


# =========================================================================
# Balance sheet
# =========================================================================


def build_balance_sheet(
    as_of_date: date,
    lines: Iterable[LedgerLine],
    accounts: dict[UUID, AccountInfo],
    config: ReportingConfig,
    cancel_token: CancellationToken | None = None,
) -> BalanceSheet:
    """
    Build the balance sheet from all lines dated on or before as_of_date.

    Assets and liabilities keep positive balances only, equity keeps every
    non-zero balance.  Revenue and expense accounts collapse into one
    synthetic retained-earnings equity line (always present, even at
    zero).  Lines within a section are ordered by account code.

    No balance check is made: an unbalanced ledger yields an unbalanced
    sheet.
    """
    totals = total_by_account(lines, accounts, cancel_token, "balance_sheet")

    asset_lines = sorted(
        (_line(t) for t in _of_type(totals, AccountType.ASSET) if t.natural > ZERO),
        key=lambda line: line.code,
    )
    liability_lines = sorted(
        (_line(t) for t in _of_type(totals, AccountType.LIABILITY) if t.natural > ZERO),
        key=lambda line: line.code,
    )
    equity_lines = sorted(
        (_line(t) for t in _of_type(totals, AccountType.EQUITY) if t.natural != ZERO),
        key=lambda line: line.code,
    )

    revenue_balance = sum(
        (t.natural for t in _of_type(totals, AccountType.REVENUE)), ZERO
    )
    expense_balance = sum(
        (t.natural for t in _of_type(totals, AccountType.EXPENSE)), ZERO
    )
    equity_lines.append(
        StatementLine(
            account_id=RETAINED_EARNINGS_ACCOUNT_ID,
            code=config.retained_earnings_code,
            name=config.retained_earnings_name,
            amount=revenue_balance - expense_balance,
        )
    )

    return BalanceSheet(
        as_of_date=as_of_date,
        total_assets=_sum(asset_lines),
        total_liabilities=_sum(liability_lines),
        total_equity=_sum(equity_lines),
        asset_lines=tuple(asset_lines),
        liability_lines=tuple(liability_lines),
        equity_lines=tuple(equity_lines),
    )


# =========================================================================
# Profit and loss
# =========================================================================


def build_profit_and_loss(
    from_date: date,
    to_date: date,
    lines: Iterable[LedgerLine],
    accounts: dict[UUID, AccountInfo],
    cancel_token: CancellationToken | None = None,
) -> ProfitAndLoss:
    """
    Build profit and loss from the lines inside [from_date, to_date].

    Only accounts with a positive natural balance appear; lines are ordered
    by amount descending, then code.  COGS is not classified and is always
    zero.
    """
    totals = total_by_account(lines, accounts, cancel_token, "profit_and_loss")

    def section(account_type: AccountType) -> list[StatementLine]:
        return sorted(
            (_line(t) for t in _of_type(totals, account_type) if t.natural > ZERO),
            key=lambda line: (-line.amount, line.code),
        )

    revenue_lines = section(AccountType.REVENUE)
    expense_lines = section(AccountType.EXPENSE)

    return ProfitAndLoss(
        from_date=from_date,
        to_date=to_date,
        revenue=_sum(revenue_lines),
        cogs=ZERO,
        expenses=_sum(expense_lines),
        revenue_lines=tuple(revenue_lines),
        expense_lines=tuple(expense_lines),
    )


# =========================================================================
# Cash flow
# =========================================================================


def build_cash_flow(
    from_date: date,
    to_date: date,
    cash_lines: Iterable[LedgerLine],
    config: ReportingConfig,
    cancel_token: CancellationToken | None = None,
) -> CashFlowSummary:
    """
    Summarise movements on cash accounts by activity category.

    ``cash_lines`` must already be restricted to cash accounts.  Each line's
    debit - credit is an inflow when positive and an outflow (absolute
    value) when negative; its category comes from the entry's source
    module via ``config.category_for``.
    """
    check_cancelled(cancel_token, "cash_flow")
    inflow = {category: ZERO for category in CashFlowCategory}
    outflow = {category: ZERO for category in CashFlowCategory}

    for index, line in enumerate(cash_lines):
        _poll(index, cancel_token, "cash_flow")
        net = line.debit - line.credit
        category = config.category_for(line.source_module)
        if net > ZERO:
            inflow[category] += net
        elif net < ZERO:
            outflow[category] += -net
    check_cancelled(cancel_token, "cash_flow")

    return CashFlowSummary(
        from_date=from_date,
        to_date=to_date,
        operating_inflow=inflow[CashFlowCategory.OPERATING],
        operating_outflow=outflow[CashFlowCategory.OPERATING],
        investing_inflow=inflow[CashFlowCategory.INVESTING],
        investing_outflow=outflow[CashFlowCategory.INVESTING],
        financing_inflow=inflow[CashFlowCategory.FINANCING],
        financing_outflow=outflow[CashFlowCategory.FINANCING],
    )


def empty_cash_flow(from_date: date, to_date: date) -> CashFlowSummary:
    """All-zero summary, returned when the tenant has no cash account."""
    return CashFlowSummary(
        from_date=from_date,
        to_date=to_date,
        operating_inflow=ZERO,
        operating_outflow=ZERO,
        investing_inflow=ZERO,
        investing_outflow=ZERO,
        financing_inflow=ZERO,
        financing_outflow=ZERO,
    )


# =========================================================================
# Rendering
# =========================================================================


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any statement or result dataclass to JSON-ready data.

    Decimal and UUID become strings, dates ISO strings, enums their value,
    tuples lists.  Dataclasses become dicts of their fields plus any
    properties they list in ``RENDERED_PROPERTIES``.
    """
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (str, int, float)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(render_to_dict(k)): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        rendered = {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
        for name in getattr(obj, "RENDERED_PROPERTIES", ()):
            rendered[name] = render_to_dict(getattr(obj, name))
        return rendered
    return str(obj)
