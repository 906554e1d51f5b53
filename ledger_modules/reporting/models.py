"""
Financial Reporting Domain Models (``ledger_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing statement outputs: balance
sheet, profit and loss, and the cash-flow summary.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Built by the
pure functions in ``statements.py`` and returned by ``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.

Audit relevance
---------------
Statements are derived from the journal at call time; rendering them with
``render_to_dict`` keeps Decimal precision by emitting strings.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar
from uuid import UUID


class ReportType(str, Enum):
    """Types of financial statements."""

    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    CASH_FLOW = "cash_flow"


class CashFlowCategory(str, Enum):
    """Cash-flow statement activity categories."""

    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


@dataclass(frozen=True)
class StatementLine:
    """One account (or the synthetic retained-earnings line) on a statement."""

    account_id: UUID
    code: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet as of a date."""

    as_of_date: date
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    asset_lines: tuple[StatementLine, ...]
    liability_lines: tuple[StatementLine, ...]
    # Ends with the retained-earnings line carrying net income to date
    equity_lines: tuple[StatementLine, ...]

    RENDERED_PROPERTIES: ClassVar[tuple[str, ...]] = ("is_balanced",)

    @property
    def is_balanced(self) -> bool:
        """Assets = Liabilities + Equity."""
        return self.total_assets == self.total_liabilities + self.total_equity


@dataclass(frozen=True)
class ProfitAndLoss:
    """Profit and loss over an inclusive date window."""

    from_date: date
    to_date: date
    revenue: Decimal
    cogs: Decimal
    expenses: Decimal
    revenue_lines: tuple[StatementLine, ...]
    expense_lines: tuple[StatementLine, ...]

    RENDERED_PROPERTIES: ClassVar[tuple[str, ...]] = ("gross_profit", "net_profit")

    @property
    def gross_profit(self) -> Decimal:
        return self.revenue - self.cogs

    @property
    def net_profit(self) -> Decimal:
        return self.revenue - self.expenses


@dataclass(frozen=True)
class CashFlowSummary:
    """Cash movements over an inclusive date window by activity category."""

    from_date: date
    to_date: date
    operating_inflow: Decimal
    operating_outflow: Decimal
    investing_inflow: Decimal
    investing_outflow: Decimal
    financing_inflow: Decimal
    financing_outflow: Decimal

    RENDERED_PROPERTIES: ClassVar[tuple[str, ...]] = (
        "net_operating",
        "net_investing",
        "net_financing",
        "net_change",
    )

    @property
    def net_operating(self) -> Decimal:
        return self.operating_inflow - self.operating_outflow

    @property
    def net_investing(self) -> Decimal:
        return self.investing_inflow - self.investing_outflow

    @property
    def net_financing(self) -> Decimal:
        return self.financing_inflow - self.financing_outflow

    @property
    def net_change(self) -> Decimal:
        return self.net_operating + self.net_investing + self.net_financing
