"""
Financial Reporting Module (``ledger_modules.reporting``).

Responsibility
--------------
Read-only module that derives the balance sheet, profit and loss and the
cash-flow summary from the journal.

Architecture position
---------------------
**Modules layer** -- pure read-only service.  All statement computation
lives in pure functions (``statements.py``); ``ReportingService`` only
loads data and maps failures onto ``OperationResult``.

Invariants enforced
-------------------
* No journal entries are created by this module.
* Statements derive entirely from journal lines (no stored balances).
"""

from ledger_modules.reporting.config import CASH_FLOW_CATEGORY_BY_SOURCE, ReportingConfig
from ledger_modules.reporting.models import (
    BalanceSheet,
    CashFlowCategory,
    CashFlowSummary,
    ProfitAndLoss,
    ReportType,
    StatementLine,
)
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import RETAINED_EARNINGS_ACCOUNT_ID, render_to_dict

__all__ = [
    # Service
    "ReportingService",
    # Config
    "ReportingConfig",
    "CASH_FLOW_CATEGORY_BY_SOURCE",
    # Models
    "ReportType",
    "CashFlowCategory",
    "StatementLine",
    "BalanceSheet",
    "ProfitAndLoss",
    "CashFlowSummary",
    # Rendering
    "RETAINED_EARNINGS_ACCOUNT_ID",
    "render_to_dict",
]
