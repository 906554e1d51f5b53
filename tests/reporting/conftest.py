"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances
- A factory for synthetic AccountInfo / LedgerLine data for pure tests
"""

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from ledger_kernel.models.account import AccountType
from ledger_kernel.selectors.ledger_selector import LedgerLine
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.service import ReportingService
from ledger_modules.reporting.statements import AccountInfo


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def reporting_service(
    session,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test session."""
    return ReportingService(
        session=session,
        clock=deterministic_clock,
        config=reporting_config,
    )


# =========================================================================
# Synthetic data for pure function tests (no DB required)
# =========================================================================


@pytest.fixture
def make_account_info():
    """Factory for AccountInfo used in pure tests."""

    def _make(code: str, account_type: AccountType, name: str | None = None) -> AccountInfo:
        return AccountInfo(
            account_id=uuid4(),
            code=code,
            name=name or code.title(),
            account_type=account_type,
        )

    return _make


@pytest.fixture
def make_line():
    """Factory for LedgerLine rows as the selectors return them."""

    def _make(
        account: AccountInfo | UUID,
        debit: str = "0",
        credit: str = "0",
        entry_date: date = date(2024, 1, 5),
        source_module: str = "Sale",
        entry_id: UUID | None = None,
    ) -> LedgerLine:
        return LedgerLine(
            journal_entry_id=entry_id or uuid4(),
            entry_date=entry_date,
            source_module=source_module,
            account_id=account.account_id if isinstance(account, AccountInfo) else account,
            debit=Decimal(debit),
            credit=Decimal(credit),
        )

    return _make
