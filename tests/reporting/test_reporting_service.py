"""
Integration tests for ReportingService against the database.

Statements are generated from entries posted through the journal writer,
covering windows, tenant isolation, soft deletes, cash-account lookup and
the result statuses of the service façade.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledger_kernel.domain.cancellation import CancellationToken
from ledger_kernel.domain.results import OperationStatus
from ledger_kernel.exceptions import InvalidLineAmountError
from ledger_kernel.models.account import AccountType
from ledger_kernel.models.journal import JournalEntry
from ledger_modules.reporting.config import ReportingConfig
from ledger_modules.reporting.models import BalanceSheet, CashFlowSummary, ProfitAndLoss
from ledger_modules.reporting.service import ReportingService

JAN_1 = date(2024, 1, 1)
JAN_31 = date(2024, 1, 31)


@pytest.fixture
def cash_sale(post_entry, tenant, standard_chart):
    """Dr CASH 1000 / Cr REVENUE 1000 on 2024-01-05."""
    return post_entry(
        tenant,
        date(2024, 1, 5),
        "Sale",
        [(standard_chart["CASH"], "1000", "0"), (standard_chart["REVENUE"], "0", "1000")],
    )


class TestSingleCashSale:
    def test_profit_and_loss(self, reporting_service, tenant, cash_sale):
        result = reporting_service.profit_and_loss(tenant, JAN_1, JAN_31)

        assert result.is_success
        report = result.value
        assert isinstance(report, ProfitAndLoss)
        assert report.revenue == Decimal("1000")
        assert report.expenses == Decimal("0")
        assert report.net_profit == Decimal("1000")
        assert [(l.code, l.amount) for l in report.revenue_lines] == [
            ("REVENUE", Decimal("1000"))
        ]

    def test_balance_sheet(self, reporting_service, tenant, cash_sale):
        report = reporting_service.balance_sheet(tenant, JAN_31).value

        assert isinstance(report, BalanceSheet)
        assert report.total_assets == Decimal("1000")
        assert report.total_liabilities == Decimal("0")
        assert report.total_equity == Decimal("1000")
        assert [(l.code, l.amount) for l in report.equity_lines] == [
            ("R/E", Decimal("1000"))
        ]
        assert report.is_balanced

    def test_cash_flow(self, reporting_service, tenant, cash_sale):
        report = reporting_service.cash_flow(tenant, JAN_1, JAN_31).value

        assert isinstance(report, CashFlowSummary)
        assert report.operating_inflow == Decimal("1000")
        assert report.operating_outflow == Decimal("0")
        assert report.net_change == Decimal("1000")

    def test_balance_sheet_before_the_sale(self, reporting_service, tenant, cash_sale):
        report = reporting_service.balance_sheet(tenant, date(2024, 1, 4)).value

        assert report.total_assets == Decimal("0")
        assert report.equity_lines[0].amount == Decimal("0")


class TestWindows:
    def test_empty_window(self, reporting_service, tenant, cash_sale):
        feb_1, feb_29 = date(2024, 2, 1), date(2024, 2, 29)

        pnl = reporting_service.profit_and_loss(tenant, feb_1, feb_29).value
        flow = reporting_service.cash_flow(tenant, feb_1, feb_29).value

        assert pnl.revenue == Decimal("0")
        assert pnl.revenue_lines == ()
        assert flow.net_change == Decimal("0")

    def test_single_day_window(self, reporting_service, tenant, cash_sale):
        day = date(2024, 1, 5)
        assert reporting_service.profit_and_loss(tenant, day, day).value.revenue == Decimal("1000")

    def test_inverted_window(self, reporting_service, tenant):
        for result in (
            reporting_service.profit_and_loss(tenant, JAN_31, JAN_1),
            reporting_service.cash_flow(tenant, JAN_31, JAN_1),
        ):
            assert result.status == OperationStatus.VALIDATION_FAILED
            assert result.error_code == "INVALID_DATE_RANGE"
            assert result.value is None

    def test_balance_sheet_accumulates_history(
        self, reporting_service, post_entry, tenant, standard_chart
    ):
        for month in (1, 2, 3):
            post_entry(
                tenant,
                date(2024, month, 10),
                "Sale",
                [(standard_chart["CASH"], "100", "0"), (standard_chart["REVENUE"], "0", "100")],
            )

        report = reporting_service.balance_sheet(tenant, date(2024, 2, 29)).value
        assert report.total_assets == Decimal("200")


class TestMixedActivity:
    def test_full_month(self, reporting_service, post_entry, tenant, standard_chart):
        chart = standard_chart
        post_entry(tenant, date(2024, 1, 2), "Manual",
                   [(chart["CASH"], "5000", "0"), (chart["EQUITY"], "0", "5000")])
        post_entry(tenant, date(2024, 1, 3), "Purchase",
                   [(chart["INVENTORY"], "800", "0"), (chart["AP"], "0", "800")])
        post_entry(tenant, date(2024, 1, 10), "Sale",
                   [(chart["AR"], "1100", "0"), (chart["REVENUE"], "0", "1000"),
                    (chart["TAX"], "0", "100")])
        post_entry(tenant, date(2024, 1, 15), "Payment",
                   [(chart["CASH"], "600", "0"), (chart["AR"], "0", "600")])
        post_entry(tenant, date(2024, 1, 20), "Adjustment",
                   [(chart["EXPENSE"], "50", "0"), (chart["INVENTORY"], "0", "50")])

        sheet = reporting_service.balance_sheet(tenant, JAN_31).value
        assert sheet.total_assets == Decimal("6850")
        assert sheet.total_liabilities == Decimal("900")
        assert sheet.total_equity == Decimal("5950")
        assert [l.code for l in sheet.equity_lines] == ["EQUITY", "R/E"]
        assert sheet.is_balanced

        pnl = reporting_service.profit_and_loss(tenant, JAN_1, JAN_31).value
        assert pnl.net_profit == Decimal("950")
        assert pnl.net_profit == sheet.equity_lines[-1].amount

        flow = reporting_service.cash_flow(tenant, JAN_1, JAN_31).value
        # Capital contribution is an unclassified source: default category
        assert flow.operating_inflow == Decimal("5600")
        assert flow.net_change == Decimal("5600")


class TestCashAccounts:
    def test_no_cash_account(self, reporting_service, gl_service, tenant):
        gl_service.create_account(tenant, "BANK", "Bank", AccountType.ASSET)

        result = reporting_service.cash_flow(tenant, JAN_1, JAN_31)

        assert result.is_success
        assert result.value.net_change == Decimal("0")
        assert result.value.operating_inflow == Decimal("0")

    def test_inactive_cash_account_not_used(
        self, reporting_service, gl_service, tenant, standard_chart, cash_sale
    ):
        cash = standard_chart["CASH"]
        gl_service.update_account(tenant, cash.id, cash.code, cash.name, cash.account_type, False)

        assert reporting_service.cash_flow(tenant, JAN_1, JAN_31).value.net_change == Decimal("0")

    def test_several_cash_accounts(
        self, session, deterministic_clock, gl_service, post_entry, tenant, standard_chart
    ):
        bank = gl_service.create_account(tenant, "BANK", "Bank", AccountType.ASSET).value
        post_entry(tenant, date(2024, 1, 5), "Sale",
                   [(standard_chart["CASH"], "10", "0"), (standard_chart["REVENUE"], "0", "10")])
        post_entry(tenant, date(2024, 1, 6), "Sale",
                   [(bank, "20", "0"), (standard_chart["REVENUE"], "0", "20")])
        # Transfer between cash accounts nets to zero
        post_entry(tenant, date(2024, 1, 7), "Transfer",
                   [(bank, "5", "0"), (standard_chart["CASH"], "0", "5")])

        service = ReportingService(
            session,
            clock=deterministic_clock,
            config=ReportingConfig(cash_account_codes=("CASH", "BANK")),
        )
        flow = service.cash_flow(tenant, JAN_1, JAN_31).value

        assert flow.operating_inflow == Decimal("35")
        assert flow.operating_outflow == Decimal("5")
        assert flow.net_change == Decimal("30")


class TestIsolationAndDeletes:
    def test_other_tenant_sees_empty_statements(
        self, reporting_service, gl_service, tenant, other_tenant, cash_sale
    ):
        gl_service.import_standard_chart(other_tenant)

        sheet = reporting_service.balance_sheet(other_tenant, JAN_31).value
        pnl = reporting_service.profit_and_loss(other_tenant, JAN_1, JAN_31).value
        flow = reporting_service.cash_flow(other_tenant, JAN_1, JAN_31).value

        assert sheet.total_assets == Decimal("0")
        assert pnl.revenue == Decimal("0")
        assert flow.net_change == Decimal("0")

    def test_soft_deleted_entry_excluded(self, reporting_service, session, tenant, cash_sale):
        session.get(JournalEntry, cash_sale.id).is_deleted = True
        session.flush()

        assert reporting_service.balance_sheet(tenant, JAN_31).value.total_assets == Decimal("0")

    def test_soft_deleted_account_excluded(
        self, reporting_service, gl_service, tenant, standard_chart, cash_sale
    ):
        gl_service.delete_account(tenant, standard_chart["REVENUE"].id)

        sheet = reporting_service.balance_sheet(tenant, JAN_31).value
        # Revenue side is gone, so the sheet no longer balances
        assert sheet.total_assets == Decimal("1000")
        assert sheet.equity_lines[-1].amount == Decimal("0")
        assert not sheet.is_balanced


class TestStoredPrecision:
    def test_large_amount_reported_exactly(
        self, reporting_service, session, post_entry, tenant, standard_chart
    ):
        amount = "1234567890123.123456789"
        post_entry(tenant, date(2024, 1, 5), "Sale",
                   [(standard_chart["CASH"], amount, "0"), (standard_chart["REVENUE"], "0", amount)])
        session.expire_all()

        sheet = reporting_service.balance_sheet(tenant, JAN_31).value
        assert sheet.total_assets == Decimal(amount)
        assert sheet.total_equity == Decimal(amount)
        assert sheet.is_balanced

    def test_repeated_fractions_sum_exactly(
        self, reporting_service, post_entry, tenant, standard_chart
    ):
        chart = standard_chart
        post_entry(tenant, date(2024, 1, 5), "Sale",
                   [(chart["CASH"], "0.1", "0"), (chart["CASH"], "0.1", "0"),
                    (chart["CASH"], "0.1", "0"), (chart["REVENUE"], "0", "0.3")])

        sheet = reporting_service.balance_sheet(tenant, JAN_31).value
        assert sheet.total_assets == Decimal("0.3")

    def test_sub_precision_amounts_rejected(
        self, reporting_service, post_entry, tenant, standard_chart
    ):
        chart = standard_chart
        with pytest.raises(InvalidLineAmountError):
            post_entry(tenant, date(2024, 1, 5), "Sale",
                       [(chart["CASH"], "1.0000000004", "0"), (chart["AR"], "1.0000000004", "0"),
                        (chart["REVENUE"], "0", "2.0000000008")])

        sheet = reporting_service.balance_sheet(tenant, JAN_31).value
        assert sheet.total_assets == Decimal("0")
        assert sheet.is_balanced


class TestFailureModes:
    def test_missing_company(self, reporting_service, no_company):
        results = [
            reporting_service.balance_sheet(no_company, JAN_31),
            reporting_service.profit_and_loss(no_company, JAN_1, JAN_31),
            reporting_service.cash_flow(no_company, JAN_1, JAN_31),
        ]
        assert all(r.status == OperationStatus.COMPANY_CONTEXT_MISSING for r in results)

    def test_cancelled(self, reporting_service, tenant, cash_sale):
        token = CancellationToken()
        token.cancel()

        results = [
            reporting_service.balance_sheet(tenant, JAN_31, cancel_token=token),
            reporting_service.profit_and_loss(tenant, JAN_1, JAN_31, cancel_token=token),
            reporting_service.cash_flow(tenant, JAN_1, JAN_31, cancel_token=token),
        ]
        assert all(r.status == OperationStatus.CANCELLED for r in results)
        assert all(r.value is None for r in results)

    def test_generation_logged(self, reporting_service, captured_logs, tenant, cash_sale):
        reporting_service.balance_sheet(tenant, JAN_31)

        record = next(r for r in captured_logs() if r["message"] == "balance_sheet_generated")
        assert Decimal(record["total_assets"]) == Decimal("1000")
        assert record["is_balanced"] is True
        assert record["report"] == "balance_sheet"
        assert record["company_id"] == str(tenant.company_id)


class TestToDict:
    def test_serializable(self, reporting_service, tenant, cash_sale):
        report = reporting_service.profit_and_loss(tenant, JAN_1, JAN_31).value
        rendered = reporting_service.to_dict(report)

        assert rendered["from_date"] == "2024-01-01"
        assert Decimal(rendered["revenue"]) == Decimal("1000")
        assert Decimal(rendered["net_profit"]) == Decimal("1000")
        assert rendered["revenue_lines"][0]["code"] == "REVENUE"
