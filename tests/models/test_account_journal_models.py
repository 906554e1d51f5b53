"""ORM tests for the chart of accounts and the journal.

Verifies persistence of Account / JournalEntry / JournalLine, the read-side
helpers on JournalEntry, and the partial unique index on live account codes.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from ledger_kernel.models.account import Account, AccountType, NormalBalance
from ledger_kernel.models.journal import JournalEntry, JournalLine

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_account(session, company_id, **overrides):
    """Create and flush an Account with sensible defaults."""
    defaults = dict(
        company_id=company_id,
        code=f"ACC-{uuid4().hex[:6]}",
        name="Test account",
        account_type=AccountType.ASSET.value,
        created_at=NOW,
        updated_at=NOW,
    )
    defaults.update(overrides)
    account = Account(**defaults)
    session.add(account)
    session.flush()
    return account


def _make_entry(session, company_id, lines, **overrides):
    defaults = dict(
        company_id=company_id,
        entry_date=date(2024, 1, 5),
        reference="INV-1",
        source_module="Sale",
        created_at=NOW,
        updated_at=NOW,
    )
    defaults.update(overrides)
    entry = JournalEntry(**defaults)
    for seq, (account, debit, credit) in enumerate(lines):
        entry.lines.append(
            JournalLine(
                account_id=account.id,
                debit=Decimal(debit),
                credit=Decimal(credit),
                line_seq=seq,
                created_at=NOW,
                updated_at=NOW,
            )
        )
    session.add(entry)
    session.flush()
    return entry


class TestAccountType:
    @pytest.mark.parametrize(
        "account_type, expected",
        [
            (AccountType.ASSET, NormalBalance.DEBIT),
            (AccountType.EXPENSE, NormalBalance.DEBIT),
            (AccountType.LIABILITY, NormalBalance.CREDIT),
            (AccountType.EQUITY, NormalBalance.CREDIT),
            (AccountType.REVENUE, NormalBalance.CREDIT),
        ],
    )
    def test_normal_balance(self, account_type, expected):
        assert account_type.normal_balance == expected

    def test_values_round_trip_through_strings(self):
        assert AccountType("liability") is AccountType.LIABILITY


class TestAccountORM:
    def test_create_and_query(self, session):
        company_id = uuid4()
        account = _make_account(session, company_id, code="CASH", name="Cash")

        queried = session.get(Account, account.id)
        assert queried is not None
        assert queried.company_id == company_id
        assert queried.code == "CASH"
        assert queried.account_type == "asset"
        assert queried.is_active is True
        assert queried.is_deleted is False
        assert queried.parent_id is None

    def test_duplicate_live_code_rejected(self, session):
        company_id = uuid4()
        _make_account(session, company_id, code="CASH")
        with pytest.raises(IntegrityError):
            _make_account(session, company_id, code="CASH")

    def test_same_code_in_other_company_allowed(self, session):
        first = _make_account(session, uuid4(), code="CASH")
        second = _make_account(session, uuid4(), code="CASH")
        assert first.id != second.id

    def test_code_of_deleted_account_can_be_reused(self, session):
        company_id = uuid4()
        old = _make_account(session, company_id, code="CASH")
        old.is_deleted = True
        session.flush()

        new = _make_account(session, company_id, code="CASH")
        assert new.id != old.id


class TestJournalEntryORM:
    def test_lines_persist_in_sequence(self, session):
        company_id = uuid4()
        cash = _make_account(session, company_id, code="CASH")
        revenue = _make_account(
            session, company_id, code="REVENUE", account_type=AccountType.REVENUE.value
        )
        entry = _make_entry(session, company_id, [(cash, "100", "0"), (revenue, "0", "100")])

        session.expire_all()
        queried = session.get(JournalEntry, entry.id)
        assert [line.line_seq for line in queried.lines] == [0, 1]
        assert queried.lines[0].account_id == cash.id
        assert queried.lines[1].entry.id == entry.id

    def test_totals_and_balance(self, session):
        company_id = uuid4()
        cash = _make_account(session, company_id, code="CASH")
        revenue = _make_account(
            session, company_id, code="REVENUE", account_type=AccountType.REVENUE.value
        )
        entry = _make_entry(session, company_id, [(cash, "250.50", "0"), (revenue, "0", "250.50")])

        assert entry.total_debits == Decimal("250.50")
        assert entry.total_credits == Decimal("250.50")
        assert entry.is_balanced

    def test_deleted_lines_excluded_from_totals(self, session):
        company_id = uuid4()
        cash = _make_account(session, company_id, code="CASH")
        revenue = _make_account(
            session, company_id, code="REVENUE", account_type=AccountType.REVENUE.value
        )
        entry = _make_entry(
            session,
            company_id,
            [(cash, "100", "0"), (revenue, "0", "100"), (cash, "40", "0")],
        )
        assert not entry.is_balanced

        entry.lines[2].is_deleted = True
        assert len(entry.live_lines) == 2
        assert entry.is_balanced

    def test_line_references_account(self, session):
        company_id = uuid4()
        cash = _make_account(session, company_id, code="CASH")
        revenue = _make_account(
            session, company_id, code="REVENUE", account_type=AccountType.REVENUE.value
        )
        entry = _make_entry(session, company_id, [(cash, "1", "0"), (revenue, "0", "1")])
        assert entry.lines[0].account.code == "CASH"


class TestColumnTypes:
    """Values read back from the database, not from the identity map."""

    def test_amounts_round_trip_exactly(self, session):
        company = uuid4()
        cash = _make_account(session, company)
        revenue = _make_account(session, company, account_type=AccountType.REVENUE.value)
        amount = "12345678901234567890.123456789"
        entry = _make_entry(session, company, [(cash, amount, "0"), (revenue, "0", amount)])
        session.expire_all()

        reloaded = session.get(JournalEntry, entry.id)
        assert reloaded.lines[0].debit == Decimal(amount)
        assert isinstance(reloaded.lines[0].credit, Decimal)
        assert reloaded.is_balanced

    def test_timestamps_are_utc(self, session):
        offset = timezone(timedelta(hours=3))
        account = _make_account(
            session,
            uuid4(),
            created_at=datetime(2024, 1, 1, 15, 0, 0, tzinfo=offset),
        )
        session.expire_all()

        reloaded = session.get(Account, account.id)
        assert reloaded.created_at == NOW
        assert reloaded.created_at.utcoffset() == timedelta(0)
