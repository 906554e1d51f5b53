"""
Module: ledger_kernel.selectors.ledger_selector
Responsibility: Read-only ledger view for statement derivation.  Yields the
    non-deleted journal lines of a tenant's non-deleted entries inside a date
    window, tagged with the entry's source module.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/base.py.  MUST NOT import from services/, domain/, or outer layers.

Invariants enforced:
    - No stored balances.  Every balance is computed by the caller from
      these rows at query time.
    - Amounts stay Decimal.  Lines are returned individually and summed in
      Python; SQL SUM over Numeric is not exact on every backend.
    - Tenant and soft-delete filters apply to both the entry and the line.

Failure modes:
    - Returns an empty list when no lines match.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.models.journal import JournalEntry, JournalLine
from ledger_kernel.selectors.base import BaseSelector, not_deleted


@dataclass(frozen=True)
class LedgerLine:
    """A single journal line from the ledger view."""

    journal_entry_id: UUID
    entry_date: date
    source_module: str
    account_id: UUID
    debit: Decimal
    credit: Decimal


class LedgerSelector(BaseSelector[JournalLine]):
    """
    Selector for ledger lines feeding the statement engine.

    Contract:
        Lines are ordered by entry_date, entry id and line_seq so repeated
        calls over the same data yield the same sequence.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def _base_query(self, company_id: UUID):
        return (
            select(
                JournalLine.journal_entry_id,
                JournalEntry.entry_date,
                JournalEntry.source_module,
                JournalLine.account_id,
                JournalLine.debit,
                JournalLine.credit,
            )
            .join(JournalEntry, JournalLine.journal_entry_id == JournalEntry.id)
            .where(
                JournalEntry.company_id == company_id,
                not_deleted(JournalEntry),
                not_deleted(JournalLine),
            )
        )

    def _run(self, query) -> list[LedgerLine]:
        rows = self.session.execute(
            query.order_by(
                JournalEntry.entry_date,
                JournalEntry.id,
                JournalLine.line_seq,
            )
        ).all()
        return [
            LedgerLine(
                journal_entry_id=row.journal_entry_id,
                entry_date=row.entry_date,
                source_module=row.source_module,
                account_id=row.account_id,
                debit=row.debit,
                credit=row.credit,
            )
            for row in rows
        ]

    def lines_as_of(self, company_id: UUID, as_of_date: date) -> list[LedgerLine]:
        """All lines with entry_date <= as_of_date."""
        query = self._base_query(company_id).where(
            JournalEntry.entry_date <= as_of_date
        )
        return self._run(query)

    def lines_between(
        self,
        company_id: UUID,
        from_date: date,
        to_date: date,
        account_ids: list[UUID] | None = None,
    ) -> list[LedgerLine]:
        """
        Lines with from_date <= entry_date <= to_date.

        Args:
            company_id: Tenant.
            from_date: Inclusive start.
            to_date: Inclusive end.
            account_ids: Restrict to these accounts when given.  An empty
                list matches nothing.
        """
        query = self._base_query(company_id).where(
            JournalEntry.entry_date >= from_date,
            JournalEntry.entry_date <= to_date,
        )
        if account_ids is not None:
            if not account_ids:
                return []
            query = query.where(JournalLine.account_id.in_(account_ids))
        return self._run(query)
