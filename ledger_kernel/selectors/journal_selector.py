"""
Module: ledger_kernel.selectors.journal_selector
Responsibility: Read-only query access to journal entries and their lines.
    Converts ORM models to DTOs with totals and resolved account codes.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/.  MUST NOT import from services/, domain/, or outer layers.

Invariants enforced:
    - Read-only: No mutations performed on any queried data.
    - Tenant scope and soft-delete are explicit WHERE clauses.
    - Listing order is entry_date DESC, created_at DESC, id DESC so that
      pages never overlap or skip entries between requests.
    - Totals and lines cover non-deleted lines only; lines are sorted by
      line_seq.

Failure modes:
    - Returns None or an empty page when no matching entries exist (never
      raises on absence of data).

Audit relevance:
    The journal listing is how users trace a statement figure back to the
    postings behind it.  Every value derives from journal_entries and
    journal_lines.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from ledger_kernel.db.types import ZERO
from ledger_kernel.models.journal import JournalEntry
from ledger_kernel.selectors.account_selector import AccountDTO, AccountSelector
from ledger_kernel.selectors.base import BaseSelector, not_deleted


@dataclass(frozen=True)
class JournalLineDTO:
    """Data transfer object for a journal line."""

    id: UUID
    account_id: UUID
    account_code: str
    account_name: str
    debit: Decimal
    credit: Decimal
    memo: str | None
    line_seq: int


@dataclass(frozen=True)
class JournalEntryDTO:
    """Data transfer object for a journal entry."""

    id: UUID
    company_id: UUID
    entry_date: date
    reference: str
    source_module: str
    source_id: UUID | None
    description: str | None
    created_at: datetime
    total_debit: Decimal
    total_credit: Decimal
    lines: tuple[JournalLineDTO, ...]

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


class JournalSelector(BaseSelector[JournalEntry]):
    """
    Selector for journal entry queries.

    Guarantees:
        - Eager loading: lines are loaded via selectinload to avoid N+1
          queries; account codes come from one AccountSelector lookup.
    """

    def __init__(self, session: Session):
        super().__init__(session)
        self._accounts = AccountSelector(session)

    def _to_dto(
        self,
        entry: JournalEntry,
        accounts: dict[UUID, AccountDTO],
    ) -> JournalEntryDTO:
        """Convert ORM model to DTO, resolving account code and name."""
        live = sorted(entry.live_lines, key=lambda x: x.line_seq)
        lines = []
        for line in live:
            account = accounts.get(line.account_id)
            lines.append(
                JournalLineDTO(
                    id=line.id,
                    account_id=line.account_id,
                    account_code=account.code if account else "",
                    account_name=account.name if account else "",
                    debit=line.debit,
                    credit=line.credit,
                    memo=line.memo,
                    line_seq=line.line_seq,
                )
            )

        return JournalEntryDTO(
            id=entry.id,
            company_id=entry.company_id,
            entry_date=entry.entry_date,
            reference=entry.reference,
            source_module=entry.source_module,
            source_id=entry.source_id,
            description=entry.description,
            created_at=entry.created_at,
            total_debit=sum((line.debit for line in live), ZERO),
            total_credit=sum((line.credit for line in live), ZERO),
            lines=tuple(lines),
        )

    def _filtered_query(
        self,
        company_id: UUID,
        date_from: date | None,
        date_to: date | None,
        source_module: str | None,
    ):
        query = select(JournalEntry).where(
            JournalEntry.company_id == company_id,
            not_deleted(JournalEntry),
        )
        if date_from is not None:
            query = query.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            query = query.where(JournalEntry.entry_date <= date_to)
        if source_module is not None and source_module.strip():
            query = query.where(JournalEntry.source_module == source_module)
        return query

    def get_entry(self, company_id: UUID, entry_id: UUID) -> JournalEntryDTO | None:
        """Non-deleted entry of the tenant by id, or None."""
        entry = self.session.execute(
            select(JournalEntry)
            .options(selectinload(JournalEntry.lines))
            .where(
                JournalEntry.company_id == company_id,
                JournalEntry.id == entry_id,
                not_deleted(JournalEntry),
            )
        ).scalar_one_or_none()
        if entry is None:
            return None
        accounts = self._accounts.account_lookup(company_id, include_deleted=True)
        return self._to_dto(entry, accounts)

    def count_entries(
        self,
        company_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
        source_module: str | None = None,
    ) -> int:
        """Number of entries matching the filters, before pagination."""
        subquery = self._filtered_query(
            company_id, date_from, date_to, source_module
        ).subquery()
        return self.session.execute(
            select(func.count()).select_from(subquery)
        ).scalar_one()

    def list_entries(
        self,
        company_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
        source_module: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[JournalEntryDTO]:
        """
        Get one window of the tenant's entries, newest first.

        Args:
            company_id: Tenant.
            date_from: Inclusive lower bound on entry_date.
            date_to: Inclusive upper bound on entry_date.
            source_module: Exact match; None or blank means no filter.
            offset: Number of entries to skip.
            limit: Maximum number of entries to return.

        Returns:
            List of JournalEntryDTOs ordered by entry_date, created_at and
            id, all descending.
        """
        query = (
            self._filtered_query(company_id, date_from, date_to, source_module)
            .options(selectinload(JournalEntry.lines))
            .order_by(
                JournalEntry.entry_date.desc(),
                JournalEntry.created_at.desc(),
                JournalEntry.id.desc(),
            )
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)

        entries = self.session.execute(query).scalars().all()
        if not entries:
            return []

        accounts = self._accounts.account_lookup(company_id, include_deleted=True)
        return [self._to_dto(entry, accounts) for entry in entries]
