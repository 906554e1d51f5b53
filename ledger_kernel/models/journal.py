"""
Module: ledger_kernel.models.journal
Responsibility: ORM persistence for journal entries and journal lines -- the
    single source of financial truth for every statement.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Balance per entry: sum(debit) == sum(credit) and at least two lines
      (checked by JournalWriter before flush; is_balanced is the read-side
      convenience).
    - One-sided lines: at most one of debit/credit is non-zero, neither is
      negative (JournalWriter).
    - Append-only: nothing in the kernel updates or deletes entries or
      lines.  is_deleted exists so upstream modules can void a posting;
      every read path filters it explicitly.

Failure modes:
    - UnbalancedEntryError / InsufficientLinesError / InvalidLineAmountError
      at creation time (JournalWriter).

Audit relevance:
    Statements are derived exclusively from these rows.  There are no
    stored balances anywhere.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import MoneyAmount, TrackedBase, UUIDString
from ledger_kernel.db.types import ZERO

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account


class JournalSourceModule(str, Enum):
    """Well-known source modules for auto-posted entries.

    source_module is free-form; these are the values the posting helpers
    use and the cash-flow classification table knows about.
    """

    SALE = "Sale"
    PURCHASE = "Purchase"
    POS = "POS"
    ADJUSTMENT = "Adjustment"
    PAYMENT = "Payment"
    STOCK_IN = "StockIn"
    STOCK_OUT = "StockOut"


class JournalEntry(TrackedBase):
    """
    Journal entry header -- one balanced business event.

    Contract:
        Owns one or more JournalLines (composition; lines never outlive
        their entry).  source_module/source_id correlate the entry with the
        business record that produced it.
    """

    __tablename__ = "journal_entries"

    __table_args__ = (
        Index("idx_journal_company_date", "company_id", "entry_date"),
        Index("idx_journal_source", "source_module", "source_id"),
    )

    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        nullable=False,
    )

    # Accounting date (drives every statement window)
    entry_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    reference: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
    )

    # Originating business process, e.g. "Sale"
    source_module: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    source_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        nullable=True,
    )

    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.line_seq",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<JournalEntry {self.id} {self.entry_date} {self.source_module}>"

    @property
    def live_lines(self) -> list["JournalLine"]:
        """Lines that are not soft-deleted."""
        return [line for line in self.lines if not line.is_deleted]

    @property
    def total_debits(self) -> Decimal:
        """Sum of debit amounts over live lines."""
        return sum((line.debit for line in self.live_lines), ZERO)

    @property
    def total_credits(self) -> Decimal:
        """Sum of credit amounts over live lines."""
        return sum((line.credit for line in self.live_lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        """Check if debits equal credits (read-side convenience)."""
        return self.total_debits == self.total_credits


class JournalLine(TrackedBase):
    """
    Single debit or credit posting against one account.

    Contract:
        debit >= 0, credit >= 0, and at most one of them is non-zero.
        account_id references an Account of the same company (non-owning).
    """

    __tablename__ = "journal_lines"

    __table_args__ = (
        Index("idx_line_entry", "journal_entry_id"),
        Index("idx_line_account", "account_id"),
    )

    journal_entry_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journal_entries.id"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id"),
        nullable=False,
    )

    debit: Mapped[Decimal] = mapped_column(
        MoneyAmount(),
        nullable=False,
        default=ZERO,
    )

    credit: Mapped[Decimal] = mapped_column(
        MoneyAmount(),
        nullable=False,
        default=ZERO,
    )

    memo: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Position within the entry (deterministic line ordering)
    line_seq: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    entry: Mapped["JournalEntry"] = relationship(
        back_populates="lines",
    )

    account: Mapped["Account"] = relationship()

    def __repr__(self) -> str:
        return f"<JournalLine Dr {self.debit} Cr {self.credit}>"
