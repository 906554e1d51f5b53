"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for the tenant's Chart of Accounts (COA) --
    the target of every journal line.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - A code is unique among the non-deleted accounts of one company
      (partial unique index uq_account_company_code_live; AccountService and
      the chart bootstrap check it first so callers get a typed error).
    - Accounts are never physically deleted: historical journal lines must
      stay resolvable, so removal is the is_deleted flag.

Failure modes:
    - AccountNotFoundError when a posting references a missing account.
    - AccountInactiveError when a posting targets an inactive account.
    - DuplicateAccountCodeError on a second live account with the same code.

Audit relevance:
    account_type decides the sign convention for every statement.  Changing
    it after lines are posted silently moves balances between sections.
"""

from enum import Enum
from uuid import UUID

from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from ledger_kernel.db.base import TrackedBase, UUIDString


class NormalBalance(str, Enum):
    """Normal balance side for an account."""

    DEBIT = "debit"
    CREDIT = "credit"


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def normal_balance(self) -> NormalBalance:
        """DEBIT for asset and expense accounts, CREDIT for the rest."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return NormalBalance.DEBIT
        return NormalBalance.CREDIT


class Account(TrackedBase):
    """
    Chart of Accounts entry for one company.

    Contract:
        (company_id, code) is unique among rows with is_deleted = False.
        parent_id is an optional, non-owning self reference; cycles are not
        validated here and statements ignore the hierarchy.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        Index(
            "uq_account_company_code_live",
            "company_id",
            "code",
            unique=True,
            postgresql_where=text("is_deleted = false"),
            sqlite_where=text("is_deleted = 0"),
        ),
        Index("idx_account_company", "company_id"),
        Index("idx_account_type", "account_type"),
    )

    # Owning tenant
    company_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        nullable=False,
    )

    # Human-readable account code (e.g. "CASH")
    code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # AccountType value; decides statement placement and sign convention
    account_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    # Parent account for hierarchical chart of accounts
    parent_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        nullable=True,
    )

    # Whether the account accepts new postings
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account {self.code}: {self.name}>"
