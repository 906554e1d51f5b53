"""
Domain DTOs -- immutable inputs handed to the write side.

Pure value objects with zero I/O.  Validation of amounts happens in
JournalWriter so that a bad line is reported with its position in the
entry.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from ledger_kernel.db.types import ZERO


@dataclass(frozen=True)
class LineSpec:
    """
    Specification for one journal line.

    Contract:
        Exactly one of debit/credit is expected to be positive; the other
        stays zero.  Amounts are Decimal, never float.
    """

    account_id: UUID
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    memo: str | None = None

    @classmethod
    def dr(cls, account_id: UUID, amount: Decimal, memo: str | None = None) -> "LineSpec":
        """Debit line."""
        return cls(account_id=account_id, debit=amount, memo=memo)

    @classmethod
    def cr(cls, account_id: UUID, amount: Decimal, memo: str | None = None) -> "LineSpec":
        """Credit line."""
        return cls(account_id=account_id, credit=amount, memo=memo)
