"""ORM models for the ledger kernel."""

from ledger_kernel.models.account import Account, AccountType, NormalBalance
from ledger_kernel.models.journal import JournalEntry, JournalLine, JournalSourceModule

__all__ = [
    "Account",
    "AccountType",
    "NormalBalance",
    "JournalEntry",
    "JournalLine",
    "JournalSourceModule",
]
