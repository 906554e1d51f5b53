"""Read-only selectors (the query side of the kernel)."""

from ledger_kernel.selectors.account_selector import AccountDTO, AccountSelector
from ledger_kernel.selectors.base import BaseSelector, not_deleted
from ledger_kernel.selectors.journal_selector import (
    JournalEntryDTO,
    JournalLineDTO,
    JournalSelector,
)
from ledger_kernel.selectors.ledger_selector import LedgerLine, LedgerSelector

__all__ = [
    "BaseSelector",
    "not_deleted",
    "AccountDTO",
    "AccountSelector",
    "JournalEntryDTO",
    "JournalLineDTO",
    "JournalSelector",
    "LedgerLine",
    "LedgerSelector",
]
