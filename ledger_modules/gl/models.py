"""
General Ledger Domain Models (``ledger_modules.gl.models``).

Responsibility
--------------
Frozen dataclass value objects returned by ``GeneralLedgerService``: the
standard-chart import summary, the nested account tree and a page of
journal entries.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Wraps the
kernel selector DTOs; no dependency on services or the database.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* Collections are tuples so results can be shared safely.
"""

from dataclasses import dataclass
from math import ceil

from ledger_kernel.selectors.account_selector import AccountDTO
from ledger_kernel.selectors.journal_selector import JournalEntryDTO


@dataclass(frozen=True)
class ImportStandardChartResult:
    """Outcome of importing the standard chart of accounts."""

    created: int
    skipped: int
    # Every non-deleted account of the tenant after the import, by code
    accounts: tuple[AccountDTO, ...]


@dataclass(frozen=True)
class AccountNode:
    """An account with its child accounts."""

    account: AccountDTO
    children: tuple["AccountNode", ...] = ()


@dataclass(frozen=True)
class JournalEntryPage:
    """One page of the journal listing."""

    items: tuple[JournalEntryDTO, ...]
    total_count: int
    page_no: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_count / self.page_size) if self.total_count else 0
