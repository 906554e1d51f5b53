"""Write-side kernel services.  Services flush; callers commit."""

from ledger_kernel.services.account_service import AccountDraft, AccountService
from ledger_kernel.services.base import BaseService
from ledger_kernel.services.journal_writer import JournalWriter, validate_lines

__all__ = [
    "AccountDraft",
    "AccountService",
    "BaseService",
    "JournalWriter",
    "validate_lines",
]
