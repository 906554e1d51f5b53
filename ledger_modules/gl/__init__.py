"""
General Ledger Module (``ledger_modules.gl``).

Chart of accounts maintenance, the standard chart bootstrap, the journal
listing and auto-posting of business events.
"""

from ledger_modules.gl.config import STANDARD_CHART, GLConfig, PostingRole, StandardAccount
from ledger_modules.gl.models import AccountNode, ImportStandardChartResult, JournalEntryPage
from ledger_modules.gl.posting import AccountingPostingService
from ledger_modules.gl.service import GeneralLedgerService, build_account_tree

__all__ = [
    "GeneralLedgerService",
    "AccountingPostingService",
    "build_account_tree",
    "GLConfig",
    "PostingRole",
    "StandardAccount",
    "STANDARD_CHART",
    "AccountNode",
    "ImportStandardChartResult",
    "JournalEntryPage",
]
