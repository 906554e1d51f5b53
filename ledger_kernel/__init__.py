"""
Ledger Kernel

A multi-tenant double-entry general ledger with:
- Append-only, balanced journal entries
- Chart of accounts with soft delete
- Statements derived from journal lines (no stored balances)
"""

__version__ = "0.1.0"
