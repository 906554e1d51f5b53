"""
Module: ledger_kernel.db.types
Responsibility: Annotated type aliases for financial-grade column types, so
    every model uses identical precision.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    CRITICAL: No floats anywhere in the ledger kernel.  All monetary amounts
    use Decimal with explicit precision.
"""

from decimal import Decimal
from typing import Annotated

from sqlalchemy import String

from ledger_kernel.db.base import MoneyAmount

# Monetary amount: 38 digits total, 9 decimal places, exact on every backend
Money = Annotated[Decimal, MoneyAmount()]

# Account codes and source-module tags
ShortCode = Annotated[str, String(50)]

# Long text for references, descriptions and memos
LongText = Annotated[str, String(500)]

ZERO = Decimal("0")
