"""Database layer - engine, base classes, and column types."""

from ledger_kernel.db.base import (
    UUID,
    Base,
    MoneyAmount,
    TrackedBase,
    UTCDateTime,
    UUIDString,
)
from ledger_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)
from ledger_kernel.db.types import ZERO, LongText, Money, ShortCode

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
    "MoneyAmount",
    "UTCDateTime",
    "UUID",
    "Money",
    "ShortCode",
    "LongText",
    "ZERO",
]
