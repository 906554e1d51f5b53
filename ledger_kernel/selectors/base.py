"""
Module: ledger_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors, plus
    the explicit soft-delete and tenant filter helpers every query uses.
Architecture position: Kernel > Selectors.  May import from db/base.py and
    models/.  MUST NOT import from services/, domain/, or outer layers.
    Selectors NEVER create, modify, or delete data.

Invariants enforced:
    - Read-only access: Selectors accept a Session from the caller but MUST NOT
      call session.add(), session.delete(), session.commit(), or session.flush().
    - DTO return convention: Selectors return dataclasses, NOT raw ORM model
      instances.
    - Soft-delete is filtered explicitly with ``not_deleted()``.  There is no
      query rewriting behind the caller's back; a query that forgets the
      filter sees deleted rows.

Audit relevance:
    Selectors are the canonical read path for statements and journal
    listings.  They derive all results from JournalLines -- there are NO
    stored balances.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


def not_deleted(model):
    """WHERE clause excluding soft-deleted rows of ``model``."""
    return model.is_deleted.is_(False)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs or computed results.  They MUST NOT mutate any data.
    """

    def __init__(self, session: Session):
        self.session = session
