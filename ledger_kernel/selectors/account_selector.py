"""
Module: ledger_kernel.selectors.account_selector
Responsibility: Read-only access to a tenant's chart of accounts.  Converts
    Account rows to AccountDTOs and builds the id-indexed lookup tables that
    statements and journal listings join against in memory.
Architecture position: Kernel > Selectors.  May import from models/ and
    selectors/base.py.  MUST NOT import from services/, domain/, or outer layers.

Invariants enforced:
    - Tenant scope: every query filters on company_id.
    - Soft-delete: deleted accounts are excluded unless include_deleted=True
      is passed (journal listings still resolve codes of deleted accounts
      referenced by historical lines).
    - Ordering: list methods order by code.

Failure modes:
    - Returns None or empty collections when nothing matches.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.selectors.base import BaseSelector, not_deleted


@dataclass(frozen=True)
class AccountDTO:
    """Data transfer object for an account."""

    id: UUID
    company_id: UUID
    code: str
    name: str
    account_type: AccountType
    parent_id: UUID | None
    is_active: bool


def account_to_dto(account: Account) -> AccountDTO:
    """Convert an Account row to its DTO."""
    return AccountDTO(
        id=account.id,
        company_id=account.company_id,
        code=account.code,
        name=account.name,
        account_type=AccountType(account.account_type),
        parent_id=account.parent_id,
        is_active=account.is_active,
    )


class AccountSelector(BaseSelector[Account]):
    """
    Selector for chart-of-accounts queries.

    Contract:
        All methods take the tenant's company_id explicitly and never see
        another tenant's accounts.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def _tenant_query(self, company_id: UUID, include_deleted: bool = False):
        query = select(Account).where(Account.company_id == company_id)
        if not include_deleted:
            query = query.where(not_deleted(Account))
        return query

    def list_accounts(
        self,
        company_id: UUID,
        include_inactive: bool = True,
    ) -> list[AccountDTO]:
        """Non-deleted accounts of the tenant ordered by code."""
        query = self._tenant_query(company_id)
        if not include_inactive:
            query = query.where(Account.is_active.is_(True))
        accounts = self.session.execute(
            query.order_by(Account.code)
        ).scalars().all()
        return [account_to_dto(a) for a in accounts]

    def get_account(self, company_id: UUID, account_id: UUID) -> AccountDTO | None:
        """Non-deleted account by id, or None."""
        account = self.session.execute(
            self._tenant_query(company_id).where(Account.id == account_id)
        ).scalar_one_or_none()
        if account is None:
            return None
        return account_to_dto(account)

    def get_by_code(self, company_id: UUID, code: str) -> AccountDTO | None:
        """Non-deleted account by code, or None."""
        account = self.session.execute(
            self._tenant_query(company_id).where(Account.code == code)
        ).scalar_one_or_none()
        if account is None:
            return None
        return account_to_dto(account)

    def code_in_use(
        self,
        company_id: UUID,
        code: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """True if a non-deleted account (other than exclude_id) uses code."""
        query = self._tenant_query(company_id).where(Account.code == code)
        if exclude_id is not None:
            query = query.where(Account.id != exclude_id)
        return self.session.execute(query.limit(1)).first() is not None

    def live_codes(self, company_id: UUID) -> set[str]:
        """Codes of all non-deleted accounts of the tenant."""
        rows = self.session.execute(
            select(Account.code).where(
                Account.company_id == company_id,
                not_deleted(Account),
            )
        ).scalars().all()
        return set(rows)

    def cash_accounts(
        self,
        company_id: UUID,
        codes: Iterable[str],
    ) -> list[AccountDTO]:
        """Active, non-deleted accounts whose code is one of ``codes``."""
        codes = list(codes)
        if not codes:
            return []
        accounts = self.session.execute(
            self._tenant_query(company_id)
            .where(Account.is_active.is_(True), Account.code.in_(codes))
            .order_by(Account.code)
        ).scalars().all()
        return [account_to_dto(a) for a in accounts]

    def account_lookup(
        self,
        company_id: UUID,
        include_deleted: bool = False,
    ) -> dict[UUID, AccountDTO]:
        """
        Id-indexed lookup of the tenant's accounts, loaded in one query.

        Statements join journal lines against this table in memory instead
        of issuing a query per line.
        """
        accounts = self.session.execute(
            self._tenant_query(company_id, include_deleted=include_deleted)
        ).scalars().all()
        return {a.id: account_to_dto(a) for a in accounts}
