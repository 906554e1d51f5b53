"""
AccountService -- write side of the chart of accounts.

Responsibility:
    Creates, updates and soft-deletes Account rows for one tenant and
    creates batches of accounts in a single flush for the standard chart
    bootstrap.

Architecture position:
    Kernel > Services -- imperative shell.  Reads through AccountSelector,
    writes through the caller's session.

Invariants enforced:
    - Code uniqueness: no two non-deleted accounts of a tenant share a code.
      Checked before any row is added so the caller gets
      DuplicateAccountCodeError instead of an IntegrityError.
    - Accounts are never physically deleted; delete_account sets is_deleted
      and deactivates the account.

Failure modes:
    - CompanyContextMissingError: tenant has no company.
    - DuplicateAccountCodeError: code already used by a live account.
    - AccountNotFoundError: account (or requested parent) is absent or
      soft-deleted.

Audit relevance:
    created_by_id / updated_by_id are stamped from the tenant's user id.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import AccountNotFoundError, DuplicateAccountCodeError
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import Account, AccountType
from ledger_kernel.selectors.account_selector import (
    AccountDTO,
    AccountSelector,
    account_to_dto,
)
from ledger_kernel.selectors.base import not_deleted
from ledger_kernel.services.base import BaseService

logger = get_logger("services.account")


@dataclass(frozen=True)
class AccountDraft:
    """Code, name and type of an account about to be created."""

    code: str
    name: str
    account_type: AccountType
    parent_id: UUID | None = None


class AccountService(BaseService[Account]):
    """
    Chart-of-accounts mutations.

    Contract:
        Every method flushes; none commits.  Returned values are AccountDTOs
        reflecting the flushed state.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session, clock)
        self._selector = AccountSelector(session)

    def _load(self, company_id: UUID, account_id: UUID) -> Account:
        account = self.session.execute(
            select(Account).where(
                Account.company_id == company_id,
                Account.id == account_id,
                not_deleted(Account),
            )
        ).scalar_one_or_none()
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    def _new_account(
        self,
        company_id: UUID,
        draft: AccountDraft,
        actor_id: UUID | None,
    ) -> Account:
        now = self.clock.now()
        return Account(
            company_id=company_id,
            code=draft.code,
            name=draft.name,
            account_type=AccountType(draft.account_type).value,
            parent_id=draft.parent_id,
            is_active=True,
            is_deleted=False,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
            updated_by_id=actor_id,
        )

    def create_account(
        self,
        tenant: TenantContext,
        code: str,
        name: str,
        account_type: AccountType,
        parent_id: UUID | None = None,
    ) -> AccountDTO:
        """
        Create one account.

        Raises:
            CompanyContextMissingError: No company in scope.
            DuplicateAccountCodeError: Code already in use.
            AccountNotFoundError: parent_id given but not a live account.
        """
        company_id = tenant.require_company("create_account")

        if self._selector.code_in_use(company_id, code):
            raise DuplicateAccountCodeError(str(company_id), code)
        if parent_id is not None and self._selector.get_account(company_id, parent_id) is None:
            raise AccountNotFoundError(str(parent_id))

        account = self._new_account(
            company_id,
            AccountDraft(code, name, AccountType(account_type), parent_id),
            tenant.user_id,
        )
        self.session.add(account)
        self.session.flush()

        logger.info(
            "account_created",
            extra={
                "account_id": str(account.id),
                "account_code": code,
                "account_type": account.account_type,
            },
        )
        return account_to_dto(account)

    def create_accounts(
        self,
        tenant: TenantContext,
        drafts: list[AccountDraft],
    ) -> list[AccountDTO]:
        """
        Create several accounts with a single flush.

        Either every draft is added or none is: codes are checked against
        the tenant's live accounts (and each other) before anything is
        added to the session.

        Raises:
            CompanyContextMissingError: No company in scope.
            DuplicateAccountCodeError: A code is already in use or repeated.
        """
        company_id = tenant.require_company("create_accounts")

        taken = self._selector.live_codes(company_id)
        for draft in drafts:
            if draft.code in taken:
                raise DuplicateAccountCodeError(str(company_id), draft.code)
            taken.add(draft.code)

        accounts = [self._new_account(company_id, d, tenant.user_id) for d in drafts]
        if accounts:
            self.session.add_all(accounts)
            self.session.flush()
        return [account_to_dto(a) for a in accounts]

    def update_account(
        self,
        tenant: TenantContext,
        account_id: UUID,
        code: str,
        name: str,
        account_type: AccountType,
        is_active: bool,
    ) -> AccountDTO:
        """
        Replace code, name, type and active flag of an account.

        Raises:
            CompanyContextMissingError: No company in scope.
            AccountNotFoundError: Account absent or soft-deleted.
            DuplicateAccountCodeError: Another live account uses ``code``.
        """
        company_id = tenant.require_company("update_account")
        account = self._load(company_id, account_id)

        if self._selector.code_in_use(company_id, code, exclude_id=account_id):
            raise DuplicateAccountCodeError(str(company_id), code)

        account.code = code
        account.name = name
        account.account_type = AccountType(account_type).value
        account.is_active = is_active
        account.updated_at = self.clock.now()
        account.updated_by_id = tenant.user_id
        self.session.flush()

        logger.info(
            "account_updated",
            extra={"account_id": str(account.id), "account_code": code},
        )
        return account_to_dto(account)

    def delete_account(self, tenant: TenantContext, account_id: UUID) -> AccountDTO:
        """
        Soft-delete an account.  Its historical lines keep referencing it.

        Raises:
            CompanyContextMissingError: No company in scope.
            AccountNotFoundError: Account absent or already deleted.
        """
        company_id = tenant.require_company("delete_account")
        account = self._load(company_id, account_id)

        account.is_deleted = True
        account.is_active = False
        account.updated_at = self.clock.now()
        account.updated_by_id = tenant.user_id
        self.session.flush()

        logger.info(
            "account_deleted",
            extra={"account_id": str(account.id), "account_code": account.code},
        )
        return account_to_dto(account)
