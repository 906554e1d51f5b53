"""
General Ledger Module Service (``ledger_modules.gl.service``).

Responsibility
--------------
Public entry point for chart-of-accounts maintenance, the idempotent
standard-chart bootstrap and the paginated journal listing.  Delegates
writes to the kernel ``AccountService`` and reads to the kernel selectors.

Architecture position
---------------------
**Modules layer** -- thin ERP glue over ``ledger_kernel``.

Invariants enforced
-------------------
* Tenant scoping -- every method takes a ``TenantContext`` and fails with
  ``COMPANY_CONTEXT_MISSING`` when it carries no company.
* Code uniqueness -- the bootstrap only creates seeds whose code no
  non-deleted account of the tenant uses; a second run creates nothing.
* Atomic bootstrap -- existence check, planning and a single flush; a
  cancellation before the flush adds nothing.
* Journal listing order is entry_date, created_at, id (all descending),
  with total_count taken before pagination.

Failure modes
-------------
* Expected failures -> ``OperationResult`` with a non-OK status.
* Database errors -> propagated unchanged (session rolled back first when
  the service owns the transaction).

Audit relevance
---------------
Structured log events are emitted for every operation
(``operation_completed`` / ``operation_rejected``) plus
``standard_chart_imported`` and ``journal_entries_listed``.

Usage::

    service = GeneralLedgerService(session, clock=clock)
    result = service.import_standard_chart(TenantContext(company_id))
    if result.is_success:
        print(result.value.created, result.value.skipped)
"""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.domain.cancellation import CancellationToken, check_cancelled
from ledger_kernel.domain.clock import Clock, SystemClock
from ledger_kernel.domain.results import OperationResult
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import (
    AccountNotFoundError,
    InvalidDateRangeError,
    InvalidPaginationError,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import AccountType
from ledger_kernel.selectors.account_selector import AccountDTO, AccountSelector
from ledger_kernel.selectors.journal_selector import JournalSelector
from ledger_kernel.services.account_service import AccountDraft, AccountService
from ledger_modules._operation_helpers import run_operation
from ledger_modules.gl.config import GLConfig
from ledger_modules.gl.models import (
    AccountNode,
    ImportStandardChartResult,
    JournalEntryPage,
)

logger = get_logger("modules.gl.service")


def build_account_tree(accounts: list[AccountDTO]) -> tuple[AccountNode, ...]:
    """
    Nest accounts under their parents, keeping the input order per level.

    An account whose parent is not in ``accounts`` (filtered out as
    inactive, or dangling) becomes a root.
    """
    ids = {a.id for a in accounts}
    children: dict[UUID | None, list[AccountDTO]] = {}
    for account in accounts:
        parent = account.parent_id if account.parent_id in ids else None
        children.setdefault(parent, []).append(account)

    def build(parent_id: UUID | None) -> tuple[AccountNode, ...]:
        return tuple(
            AccountNode(account=a, children=build(a.id))
            for a in children.get(parent_id, [])
        )

    return build(None)


class GeneralLedgerService:
    """
    Chart of accounts and journal listing for one database session.

    Contract
    --------
    * Every public method returns ``OperationResult``; callers inspect
      ``result.is_success``.
    * Every public method accepts an optional ``CancellationToken``.

    Guarantees
    ----------
    * With ``auto_commit=True`` write methods commit on success and roll
      back on failure; otherwise they only flush and the caller commits.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        config: GLConfig | None = None,
        clock: Clock | None = None,
        auto_commit: bool = False,
    ):
        self._session = session
        self._config = config or GLConfig.with_defaults()
        self._clock = clock or SystemClock()
        self._auto_commit = auto_commit

        self._accounts = AccountSelector(session)
        self._journal = JournalSelector(session)
        self._account_service = AccountService(session, self._clock)

    # =========================================================================
    # Chart of accounts
    # =========================================================================

    def import_standard_chart(
        self,
        tenant: TenantContext,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[ImportStandardChartResult]:
        """
        Create every standard account whose code the tenant does not use.

        Returns created/skipped counts and all non-deleted accounts of the
        tenant sorted by code.
        """

        def body(company_id: UUID) -> ImportStandardChartResult:
            live_codes = self._accounts.live_codes(company_id)
            drafts: list[AccountDraft] = []
            skipped = 0
            for seed in self._config.standard_chart:
                if seed.code in live_codes:
                    skipped += 1
                    continue
                drafts.append(AccountDraft(seed.code, seed.name, seed.account_type))

            check_cancelled(cancel_token, "import_standard_chart")
            self._account_service.create_accounts(tenant, drafts)

            accounts = self._accounts.list_accounts(company_id)
            logger.info(
                "standard_chart_imported",
                extra={"created_count": len(drafts), "skipped_count": skipped},
            )
            return ImportStandardChartResult(
                created=len(drafts),
                skipped=skipped,
                accounts=tuple(accounts),
            )

        return run_operation(
            "import_standard_chart",
            tenant,
            body,
            logger=logger,
            session=self._session,
            auto_commit=self._auto_commit,
        )

    def create_account(
        self,
        tenant: TenantContext,
        code: str,
        name: str,
        account_type: AccountType,
        parent_id: UUID | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[AccountDTO]:
        """Create one account; duplicate codes fail validation."""

        def body(company_id: UUID) -> AccountDTO:
            check_cancelled(cancel_token, "create_account")
            return self._account_service.create_account(
                tenant, code, name, account_type, parent_id
            )

        return run_operation(
            "create_account",
            tenant,
            body,
            logger=logger,
            session=self._session,
            auto_commit=self._auto_commit,
        )

    def update_account(
        self,
        tenant: TenantContext,
        account_id: UUID,
        code: str,
        name: str,
        account_type: AccountType,
        is_active: bool,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[AccountDTO]:
        def body(company_id: UUID) -> AccountDTO:
            check_cancelled(cancel_token, "update_account")
            return self._account_service.update_account(
                tenant, account_id, code, name, account_type, is_active
            )

        return run_operation(
            "update_account",
            tenant,
            body,
            logger=logger,
            session=self._session,
            auto_commit=self._auto_commit,
        )

    def delete_account(
        self,
        tenant: TenantContext,
        account_id: UUID,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[AccountDTO]:
        """Soft-delete an account."""

        def body(company_id: UUID) -> AccountDTO:
            check_cancelled(cancel_token, "delete_account")
            return self._account_service.delete_account(tenant, account_id)

        return run_operation(
            "delete_account",
            tenant,
            body,
            logger=logger,
            session=self._session,
            auto_commit=self._auto_commit,
        )

    def get_account(
        self,
        tenant: TenantContext,
        account_id: UUID,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[AccountDTO]:
        def body(company_id: UUID) -> AccountDTO:
            check_cancelled(cancel_token, "get_account")
            account = self._accounts.get_account(company_id, account_id)
            if account is None:
                raise AccountNotFoundError(str(account_id))
            return account

        return run_operation("get_account", tenant, body, logger=logger)

    def get_accounts_tree(
        self,
        tenant: TenantContext,
        include_inactive: bool = False,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[tuple[AccountNode, ...]]:
        """Accounts ordered by code and nested by parent."""

        def body(company_id: UUID) -> tuple[AccountNode, ...]:
            check_cancelled(cancel_token, "get_accounts_tree")
            accounts = self._accounts.list_accounts(
                company_id, include_inactive=include_inactive
            )
            return build_account_tree(accounts)

        return run_operation("get_accounts_tree", tenant, body, logger=logger)

    # =========================================================================
    # Journal listing
    # =========================================================================

    def list_journal_entries(
        self,
        tenant: TenantContext,
        date_from: date | None = None,
        date_to: date | None = None,
        source_module: str | None = None,
        page_no: int = 1,
        page_size: int | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> OperationResult[JournalEntryPage]:
        """
        One page of the tenant's journal, newest first.

        Filters are inclusive on entry_date; a blank ``source_module``
        means no filter.  ``page_size`` defaults to
        ``GLConfig.default_page_size``.
        """
        if page_size is None:
            page_size = self._config.default_page_size

        def body(company_id: UUID) -> JournalEntryPage:
            max_page_size = self._config.max_page_size
            if page_no < 1 or page_size < 1 or page_size > max_page_size:
                raise InvalidPaginationError(page_no, page_size, max_page_size)
            if date_from is not None and date_to is not None and date_from > date_to:
                raise InvalidDateRangeError(date_from.isoformat(), date_to.isoformat())

            check_cancelled(cancel_token, "list_journal_entries")
            total_count = self._journal.count_entries(
                company_id, date_from, date_to, source_module
            )

            check_cancelled(cancel_token, "list_journal_entries")
            items = self._journal.list_entries(
                company_id,
                date_from,
                date_to,
                source_module,
                offset=(page_no - 1) * page_size,
                limit=page_size,
            )

            logger.info(
                "journal_entries_listed",
                extra={
                    "page_no": page_no,
                    "page_size": page_size,
                    "item_count": len(items),
                    "total_count": total_count,
                },
            )
            return JournalEntryPage(
                items=tuple(items),
                total_count=total_count,
                page_no=page_no,
                page_size=page_size,
            )

        return run_operation("list_journal_entries", tenant, body, logger=logger)
