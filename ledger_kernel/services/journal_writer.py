"""
JournalWriter -- the single creation boundary for journal entries.

Responsibility:
    Validates a set of LineSpecs and persists them as one JournalEntry with
    its JournalLines.  Every posting in the system, including the
    auto-posting helpers, passes through ``create_entry``.

Architecture position:
    Kernel > Services -- imperative shell.  Callers own the transaction.

Invariants enforced:
    - At least two lines per entry.
    - Each line is one-sided: debit >= 0, credit >= 0, exactly one of them
      positive.
    - Amounts carry at most MONEY_SCALE decimal places, so the entry that is
      checked for balance is exactly the entry that gets stored.
    - Debits = Credits per entry.
    - Every line targets an active, non-deleted account of the same tenant.
    - created_at comes from the injected clock, which makes the
      (entry_date, created_at) listing order deterministic.

Failure modes:
    - CompanyContextMissingError: No company in scope.
    - InsufficientLinesError, InvalidLineAmountError, UnbalancedEntryError:
      malformed entry; nothing is added to the session.
    - AccountNotFoundError, AccountInactiveError: bad account reference.

Audit relevance:
    journal_entry_created is logged with the entry id, source and totals
    for every persisted entry; rejected entries log journal_entry_rejected.

Non-goals:
    - Does NOT update or delete entries; the ledger is append-only.
    - Does NOT commit.
"""

import time
from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from uuid import UUID

from sqlalchemy.orm import Session

from ledger_kernel.db.base import (
    MONEY_CONTEXT,
    MONEY_PRECISION,
    MONEY_QUANTUM,
    MONEY_SCALE,
)
from ledger_kernel.db.types import ZERO
from ledger_kernel.domain.clock import Clock
from ledger_kernel.domain.dtos import LineSpec
from ledger_kernel.domain.tenant import TenantContext
from ledger_kernel.exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    InsufficientLinesError,
    InvalidLineAmountError,
    PostingError,
    UnbalancedEntryError,
)
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.journal import JournalEntry, JournalLine
from ledger_kernel.selectors.account_selector import AccountSelector
from ledger_kernel.services.base import BaseService

logger = get_logger("services.journal_writer")


def _fits_column(amount: Decimal) -> bool:
    try:
        stored = amount.quantize(
            MONEY_QUANTUM, rounding=ROUND_DOWN, context=MONEY_CONTEXT
        )
    except InvalidOperation:
        return False
    return stored == amount


def validate_lines(lines: list[LineSpec]) -> tuple[Decimal, Decimal]:
    """
    Check line count, line amounts and balance.

    Returns:
        (total_debit, total_credit) of a valid entry.

    Raises:
        InsufficientLinesError, InvalidLineAmountError, UnbalancedEntryError.
    """
    if len(lines) < 2:
        raise InsufficientLinesError(len(lines))

    for index, line in enumerate(lines):
        if line.debit < ZERO or line.credit < ZERO:
            raise InvalidLineAmountError(
                index, str(line.debit), str(line.credit), "amounts must not be negative"
            )
        if line.debit > ZERO and line.credit > ZERO:
            raise InvalidLineAmountError(
                index, str(line.debit), str(line.credit), "line has both a debit and a credit"
            )
        if line.debit == ZERO and line.credit == ZERO:
            raise InvalidLineAmountError(
                index, str(line.debit), str(line.credit), "line has no amount"
            )
        if not (_fits_column(line.debit) and _fits_column(line.credit)):
            raise InvalidLineAmountError(
                index,
                str(line.debit),
                str(line.credit),
                f"amount must fit {MONEY_PRECISION} digits with {MONEY_SCALE} decimal places",
            )

    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)
    if total_debit != total_credit:
        raise UnbalancedEntryError(str(total_debit), str(total_credit))
    return total_debit, total_credit


class JournalWriter(BaseService[JournalEntry]):
    """
    Creates balanced journal entries.

    Contract:
        ``create_entry`` either flushes a complete entry (header plus all
        lines) or raises before adding anything to the session.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session, clock)
        self._accounts = AccountSelector(session)

    def create_entry(
        self,
        tenant: TenantContext,
        entry_date: date,
        reference: str,
        source_module: str,
        lines: list[LineSpec],
        source_id: UUID | None = None,
        description: str | None = None,
    ) -> JournalEntry:
        """
        Persist one balanced journal entry.

        Args:
            tenant: Owning company (and acting user).
            entry_date: Accounting date.
            reference: Business reference, e.g. an invoice number.
            source_module: Originating process, e.g. "Sale".
            lines: Two or more LineSpecs.
            source_id: Id of the originating business record.
            description: Free text.

        Returns:
            The flushed JournalEntry.
        """
        company_id = tenant.require_company("create_entry")
        t0 = time.monotonic()

        try:
            total_debit, _ = validate_lines(lines)
            self._check_accounts(company_id, lines)
        except PostingError as exc:
            logger.warning(
                "journal_entry_rejected",
                extra={
                    "source_module": source_module,
                    "reference": reference,
                    "error_code": exc.code,
                },
            )
            raise

        now = self.clock.now()
        actor_id = tenant.user_id
        entry = JournalEntry(
            company_id=company_id,
            entry_date=entry_date,
            reference=reference or "",
            source_module=source_module,
            source_id=source_id,
            description=description,
            is_deleted=False,
            created_at=now,
            updated_at=now,
            created_by_id=actor_id,
            updated_by_id=actor_id,
        )
        for seq, spec in enumerate(lines):
            entry.lines.append(
                JournalLine(
                    account_id=spec.account_id,
                    debit=spec.debit,
                    credit=spec.credit,
                    memo=spec.memo,
                    line_seq=seq,
                    is_deleted=False,
                    created_at=now,
                    updated_at=now,
                    created_by_id=actor_id,
                    updated_by_id=actor_id,
                )
            )

        self.session.add(entry)
        self.session.flush()

        with LogContext.bind(entry_id=str(entry.id)):
            logger.info(
                "journal_entry_created",
                extra={
                    "entry_date": entry_date.isoformat(),
                    "source_module": source_module,
                    "source_id": str(source_id) if source_id else None,
                    "line_count": len(lines),
                    "total": str(total_debit),
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
        return entry

    def _check_accounts(self, company_id: UUID, lines: list[LineSpec]) -> None:
        accounts = self._accounts.account_lookup(company_id)
        for line in lines:
            account = accounts.get(line.account_id)
            if account is None:
                raise AccountNotFoundError(str(line.account_id))
            if not account.is_active:
                raise AccountInactiveError(str(line.account_id))
