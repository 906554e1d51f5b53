"""
Typed Exception Hierarchy for the Ledger Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers must be able to tell a missing tenant from a missing account from an
unbalanced entry without parsing message strings.  Every exception below:
  1. Is a TYPED class (catch by type, not message)
  2. Carries a CODE class attribute (machine-readable, API-safe)
  3. Stores its context as attributes (not just a message string)

Module services (``ledger_modules``) translate these into
``OperationResult`` statuses; kernel services raise them directly.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerKernelError (base)
    |
    +-- TenantError
    |   +-- CompanyContextMissingError
    |
    +-- ValidationError
    |   +-- InvalidDateRangeError
    |   +-- InvalidPaginationError
    |   +-- DuplicateAccountCodeError
    |
    +-- NotFoundError
    |   +-- AccountNotFoundError
    |   +-- StandardAccountMissingError
    |
    +-- PostingError
    |   +-- UnbalancedEntryError
    |   +-- InsufficientLinesError
    |   +-- InvalidLineAmountError
    |   +-- AccountInactiveError
    |
    +-- OperationCancelledError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Tenant          | COMPANY_CONTEXT_MISSING     | No company id in the TenantContext
----------------|-----------------------------|-----------------------------------------
Validation      | INVALID_DATE_RANGE          | from date after to date
                | INVALID_PAGINATION          | page_no/page_size out of range
                | DUPLICATE_ACCOUNT_CODE      | Code already used by a live account
----------------|-----------------------------|-----------------------------------------
Not found       | ACCOUNT_NOT_FOUND           | Account id absent for the tenant
                | STANDARD_ACCOUNT_MISSING    | Auto-posting needs a seeded code
----------------|-----------------------------|-----------------------------------------
Posting         | UNBALANCED_ENTRY            | Debits != Credits
                | INSUFFICIENT_LINES          | Fewer than two lines
                | INVALID_LINE_AMOUNT         | Negative or two-sided line
                | ACCOUNT_INACTIVE            | Line targets an inactive account
----------------|-----------------------------|-----------------------------------------
Cancellation    | OPERATION_CANCELLED         | CancellationToken was set mid-call
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Tenant-related exceptions


class TenantError(LedgerKernelError):
    """Base exception for tenant scoping errors."""

    code: str = "TENANT_ERROR"


class CompanyContextMissingError(TenantError):
    """No company is in scope for the operation."""

    code: str = "COMPANY_CONTEXT_MISSING"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Company context is required for {operation}")


# Validation exceptions


class ValidationError(LedgerKernelError):
    """Base exception for malformed input rejected before any read or write."""

    code: str = "VALIDATION_ERROR"


class InvalidDateRangeError(ValidationError):
    """Start of a date window is after its end."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, from_date: str, to_date: str):
        self.from_date = from_date
        self.to_date = to_date
        super().__init__(f"Invalid date range: {from_date} is after {to_date}")


class InvalidPaginationError(ValidationError):
    """Page number or page size out of the accepted range."""

    code: str = "INVALID_PAGINATION"

    def __init__(self, page_no: int, page_size: int, max_page_size: int):
        self.page_no = page_no
        self.page_size = page_size
        self.max_page_size = max_page_size
        super().__init__(
            f"Invalid pagination: page_no={page_no}, page_size={page_size} "
            f"(page_no >= 1, 1 <= page_size <= {max_page_size})"
        )


class DuplicateAccountCodeError(ValidationError):
    """Another live account of the tenant already uses this code."""

    code: str = "DUPLICATE_ACCOUNT_CODE"

    def __init__(self, company_id: str, account_code: str):
        self.company_id = company_id
        self.account_code = account_code
        super().__init__(
            f"An account with code '{account_code}' already exists "
            f"for company {company_id}"
        )


# Not-found exceptions


class NotFoundError(LedgerKernelError):
    """Base exception for referenced entities that do not exist."""

    code: str = "NOT_FOUND"


class AccountNotFoundError(NotFoundError):
    """Account was not found for the tenant."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class StandardAccountMissingError(NotFoundError):
    """A standard account code required for auto-posting is not set up."""

    code: str = "STANDARD_ACCOUNT_MISSING"

    def __init__(self, account_code: str):
        self.account_code = account_code
        super().__init__(
            f"Standard account '{account_code}' is not set up; "
            "import the standard chart first"
        )


# Posting-related exceptions


class PostingError(LedgerKernelError):
    """Base exception for journal entry creation errors."""

    code: str = "POSTING_ERROR"


class UnbalancedEntryError(PostingError):
    """Journal entry debits do not equal credits."""

    code: str = "UNBALANCED_ENTRY"

    def __init__(self, debits: str, credits: str):
        self.debits = debits
        self.credits = credits
        super().__init__(f"Unbalanced entry: debits={debits}, credits={credits}")


class InsufficientLinesError(PostingError):
    """Journal entry has fewer than two lines."""

    code: str = "INSUFFICIENT_LINES"

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__(
            f"Journal entry requires at least two lines, got {line_count}"
        )


class InvalidLineAmountError(PostingError):
    """Line amount is negative, zero on both sides, or set on both sides."""

    code: str = "INVALID_LINE_AMOUNT"

    def __init__(self, line_index: int, debit: str, credit: str, reason: str):
        self.line_index = line_index
        self.debit = debit
        self.credit = credit
        self.reason = reason
        super().__init__(
            f"Invalid amounts on line {line_index} "
            f"(debit={debit}, credit={credit}): {reason}"
        )


class AccountInactiveError(PostingError):
    """Account is not active for posting."""

    code: str = "ACCOUNT_INACTIVE"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account is inactive: {account_id}")


# Cancellation


class OperationCancelledError(LedgerKernelError):
    """The caller's cancellation token was set while the operation ran."""

    code: str = "OPERATION_CANCELLED"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation cancelled: {operation}")
