"""
Ledger Modules.

Thin orchestration layers over the Ledger Kernel.

Modules:
- GL: Chart of accounts, standard chart bootstrap, journal listing,
  auto-posting of sales, purchases, losses and payments
- Reporting: Balance sheet, profit and loss, cash-flow summary

Every public operation takes a TenantContext and returns an
OperationResult.  Processing rules live in the kernel.
"""
