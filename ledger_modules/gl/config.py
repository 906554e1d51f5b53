"""
General Ledger Configuration Schema.

Defines the standard chart of accounts seeded by ``import_standard_chart``,
the account codes used by the auto-posting helpers, and journal listing
page sizes.  Values can be loaded from a dict or a YAML file.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Self

import yaml

from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.account import AccountType

logger = get_logger("modules.gl.config")


class PostingRole(str, Enum):
    """Roles an auto-posted line can play; each maps to one account code."""

    CASH = "cash"
    RECEIVABLE = "receivable"
    INVENTORY = "inventory"
    PAYABLE = "payable"
    TAX = "tax"
    REVENUE = "revenue"
    EXPENSE = "expense"


@dataclass(frozen=True)
class StandardAccount:
    """One seed of the standard chart."""

    code: str
    name: str
    account_type: AccountType


STANDARD_CHART: tuple[StandardAccount, ...] = (
    StandardAccount("CASH", "Cash", AccountType.ASSET),
    StandardAccount("AR", "Accounts Receivable", AccountType.ASSET),
    StandardAccount("INVENTORY", "Inventory", AccountType.ASSET),
    StandardAccount("AP", "Accounts Payable", AccountType.LIABILITY),
    StandardAccount("TAX", "Tax Payable", AccountType.LIABILITY),
    StandardAccount("REVENUE", "Revenue", AccountType.REVENUE),
    StandardAccount("EXPENSE", "Expenses", AccountType.EXPENSE),
    StandardAccount("EQUITY", "Equity", AccountType.EQUITY),
)


def _default_mappings() -> dict[PostingRole, str]:
    return {
        PostingRole.CASH: "CASH",
        PostingRole.RECEIVABLE: "AR",
        PostingRole.INVENTORY: "INVENTORY",
        PostingRole.PAYABLE: "AP",
        PostingRole.TAX: "TAX",
        PostingRole.REVENUE: "REVENUE",
        PostingRole.EXPENSE: "EXPENSE",
    }


@dataclass
class GLConfig:
    """
    Configuration schema for the general ledger module.

    Override at instantiation with company-specific values:

        config = GLConfig(max_page_size=200)
        config = GLConfig.from_yaml(Path("gl.yaml"))
    """

    # Seeds for import_standard_chart, in creation order
    standard_chart: tuple[StandardAccount, ...] = STANDARD_CHART

    # Account codes used by AccountingPostingService
    account_mappings: dict[PostingRole, str] = field(default_factory=_default_mappings)

    # Journal listing
    default_page_size: int = 20
    max_page_size: int = 500

    def __post_init__(self):
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be at least 1")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ValueError(
                f"default_page_size must be between 1 and {self.max_page_size}, "
                f"got {self.default_page_size}"
            )

        codes = [seed.code for seed in self.standard_chart]
        duplicates = {c for c in codes if codes.count(c) > 1}
        if duplicates:
            raise ValueError(f"standard_chart repeats codes: {sorted(duplicates)}")

        missing = set(PostingRole) - set(self.account_mappings)
        if missing:
            raise ValueError(
                f"account_mappings missing roles: {sorted(r.value for r in missing)}"
            )

    def code_for(self, role: PostingRole) -> str:
        """Account code mapped to a posting role."""
        return self.account_mappings[role]

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("gl_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary."""
        data = dict(data)
        if "standard_chart" in data:
            data["standard_chart"] = tuple(
                StandardAccount(
                    code=seed["code"],
                    name=seed["name"],
                    account_type=AccountType(seed["account_type"]),
                )
                for seed in data["standard_chart"]
            )
        if "account_mappings" in data:
            mappings = _default_mappings()
            mappings.update(
                {PostingRole(role): code for role, code in data["account_mappings"].items()}
            )
            data["account_mappings"] = mappings
        logger.info(
            "gl_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """
        Load config from a YAML file.

        Raises:
            FileNotFoundError: if the file does not exist.
            yaml.YAMLError: if the file contains invalid YAML.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
