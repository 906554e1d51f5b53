"""
Reporting Configuration Schema.

Identifies the cash accounts, classifies cash movements by the source
module of their journal entry, and labels the synthetic retained-earnings
line of the balance sheet.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

import yaml

from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.journal import JournalSourceModule
from ledger_modules.reporting.models import CashFlowCategory

logger = get_logger("modules.reporting.config")

# Source module -> cash-flow category.  Unknown modules fall back to
# ReportingConfig.default_cash_flow_category.
CASH_FLOW_CATEGORY_BY_SOURCE = MappingProxyType({
    JournalSourceModule.SALE.value: CashFlowCategory.OPERATING,
    JournalSourceModule.POS.value: CashFlowCategory.OPERATING,
    JournalSourceModule.PAYMENT.value: CashFlowCategory.OPERATING,
    JournalSourceModule.PURCHASE.value: CashFlowCategory.OPERATING,
    JournalSourceModule.ADJUSTMENT.value: CashFlowCategory.OPERATING,
})


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Override at instantiation with company-specific values:

        config = ReportingConfig(cash_account_codes=("CASH", "BANK"))
    """

    # Accounts treated as cash and cash equivalents (exact code match)
    cash_account_codes: tuple[str, ...] = ("CASH",)

    cash_flow_classification: dict[str, CashFlowCategory] = field(
        default_factory=lambda: dict(CASH_FLOW_CATEGORY_BY_SOURCE),
    )
    default_cash_flow_category: CashFlowCategory = CashFlowCategory.OPERATING

    # Synthetic equity line carrying net income on the balance sheet
    retained_earnings_code: str = "R/E"
    retained_earnings_name: str = "Retained Earnings (Net Income)"

    def __post_init__(self):
        if not self.retained_earnings_code:
            raise ValueError("retained_earnings_code cannot be empty")
        if any(not code for code in self.cash_account_codes):
            raise ValueError("cash_account_codes cannot contain empty codes")

    def category_for(self, source_module: str) -> CashFlowCategory:
        """Cash-flow category of a journal entry's source module."""
        return self.cash_flow_classification.get(
            source_module, self.default_cash_flow_category
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary."""
        data = dict(data)
        if "cash_account_codes" in data:
            data["cash_account_codes"] = tuple(data["cash_account_codes"])
        if "cash_flow_classification" in data:
            classification = dict(CASH_FLOW_CATEGORY_BY_SOURCE)
            classification.update(
                {
                    source: CashFlowCategory(category)
                    for source, category in data["cash_flow_classification"].items()
                }
            )
            data["cash_flow_classification"] = classification
        if "default_cash_flow_category" in data:
            data["default_cash_flow_category"] = CashFlowCategory(
                data["default_cash_flow_category"]
            )
        logger.info(
            "reporting_config_loading_from_dict",
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
