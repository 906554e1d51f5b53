"""Tests for GLConfig defaults, validation and loading."""

import pytest

from ledger_kernel.models.account import AccountType
from ledger_modules.gl.config import (
    STANDARD_CHART,
    GLConfig,
    PostingRole,
    StandardAccount,
)


class TestDefaults:
    def test_standard_chart_codes(self):
        assert [seed.code for seed in STANDARD_CHART] == [
            "CASH", "AR", "INVENTORY", "AP", "TAX", "REVENUE", "EXPENSE", "EQUITY",
        ]

    def test_every_role_mapped(self):
        config = GLConfig.with_defaults()
        assert config.code_for(PostingRole.CASH) == "CASH"
        assert config.code_for(PostingRole.RECEIVABLE) == "AR"
        assert config.code_for(PostingRole.PAYABLE) == "AP"

    def test_page_sizes(self):
        config = GLConfig()
        assert config.default_page_size == 20
        assert config.max_page_size == 500


class TestValidation:
    def test_default_page_size_above_max(self):
        with pytest.raises(ValueError, match="default_page_size"):
            GLConfig(default_page_size=50, max_page_size=10)

    def test_zero_max_page_size(self):
        with pytest.raises(ValueError, match="max_page_size"):
            GLConfig(max_page_size=0)

    def test_duplicate_seed_codes(self):
        seeds = (
            StandardAccount("CASH", "Cash", AccountType.ASSET),
            StandardAccount("CASH", "Bank", AccountType.ASSET),
        )
        with pytest.raises(ValueError, match="repeats codes"):
            GLConfig(standard_chart=seeds)

    def test_missing_role(self):
        with pytest.raises(ValueError, match="missing roles"):
            GLConfig(account_mappings={PostingRole.CASH: "CASH"})


class TestLoading:
    def test_from_dict_merges_mappings(self):
        config = GLConfig.from_dict(
            {"account_mappings": {"revenue": "SALES"}, "default_page_size": 50}
        )
        assert config.code_for(PostingRole.REVENUE) == "SALES"
        assert config.code_for(PostingRole.CASH) == "CASH"
        assert config.default_page_size == 50

    def test_from_dict_unknown_role(self):
        with pytest.raises(ValueError):
            GLConfig.from_dict({"account_mappings": {"goodwill": "GW"}})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "gl.yaml"
        path.write_text(
            "max_page_size: 100\n"
            "standard_chart:\n"
            "  - {code: CASH, name: Cash, account_type: asset}\n"
            "  - {code: LOAN, name: Bank loan, account_type: liability}\n"
        )

        config = GLConfig.from_yaml(path)

        assert config.max_page_size == 100
        assert config.standard_chart[1] == StandardAccount(
            "LOAN", "Bank loan", AccountType.LIABILITY
        )

    def test_from_empty_yaml(self, tmp_path):
        path = tmp_path / "gl.yaml"
        path.write_text("")
        assert GLConfig.from_yaml(path) == GLConfig()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GLConfig.from_yaml(tmp_path / "absent.yaml")
