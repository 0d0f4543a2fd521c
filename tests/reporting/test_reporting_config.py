"""Tests for ReportingConfig and CompanyProfile."""

import pytest

from ceramics_modules.reporting.config import CompanyProfile, ReportingConfig


class TestDefaults:

    def test_with_defaults(self):
        config = ReportingConfig.with_defaults()

        assert config.currency == "BRL"
        assert config.display_precision == 2
        assert config.ranking_limit == 10
        assert config.recent_window_days == 30
        assert config.include_sale_payments_in_income is False
        assert config.uncategorized_group_name == "Sem grupo"
        assert config.company == CompanyProfile()

    def test_company_profile_is_frozen(self):
        profile = CompanyProfile()

        with pytest.raises(AttributeError):
            profile.name = "Outra"


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"display_precision": -1},
        {"display_precision": 0},
        {"display_precision": 1},
        {"currency": "REAL"},
        {"ranking_limit": -1},
        {"recent_window_days": -7},
        {"trial_balance_default_days": -1},
        {"product_items_default_days": -1},
    ])
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ReportingConfig(**kwargs)

    def test_finer_display_precision_allowed(self):
        assert ReportingConfig(display_precision=4).display_precision == 4

    def test_zero_limit_allowed(self):
        assert ReportingConfig(ranking_limit=0).ranking_limit == 0


class TestFromDict:

    def test_builds_company_profile(self):
        config = ReportingConfig.from_dict({
            "ranking_limit": 5,
            "company": {"name": "Olaria Teste", "cnpj": "CNPJ: 00"},
        })

        assert config.ranking_limit == 5
        assert isinstance(config.company, CompanyProfile)
        assert config.company.name == "Olaria Teste"
        assert config.company.phones == CompanyProfile().phones

    def test_does_not_mutate_input(self):
        data = {"company": {"name": "Olaria Teste"}}

        ReportingConfig.from_dict(data)

        assert data == {"company": {"name": "Olaria Teste"}}

    def test_unknown_key_rejected(self):
        with pytest.raises(TypeError):
            ReportingConfig.from_dict({"no_such_option": True})
