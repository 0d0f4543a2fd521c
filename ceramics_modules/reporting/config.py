"""
Reporting Configuration Schema.

Defines the reporting defaults (windows, ranking size, display labels)
and the company letterhead handed to report renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

from ceramics_kernel.db.types import MONEY_DECIMAL_PLACES
from ceramics_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass(frozen=True)
class CompanyProfile:
    """Letterhead printed at the top of every rendered report."""

    name: str = "CERÂMICA CANELAS"
    trade_description: str = "TELHAS, TIJOLOS E LAJOTAS"
    legal_name: str = "CJM INDÚSTRIA CERÂMICA LTDA EPP"
    state_registration: str = "Inscr. Est.: 19.565.563-4"
    cnpj: str = "CNPJ: 22.399.038/0001-11"
    address: str = "Comun. Tamboril, S/N - Zona Rural"
    city_state_zip: str = "CEP: 64.610-000 - Sussuapara - PI"
    phones: str = "Fone: (89) 98818-8560 • 98812-2809"


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls default periods, ranking size, display labels and whether
    sale payments count as trial balance income.
    """

    # Entity name shown on reports
    entity_name: str = "CERÂMICA CANELAS"

    # Currency for every amount in every report
    currency: str = "BRL"

    # Rounding precision for display; never coarser than the stored amounts
    display_precision: int = 2

    # Top-N size for product and city rankings
    ranking_limit: int = 10

    # Rankings default to [today - recent_window_days, today]
    recent_window_days: int = 30

    # Trial balance and product items default to the same trailing window
    trial_balance_default_days: int = 30
    product_items_default_days: int = 30

    # Labels for expenses without a group or category
    uncategorized_group_name: str = "Sem grupo"
    uncategorized_category_name: str = "Sem categoria"

    # Sale payments do not create launches; opt in to count them as income
    include_sale_payments_in_income: bool = False

    company: CompanyProfile = field(default_factory=CompanyProfile)

    def __post_init__(self):
        if self.display_precision < MONEY_DECIMAL_PLACES:
            raise ValueError(
                f"display_precision cannot be below {MONEY_DECIMAL_PLACES}"
            )
        if len(self.currency) != 3:
            raise ValueError("currency must be a 3-letter ISO 4217 code")
        if self.ranking_limit < 0:
            raise ValueError("ranking_limit cannot be negative")
        for name in (
            "recent_window_days",
            "trial_balance_default_days",
            "product_items_default_days",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        data = dict(data)
        if "company" in data and isinstance(data["company"], dict):
            data["company"] = CompanyProfile(**data["company"])
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
