"""Tests for the closed catalog enumerations."""

import pytest

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    ProductType,
    SaleStatus,
    describe,
    ordinal,
    parse_enum,
)
from ceramics_kernel.exceptions import UnknownEnumValueError


class TestDescriptions:
    """Every member has a display label."""

    @pytest.mark.parametrize(
        "enum_cls", [ProductType, SaleStatus, PaymentMethod, LaunchType, PaymentStatus]
    )
    def test_every_member_described(self, enum_cls):
        for member in enum_cls:
            assert describe(member)

    def test_payment_method_labels(self):
        assert describe(PaymentMethod.CASH) == "Dinheiro"
        assert describe(PaymentMethod.AUTOMATIC_DEBIT) == "Débito Automático"


class TestOrdinal:
    """Declaration order drives tie-breaking."""

    def test_first_and_last_product(self):
        assert ordinal(ProductType.BRICK1_6) == 0
        assert ordinal(ProductType.CALDEADO9) == len(ProductType) - 1

    def test_eighteen_products(self):
        assert len(ProductType) == 18

    def test_payment_method_order(self):
        assert ordinal(PaymentMethod.CASH) < ordinal(PaymentMethod.BBJ)


class TestParseEnum:
    """Strict parsing of stored values."""

    def test_parse_by_value(self):
        assert parse_enum(SaleStatus, "partially_paid") is SaleStatus.PARTIALLY_PAID

    def test_parse_by_name(self):
        assert parse_enum(ProductType, "ROOF_TILE1") is ProductType.ROOF_TILE1

    def test_parse_is_case_insensitive(self):
        assert parse_enum(PaymentMethod, " BBJ ") is PaymentMethod.BBJ

    def test_member_passes_through(self):
        assert parse_enum(LaunchType, LaunchType.INCOME) is LaunchType.INCOME

    def test_unknown_value_raises(self):
        with pytest.raises(UnknownEnumValueError) as exc_info:
            parse_enum(PaymentMethod, "pix")

        assert exc_info.value.enum_name == "PaymentMethod"
        assert exc_info.value.value == "pix"

    def test_non_string_raises(self):
        with pytest.raises(UnknownEnumValueError):
            parse_enum(SaleStatus, 3)
