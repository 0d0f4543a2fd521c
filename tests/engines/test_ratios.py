"""Tests for derived dashboard ratios."""

from decimal import Decimal

import pytest

from ceramics_engines.ratios import (
    conversion_rate,
    monthly_growth,
    percentage_of,
    total_active_sales,
)


class TestConversionRate:

    def test_two_pending_eight_confirmed(self):
        assert conversion_rate(pending=2, confirmed=8) == Decimal("80.00")

    def test_no_sales_is_zero(self):
        assert conversion_rate(0, 0) == Decimal("0")

    def test_all_confirmed(self):
        assert conversion_rate(0, 5) == Decimal("100.00")

    def test_rounds_half_up(self):
        # 1 / 3 * 100 = 33.333...
        assert conversion_rate(2, 1) == Decimal("33.33")
        # 2 / 3 * 100 = 66.666...
        assert conversion_rate(1, 2) == Decimal("66.67")

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            conversion_rate(-1, 3)


class TestMonthlyGrowth:

    def test_growth(self):
        assert monthly_growth(Decimal("150"), Decimal("100")) == Decimal("50.00")

    def test_decline(self):
        assert monthly_growth(Decimal("75"), Decimal("100")) == Decimal("-25.00")

    def test_no_baseline(self):
        assert monthly_growth(Decimal("500"), Decimal("0")) == Decimal("0")


class TestPercentageOf:

    def test_zero_whole(self):
        assert percentage_of(3, 0) == Decimal("0")

    def test_half_up(self):
        # 1 / 8 * 100 = 12.5 exactly
        assert percentage_of(1, 8) == Decimal("12.50")
        # 1 / 6 * 100 = 16.666...
        assert percentage_of(1, 6) == Decimal("16.67")


class TestTotalActiveSales:

    def test_sum(self):
        assert total_active_sales(pending=2, confirmed=8, partially_paid=3) == 13

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            total_active_sales(0, 0, -1)
