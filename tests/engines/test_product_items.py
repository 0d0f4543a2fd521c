"""
Tests for the product-items (milheiro) report engine.

Covers:
- Proportional discount allocation per item
- Per-product milheiros, units, breaks and average price
- Filters and ordering
"""

import threading
from datetime import date
from decimal import Decimal

import pytest

from ceramics_engines.product_items import (
    ProductItemsFilters,
    build_product_items,
    item_net_revenue,
)
from ceramics_kernel.domain.catalog import PaymentMethod, ProductType, SaleStatus
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.exceptions import ReportCancelledError
from tests.factories import item, payment, sale

JUNE = DateRange(date(2024, 6, 1), date(2024, 6, 30))


class TestItemNetRevenue:
    """Tests for discount allocation."""

    def test_proportional_discount(self):
        line = item(ProductType.BLOCK9, "6", "600")
        parent = sale(date(2024, 6, 1), total_net="900", total_gross="1000", discount="100")

        assert item_net_revenue(line, parent) == Decimal("540.00")

    def test_rounds_half_up(self):
        line = item(ProductType.BLOCK9, "1", "100")
        parent = sale(date(2024, 6, 1), total_net="200", total_gross="300", discount="100")

        assert item_net_revenue(line, parent) == Decimal("66.67")

    def test_zero_gross_keeps_subtotal(self):
        line = item(ProductType.BLOCK9, "1", "0")
        parent = sale(date(2024, 6, 1), total_net="0", total_gross="0")

        assert item_net_revenue(line, parent) == Decimal("0")


class TestBuildProductItems:
    """Tests for per-product grouping."""

    def test_groups_by_product(self):
        sales = [
            sale(date(2024, 6, 2), total_net="900", total_gross="1000", discount="100", items=(
                item(ProductType.BLOCK9, "6", "600", breaks=10),
                item(ProductType.SLABS, "2", "400", breaks=5),
            )),
            sale(date(2024, 6, 3), total_net="300", items=(
                item(ProductType.SLABS, "1.5", "300", breaks=1),
            )),
        ]

        result = build_product_items(sales, JUNE)

        by_product = {row.product: row for row in result.rows}
        slabs = by_product[ProductType.SLABS]
        assert slabs.milheiros == Decimal("3.5")
        assert slabs.units == Decimal("3500")
        assert slabs.revenue == Decimal("660.00")
        assert slabs.breaks == 6
        assert slabs.average_price == Decimal("188.57")

        assert result.total_milheiros == Decimal("9.5")
        assert result.total_units == Decimal("9500")
        assert result.total_revenue == Decimal("1200.00")
        assert result.total_breaks == 16

    def test_ordered_by_revenue_then_ordinal(self):
        sales = [
            sale(date(2024, 6, 2), items=(
                item(ProductType.SLABS, "1", "100"),
                item(ProductType.BLOCK9, "1", "100"),
                item(ProductType.ROOF_TILE1, "1", "500"),
            )),
        ]

        result = build_product_items(sales, JUNE)

        assert [row.product for row in result.rows] == [
            ProductType.ROOF_TILE1,
            ProductType.BLOCK9,
            ProductType.SLABS,
        ]

    def test_totals_equal_sum_of_rows(self):
        sales = [
            sale(date(2024, 6, 2), total_net="200", total_gross="300", discount="100", items=(
                item(ProductType.BLOCK9, "1", "100"),
                item(ProductType.SLABS, "1", "100"),
                item(ProductType.BANDS6, "1", "100"),
            )),
        ]

        result = build_product_items(sales, JUNE)

        assert result.total_revenue == sum(row.revenue for row in result.rows)
        assert result.total_revenue == Decimal("200.01")

    def test_empty(self):
        result = build_product_items([], JUNE)

        assert result.rows == ()
        assert result.total_revenue == Decimal("0")
        assert result.total_breaks == 0


class TestProductItemsFilters:

    @pytest.fixture
    def sales(self):
        return [
            sale(date(2024, 6, 2), SaleStatus.CONFIRMED, city="Picos", state="PI",
                 payments=(payment(PaymentMethod.BBJ),),
                 items=(item(ProductType.BLOCK9, "1", "100"),)),
            sale(date(2024, 6, 3), SaleStatus.PENDING, city="Oeiras", state="PI",
                 payments=(payment(PaymentMethod.CASH),),
                 items=(item(ProductType.SLABS, "2", "200"),)),
            sale(date(2024, 6, 4), SaleStatus.CONFIRMED, city="Picos", state="PI",
                 is_active=False,
                 items=(item(ProductType.BANDS9, "9", "900"),)),
            sale(date(2024, 7, 1), SaleStatus.CONFIRMED, city="Picos", state="PI",
                 items=(item(ProductType.BANDS8, "9", "900"),)),
        ]

    def test_no_filters_excludes_inactive_and_out_of_range(self, sales):
        products = {row.product for row in build_product_items(sales, JUNE).rows}
        assert products == {ProductType.BLOCK9, ProductType.SLABS}

    def test_status_filter(self, sales):
        result = build_product_items(sales, JUNE, ProductItemsFilters(status=SaleStatus.PENDING))
        assert [row.product for row in result.rows] == [ProductType.SLABS]

    def test_payment_method_filter(self, sales):
        result = build_product_items(
            sales, JUNE, ProductItemsFilters(payment_method=PaymentMethod.BBJ),
        )
        assert [row.product for row in result.rows] == [ProductType.BLOCK9]

    def test_city_filter_is_case_insensitive(self, sales):
        result = build_product_items(sales, JUNE, ProductItemsFilters(city=" oeiras "))
        assert [row.product for row in result.rows] == [ProductType.SLABS]

    def test_state_filter(self, sales):
        result = build_product_items(sales, JUNE, ProductItemsFilters(state="ce"))
        assert result.rows == ()

    def test_product_filter(self, sales):
        result = build_product_items(sales, JUNE, ProductItemsFilters(product=ProductType.SLABS))
        assert [row.product for row in result.rows] == [ProductType.SLABS]

    def test_cancellation(self, sales):
        event = threading.Event()
        event.set()
        with pytest.raises(ReportCancelledError):
            build_product_items(sales, JUNE, cancel_event=event)
