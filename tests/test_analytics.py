"""
Unit tests for core/analytics.py and core/formatters.py
"""

from core.analytics import (
    collect_ordered_skus,
    filter_orders_by_country,
    summarize_product_sales,
    summarize_revenue,
)
from core.formatters import format_cart, format_product, format_search_results
from core.models import PagedResult


def _order(grand_total, tax=0, billing=None, shipping=None, items=()):
    order = {"grand_total": grand_total, "tax_amount": tax, "items": list(items)}
    if billing:
        order["billing_address"] = {"country_id": billing}
    if shipping:
        order["extension_attributes"] = {
            "shipping_assignments": [{"shipping": {"address": {"country_id": shipping}}}]
        }
    return order


def _item(sku, qty, price, name=None):
    return {"sku": sku, "name": name or sku, "qty_ordered": qty, "price": price}


# =============================================================================
# Revenue
# =============================================================================


class TestSummarizeRevenue:

    def test_with_tax(self):
        orders = [_order(110, 10), _order("55.50", "5.50")]
        result = summarize_revenue(orders)
        assert result == {
            "revenue": 165.5,
            "order_count": 2,
            "average_order_value": 82.75,
            "tax_amount": 15.5,
        }

    def test_without_tax(self):
        result = summarize_revenue([_order(110, 10), _order(55.5, 5.5)], include_tax=False)
        assert result["revenue"] == 150.0
        assert result["average_order_value"] == 75.0

    def test_empty(self):
        assert summarize_revenue([]) == {
            "revenue": 0,
            "order_count": 0,
            "average_order_value": 0,
            "tax_amount": 0,
        }

    def test_unparseable_amounts_count_as_zero(self):
        assert summarize_revenue([_order(None), _order("n/a"), _order(10)])["revenue"] == 10.0


# =============================================================================
# Product sales
# =============================================================================


class TestSummarizeProductSales:

    def test_totals_and_top_products(self):
        orders = [
            _order(30, items=[_item("A", 1, 10), _item("B", 2, 10)]),
            _order(50, items=[_item("B", 3, 10), _item("C", 1, 20)]),
        ]
        result = summarize_product_sales(orders)

        assert result["total_orders"] == 2
        assert result["total_order_items"] == 4
        assert result["total_product_quantity"] == 7
        assert result["average_products_per_order"] == 3.5
        assert result["total_revenue"] == 80.0
        assert result["average_revenue_per_product"] == round(80 / 7, 2)
        assert [p["sku"] for p in result["top_products"]] == ["B", "A", "C"]
        assert result["top_products"][0] == {"sku": "B", "name": "B", "quantity": 5.0, "revenue": 50.0}

    def test_top_is_limited(self):
        orders = [_order(1, items=[_item(f"S{n}", n, 1) for n in range(1, 15)])]
        top = summarize_product_sales(orders, top=3)["top_products"]
        assert [p["sku"] for p in top] == ["S14", "S13", "S12"]

    def test_no_orders(self):
        result = summarize_product_sales([])
        assert result["total_orders"] == 0
        assert result["average_products_per_order"] == 0
        assert result["average_revenue_per_product"] == 0
        assert result["top_products"] == []


# =============================================================================
# Country filter / SKU collection
# =============================================================================


class TestCountryFilter:

    def test_billing_or_shipping_match(self):
        billed_nl = _order(1, billing="NL")
        shipped_nl = _order(2, billing="DE", shipping="NL")
        elsewhere = _order(3, billing="US", shipping="US")
        no_address = _order(4)

        matched = filter_orders_by_country([billed_nl, shipped_nl, elsewhere, no_address], ["NL"])
        assert matched == [billed_nl, shipped_nl]

    def test_collect_ordered_skus_first_seen_order(self):
        orders = [
            _order(1, items=[_item("B", 1, 1), _item("A", 1, 1)]),
            _order(1, items=[_item("A", 1, 1), _item("C", 1, 1), {"sku": None}]),
        ]
        assert collect_ordered_skus(orders) == ["B", "A", "C"]


# =============================================================================
# Formatters
# =============================================================================


class TestFormatters:

    def test_format_product_flattens_custom_attributes(self):
        product = {
            "id": 1,
            "sku": "TEE-1",
            "name": "Tee",
            "custom_attributes": [
                {"attribute_code": "color", "value": "49"},
                {"attribute_code": "description", "value": "<p>Soft</p>"},
            ],
        }
        formatted = format_product(product)
        assert formatted["sku"] == "TEE-1"
        assert formatted["custom_attributes"] == {"color": "49", "description": "<p>Soft</p>"}
        assert formatted["price"] is None

    def test_format_product_empty(self):
        assert format_product(None) is None
        assert format_product({}) is None

    def test_format_search_results(self):
        page = PagedResult(total_count=12, items=[{"id": 3, "sku": "X", "weight": 1}], has_items=True)
        assert format_search_results(page) == {
            "total_count": 12,
            "items": [{"id": 3, "sku": "X", "name": None, "price": None, "status": None, "type_id": None}],
        }

    def test_format_cart_guest_and_customer(self):
        guest = format_cart({"id": 5, "customer_email": "g@example.com"})
        assert guest["customer_name"] == "Guest"
        assert guest["customer_email"] == "g@example.com"

        known = format_cart({"id": 6, "customer": {"email": "c@example.com", "firstname": "Ana", "lastname": "Lee"}})
        assert known["customer_name"] == "Ana Lee"
        assert known["customer_email"] == "c@example.com"
