# =============================================================================
# core/analytics.py  —  Aggregations over Fully-Fetched Order Lists
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The reporting tools fetch EVERY matching order (core/pagination.py) and
#   then reduce them here to a handful of numbers: revenue, order count,
#   average order value, top-selling products.
#
# MONEY:
#   Amounts arrive as numbers or numeric strings.  Anything unparseable
#   counts as 0.  Results are rounded to 2 decimals at the end, never
#   during accumulation.
# =============================================================================

from collections import OrderedDict
from typing import Any, Iterable, Optional

from core.models import JSONRecord


def _amount(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def order_country_codes(order: JSONRecord) -> tuple[Optional[str], Optional[str]]:
    """(billing country, first shipping-assignment country) of an order."""
    billing = (order.get("billing_address") or {}).get("country_id")

    shipping = None
    assignments = (order.get("extension_attributes") or {}).get("shipping_assignments") or []
    if assignments:
        address = ((assignments[0] or {}).get("shipping") or {}).get("address") or {}
        shipping = address.get("country_id")

    return billing, shipping


def filter_orders_by_country(orders: Iterable[JSONRecord], country_codes: list[str]) -> list[JSONRecord]:
    """Orders whose billing OR shipping country is in ``country_codes``."""
    matched = []
    for order in orders:
        billing, shipping = order_country_codes(order)
        if billing in country_codes or shipping in country_codes:
            matched.append(order)
    return matched


def summarize_revenue(orders: list[JSONRecord], include_tax: bool = True) -> JSONRecord:
    """Revenue, tax, order count and average order value.

    Revenue is the sum of ``grand_total``.  With ``include_tax=False`` the
    summed ``tax_amount`` is subtracted.
    """
    total_revenue = sum(_amount(order.get("grand_total")) for order in orders)
    total_tax = sum(_amount(order.get("tax_amount")) for order in orders)
    revenue = total_revenue if include_tax else total_revenue - total_tax
    order_count = len(orders)

    return {
        "revenue": round(revenue, 2),
        "order_count": order_count,
        "average_order_value": round(revenue / order_count, 2) if order_count else 0,
        "tax_amount": round(total_tax, 2),
    }


def summarize_product_sales(orders: list[JSONRecord], top: int = 10) -> JSONRecord:
    """Quantities sold across orders, plus the ``top`` SKUs by quantity."""
    total_order_items = 0
    total_quantity = 0.0
    total_revenue = 0.0
    per_sku: "OrderedDict[str, JSONRecord]" = OrderedDict()

    for order in orders:
        total_revenue += _amount(order.get("grand_total"))
        for item in order.get("items") or []:
            total_order_items += 1
            quantity = _amount(item.get("qty_ordered"))
            total_quantity += quantity

            sku = item.get("sku")
            entry = per_sku.setdefault(sku, {"sku": sku, "name": item.get("name"), "quantity": 0.0, "revenue": 0.0})
            entry["quantity"] += quantity
            entry["revenue"] += _amount(item.get("price")) * quantity

    # sorted() is stable: ties keep first-seen order.
    top_products = sorted(per_sku.values(), key=lambda entry: entry["quantity"], reverse=True)[:top]
    order_count = len(orders)

    return {
        "total_orders": order_count,
        "total_order_items": total_order_items,
        "total_product_quantity": total_quantity,
        "average_products_per_order": round(total_quantity / order_count, 2) if order_count else 0,
        "total_revenue": round(total_revenue, 2),
        "average_revenue_per_product": round(total_revenue / total_quantity, 2) if total_quantity else 0,
        "top_products": [
            {**entry, "revenue": round(entry["revenue"], 2)}
            for entry in top_products
        ],
    }


def collect_ordered_skus(orders: Iterable[JSONRecord]) -> list[str]:
    """Unique SKUs across all orders, in first-seen order."""
    seen: dict[str, None] = {}
    for order in orders:
        for item in order.get("items") or []:
            sku = item.get("sku")
            if sku:
                seen.setdefault(sku, None)
    return list(seen)
