# =============================================================================
# core/formatters.py  —  Response Reshaping
# =============================================================================
#
# Raw platform records are large: a single order easily runs to hundreds of
# fields.  These helpers keep only what an agent reasons about, so tool
# replies stay small.  Missing fields come through as None.
# =============================================================================

from typing import Any, Optional

from core.models import JSONRecord, PagedResult


def format_product(product: Optional[JSONRecord]) -> Optional[JSONRecord]:
    """Flatten custom_attributes into a ``{code: value}`` dict."""
    if not product:
        return None

    custom_attributes = {
        attr.get("attribute_code"): attr.get("value")
        for attr in product.get("custom_attributes") or []
        if isinstance(attr, dict)
    }

    return {
        "id": product.get("id"),
        "sku": product.get("sku"),
        "name": product.get("name"),
        "price": product.get("price"),
        "status": product.get("status"),
        "visibility": product.get("visibility"),
        "type_id": product.get("type_id"),
        "created_at": product.get("created_at"),
        "updated_at": product.get("updated_at"),
        "extension_attributes": product.get("extension_attributes"),
        "custom_attributes": custom_attributes,
    }


def format_search_results(result: PagedResult) -> JSONRecord:
    """Product search page → total_count plus a short line per product."""
    return {
        "total_count": result.total_count,
        "items": [
            {
                "id": item.get("id"),
                "sku": item.get("sku"),
                "name": item.get("name"),
                "price": item.get("price"),
                "status": item.get("status"),
                "type_id": item.get("type_id"),
            }
            for item in result.items
        ],
    }


def format_order_summary(order: JSONRecord) -> JSONRecord:
    return {
        "entity_id": order.get("entity_id"),
        "increment_id": order.get("increment_id"),
        "status": order.get("status"),
        "state": order.get("state"),
        "customer_email": order.get("customer_email"),
        "customer_firstname": order.get("customer_firstname"),
        "customer_lastname": order.get("customer_lastname"),
        "grand_total": order.get("grand_total"),
        "total_qty_ordered": order.get("total_qty_ordered"),
        "created_at": order.get("created_at"),
        "updated_at": order.get("updated_at"),
    }


def format_order_item(item: JSONRecord) -> JSONRecord:
    return {
        "item_id": item.get("item_id"),
        "sku": item.get("sku"),
        "name": item.get("name"),
        "qty_ordered": item.get("qty_ordered"),
        "qty_shipped": item.get("qty_shipped"),
        "qty_invoiced": item.get("qty_invoiced"),
        "qty_refunded": item.get("qty_refunded"),
        "price": item.get("price"),
        "row_total": item.get("row_total"),
        "tax_amount": item.get("tax_amount"),
        "discount_amount": item.get("discount_amount"),
        "product_type": item.get("product_type"),
    }


def format_customer(customer: JSONRecord) -> JSONRecord:
    return {
        "id": customer.get("id"),
        "email": customer.get("email"),
        "firstname": customer.get("firstname"),
        "lastname": customer.get("lastname"),
        "group_id": customer.get("group_id"),
        "website_id": customer.get("website_id"),
        "created_at": customer.get("created_at"),
    }


def format_cart(cart: JSONRecord) -> JSONRecord:
    customer: Any = cart.get("customer") or {}
    if customer.get("firstname") or customer.get("lastname"):
        customer_name = f"{customer.get('firstname', '')} {customer.get('lastname', '')}".strip()
    else:
        customer_name = "Guest"

    return {
        "cart_id": cart.get("id"),
        "customer_email": customer.get("email") or cart.get("customer_email"),
        "customer_name": customer_name,
        "items_count": cart.get("items_count"),
        "grand_total": cart.get("grand_total"),
        "created_at": cart.get("created_at"),
        "updated_at": cart.get("updated_at"),
    }
