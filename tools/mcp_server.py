# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the MCP tools an agent can call against the store's admin API.
#   Each tool is a thin wrapper around core/: it assembles a SearchCriteria,
#   calls the HTTP primitive (one page) or the fetch engine (every page),
#   and reshapes the answer into a small dict.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name via MCP (e.g. "search_orders")
#   2. FastMCP routes the call to the decorated function below
#   3. The function builds criteria → core.criteria encodes them
#   4. core.api_client / core.pagination talk to the REST API
#   5. core.formatters / core.analytics trim the response
#
# TOOL NAMING CONVENTIONS:
#   - get_*     → read one resource or one report
#   - search_*  → filtered, paged collection (one page per call)
#   - add_* / update_* / cancel_*  → writes
#
# ERRORS:
#   Tools never raise at the agent.  Any core failure (API error, bad date
#   expression, cancelled fetch) comes back as {"error": "..."}.
#
# THE CLIENT:
#   main.py builds one MagentoClient from MagentoConfig and hands it over
#   with bind_client().  Tools never read the environment themselves.
# =============================================================================

import json
import logging
import sys
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import quote

from fastmcp import FastMCP

from core.analytics import (
    collect_ordered_skus,
    filter_orders_by_country,
    summarize_product_sales,
    summarize_revenue,
)
from core.api_client import MagentoClient
from core.criteria import contains
from core.dates import date_range_groups, format_for_magento, normalize_country, parse_date_expression
from core.errors import MagentoError
from core.formatters import (
    format_cart,
    format_customer,
    format_order_item,
    format_order_summary,
    format_product,
    format_search_results,
)
from core.models import DateRange, JSONRecord, SearchCriteria
from core.pagination import fetch_all_pages, fetch_page

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: the MCP stdio transport owns STDOUT, and anything else
# written there would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for response JSON
#   - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result):
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'), default=str)}{_RESET}")
    return result


def _error(tool_name: str, action: str, exc: Exception) -> dict:
    _log_status(f"{action} failed: {exc}")
    return _log_response(tool_name, {"error": f"Error {action}: {exc}"})


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("magento-admin")

_client: Optional[MagentoClient] = None


def bind_client(client: MagentoClient) -> None:
    """Attach the client every tool will use.  Called once by main.py."""
    global _client
    _client = client


def _get_client() -> MagentoClient:
    if _client is None:
        raise RuntimeError("No MagentoClient bound; call bind_client() before serving tools")
    return _client


async def _fetch_all(endpoint: str, criteria: SearchCriteria) -> list[JSONRecord]:
    client = _get_client()
    return await fetch_all_pages(
        client,
        endpoint,
        criteria,
        page_size=client.config.fetch_page_size,
        max_pages=client.config.max_pages,
    )


def _path(segment) -> str:
    """Percent-encode one URL path segment (SKUs may contain "/")."""
    return quote(str(segment), safe="")


def _report_query(date_range: DateRange, **extra) -> dict:
    return {
        "date_range": date_range.description,
        **extra,
        "period": {
            "start_date": date_range.start.strftime("%Y-%m-%d"),
            "end_date": date_range.end.strftime("%Y-%m-%d"),
        },
    }


def _orders_in_range(date_range: DateRange, status: Optional[str]) -> SearchCriteria:
    criteria = SearchCriteria(filter_groups=date_range_groups("created_at", date_range.start, date_range.end))
    if status:
        criteria.where("status", status)
    return criteria


# =============================================================================
# PRODUCTS
# =============================================================================
@mcp.tool()
async def get_product_by_sku(sku: str) -> dict:
    """Get detailed information about a product by its SKU.

    Args:
        sku: The SKU (Stock Keeping Unit) of the product.

    Returns:
        The product's core fields with custom_attributes flattened into a
        {attribute_code: value} dict.
    """
    _log_request("get_product_by_sku", sku=sku)
    try:
        product = await _get_client().get(f"/products/{_path(sku)}")
    except MagentoError as exc:
        return _error("get_product_by_sku", "fetching product", exc)
    return _log_response("get_product_by_sku", format_product(product) or {"error": "Product not found"})


@mcp.tool()
async def search_products(query: str, page_size: int = 10, current_page: int = 1) -> dict:
    """Search products whose name contains the query text.

    Args:
        query: Text to look for in the product name.
        page_size: Results per page (default 10).
        current_page: Page number, starting at 1.

    Returns:
        total_count and one short record (id, sku, name, price, status,
        type_id) per product on the requested page.
    """
    _log_request("search_products", query=query, page_size=page_size, current_page=current_page)
    criteria = SearchCriteria().where("name", contains(query), "like").paginate(page_size, current_page)
    try:
        page = await fetch_page(_get_client(), "/products", criteria)
    except MagentoError as exc:
        return _error("search_products", "searching products", exc)
    return _log_response("search_products", format_search_results(page))


@mcp.tool()
async def advanced_product_search(
    field: str,
    value: str,
    condition_type: str = "eq",
    page_size: int = 10,
    current_page: int = 1,
    sort_field: str = "entity_id",
    sort_direction: str = "DESC",
) -> dict:
    """Search products on any attribute with any condition.

    Args:
        field: Attribute to filter on (e.g. name, sku, price, status).
        value: Value to compare against.  For "like", include % wildcards.
        condition_type: eq, neq, like, gt, lt, gteq, lteq, in, nin, null,
            notnull.
        page_size: Results per page (default 10).
        current_page: Page number, starting at 1.
        sort_field: Attribute to sort by (default entity_id).
        sort_direction: ASC or DESC (default DESC).
    """
    _log_request("advanced_product_search", field=field, value=value, condition_type=condition_type,
                 page_size=page_size, current_page=current_page,
                 sort_field=sort_field, sort_direction=sort_direction)
    criteria = (
        SearchCriteria()
        .where(field, value, condition_type)
        .sort_by(sort_field, sort_direction)
        .paginate(page_size, current_page)
    )
    try:
        page = await fetch_page(_get_client(), "/products", criteria)
    except MagentoError as exc:
        return _error("advanced_product_search", "performing advanced search", exc)
    return _log_response("advanced_product_search", format_search_results(page))


@mcp.tool()
async def get_products_in_category(category_id: int, page_size: int = 20, current_page: int = 1) -> dict:
    """List the products assigned to a category, one page at a time."""
    _log_request("get_products_in_category", category_id=category_id,
                 page_size=page_size, current_page=current_page)
    criteria = SearchCriteria().where("category_id", category_id).paginate(page_size, current_page)
    try:
        page = await fetch_page(_get_client(), "/products", criteria)
    except MagentoError as exc:
        return _error("get_products_in_category", "fetching products in category", exc)
    return _log_response("get_products_in_category", format_search_results(page))


@mcp.tool()
async def get_product_stock(sku: str) -> dict:
    """Get the stock item (qty, is_in_stock, thresholds) for a SKU."""
    _log_request("get_product_stock", sku=sku)
    try:
        stock = await _get_client().get(f"/stockItems/{_path(sku)}")
    except MagentoError as exc:
        return _error("get_product_stock", "fetching stock information", exc)
    return _log_response("get_product_stock", stock)


@mcp.tool()
async def update_product_stock(sku: str, qty: float, is_in_stock: Optional[bool] = None) -> dict:
    """Set the stock quantity of a product.

    Args:
        sku: The SKU of the product.
        qty: New quantity on hand.
        is_in_stock: Stock flag; defaults to qty > 0 when omitted.
    """
    _log_request("update_product_stock", sku=sku, qty=qty, is_in_stock=is_in_stock)
    body = {"stockItem": {"qty": qty, "is_in_stock": qty > 0 if is_in_stock is None else is_in_stock}}
    try:
        result = await _get_client().put(f"/products/{_path(sku)}/stockItems/1", body)
    except MagentoError as exc:
        return _error("update_product_stock", "updating stock", exc)
    return _log_response("update_product_stock", {"sku": sku, "updated": True, "stock_item_id": result})


# =============================================================================
# CUSTOMERS
# =============================================================================
@mcp.tool()
async def get_customer_by_id(customer_id: int) -> dict:
    """Get detailed information about a customer by their ID."""
    _log_request("get_customer_by_id", customer_id=customer_id)
    try:
        customer = await _get_client().get(f"/customers/{customer_id}")
    except MagentoError as exc:
        return _error("get_customer_by_id", "fetching customer", exc)
    return _log_response("get_customer_by_id", customer)


@mcp.tool()
async def search_customers(
    email: Optional[str] = None,
    firstname: Optional[str] = None,
    lastname: Optional[str] = None,
    group_id: Optional[int] = None,
    website_id: Optional[int] = None,
    created_at_from: Optional[str] = None,
    created_at_to: Optional[str] = None,
    page_size: int = 20,
    current_page: int = 1,
) -> dict:
    """Search customers.  Every filter given must match (AND).

    Args:
        email: Partial match on email.
        firstname: Partial match on first name.
        lastname: Partial match on last name.
        group_id: Exact customer group ID.
        website_id: Exact website ID.
        created_at_from: Created on or after this date (YYYY-MM-DD).
        created_at_to: Created on or before this date (YYYY-MM-DD).
        page_size: Results per page (default 20).
        current_page: Page number, starting at 1.
    """
    _log_request("search_customers", email=email, firstname=firstname, lastname=lastname,
                 group_id=group_id, website_id=website_id,
                 created_at_from=created_at_from, created_at_to=created_at_to,
                 page_size=page_size, current_page=current_page)

    criteria = SearchCriteria().paginate(page_size, current_page)
    for field_name, text in (("email", email), ("firstname", firstname), ("lastname", lastname)):
        if text:
            criteria.where(field_name, contains(text), "like")
    if group_id is not None:
        criteria.where("group_id", group_id)
    if website_id is not None:
        criteria.where("website_id", website_id)
    if created_at_from:
        criteria.where("created_at", f"{created_at_from} 00:00:00", "gteq")
    if created_at_to:
        criteria.where("created_at", f"{created_at_to} 23:59:59", "lteq")

    try:
        page = await fetch_page(_get_client(), "/customers/search", criteria)
    except MagentoError as exc:
        return _error("search_customers", "searching customers", exc)
    return _log_response("search_customers", {
        "total_count": page.total_count,
        "items": [format_customer(c) for c in page.items],
    })


# =============================================================================
# ORDERS
# =============================================================================
@mcp.tool()
async def get_order_by_id(order_id: int) -> dict:
    """Get detailed information about an order by its entity ID."""
    _log_request("get_order_by_id", order_id=order_id)
    try:
        order = await _get_client().get(f"/orders/{order_id}")
    except MagentoError as exc:
        return _error("get_order_by_id", "fetching order", exc)
    return _log_response("get_order_by_id", order)


@mcp.tool()
async def get_order_by_increment_id(increment_id: str) -> dict:
    """Get an order by its increment ID (the customer-facing order number)."""
    _log_request("get_order_by_increment_id", increment_id=increment_id)
    criteria = SearchCriteria().where("increment_id", increment_id).paginate(1, 1)
    try:
        page = await fetch_page(_get_client(), "/orders", criteria)
    except MagentoError as exc:
        return _error("get_order_by_increment_id", "fetching order", exc)
    if not page.items:
        _log_status("No matching order")
        return _log_response("get_order_by_increment_id",
                             {"error": f"No order found with increment ID: {increment_id}"})
    return _log_response("get_order_by_increment_id", page.items[0])


@mcp.tool()
async def search_orders(
    status: Optional[str] = None,
    customer_email: Optional[str] = None,
    customer_id: Optional[int] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    grand_total_min: Optional[float] = None,
    grand_total_max: Optional[float] = None,
    page_size: int = 20,
    current_page: int = 1,
    sort_field: str = "created_at",
    sort_direction: str = "DESC",
) -> dict:
    """Search orders.  Every filter given must match (AND).

    Args:
        status: Order status (pending, processing, complete, canceled, ...).
        customer_email: Exact customer email.
        customer_id: Exact customer ID.
        date_from: Created on or after this date (YYYY-MM-DD).
        date_to: Created on or before this date (YYYY-MM-DD).
        grand_total_min: Minimum grand total.
        grand_total_max: Maximum grand total.
        page_size: Results per page (default 20).
        current_page: Page number, starting at 1.
        sort_field: Field to sort by (default created_at).
        sort_direction: ASC or DESC (default DESC).

    Returns:
        total_count and a summary per order (ids, status, customer, totals,
        timestamps).
    """
    _log_request("search_orders", status=status, customer_email=customer_email, customer_id=customer_id,
                 date_from=date_from, date_to=date_to,
                 grand_total_min=grand_total_min, grand_total_max=grand_total_max,
                 page_size=page_size, current_page=current_page,
                 sort_field=sort_field, sort_direction=sort_direction)

    criteria = SearchCriteria().paginate(page_size, current_page).sort_by(sort_field, sort_direction)
    if status:
        criteria.where("status", status)
    if customer_email:
        criteria.where("customer_email", customer_email)
    if customer_id is not None:
        criteria.where("customer_id", customer_id)
    if date_from:
        criteria.where("created_at", f"{date_from} 00:00:00", "gteq")
    if date_to:
        criteria.where("created_at", f"{date_to} 23:59:59", "lteq")
    if grand_total_min is not None:
        criteria.where("grand_total", grand_total_min, "gteq")
    if grand_total_max is not None:
        criteria.where("grand_total", grand_total_max, "lteq")

    try:
        page = await fetch_page(_get_client(), "/orders", criteria)
    except MagentoError as exc:
        return _error("search_orders", "searching orders", exc)
    return _log_response("search_orders", {
        "total_count": page.total_count,
        "items": [format_order_summary(o) for o in page.items],
    })


@mcp.tool()
async def get_order_items(order_id: int) -> dict:
    """Get the line items of an order (sku, quantities, prices, tax)."""
    _log_request("get_order_items", order_id=order_id)
    try:
        order = await _get_client().get(f"/orders/{order_id}")
    except MagentoError as exc:
        return _error("get_order_items", "fetching order items", exc)
    items = [format_order_item(item) for item in (order or {}).get("items") or []]
    return _log_response("get_order_items", {"order_id": order_id, "items": items})


@mcp.tool()
async def get_order_comments(order_id: int) -> dict:
    """Get the comment / status history of an order."""
    _log_request("get_order_comments", order_id=order_id)
    try:
        order = await _get_client().get(f"/orders/{order_id}")
    except MagentoError as exc:
        return _error("get_order_comments", "fetching order comments", exc)
    return _log_response("get_order_comments", {
        "order_id": order_id,
        "status_histories": (order or {}).get("status_histories") or [],
    })


@mcp.tool()
async def add_order_comment(
    order_id: int,
    comment: str,
    status: Optional[str] = None,
    is_customer_notified: bool = False,
    is_visible_on_front: bool = False,
) -> dict:
    """Add a comment to an order's history, optionally changing its status.

    Args:
        order_id: The entity ID of the order.
        comment: The comment text.
        status: New order status, if the comment also changes it.
        is_customer_notified: Email the customer about the comment.
        is_visible_on_front: Show the comment in the customer account.
    """
    _log_request("add_order_comment", order_id=order_id, comment=comment, status=status,
                 is_customer_notified=is_customer_notified, is_visible_on_front=is_visible_on_front)
    history = {
        "comment": comment,
        "is_customer_notified": int(is_customer_notified),
        "is_visible_on_front": int(is_visible_on_front),
        "parent_id": order_id,
    }
    if status:
        history["status"] = status
    try:
        result = await _get_client().post(f"/orders/{order_id}/comments", {"statusHistory": history})
    except MagentoError as exc:
        return _error("add_order_comment", "adding order comment", exc)
    return _log_response("add_order_comment", {"order_id": order_id, "added": bool(result)})


@mcp.tool()
async def cancel_order(order_id: int) -> dict:
    """Cancel an order by its entity ID."""
    _log_request("cancel_order", order_id=order_id)
    try:
        result = await _get_client().post(f"/orders/{order_id}/cancel")
    except MagentoError as exc:
        return _error("cancel_order", "canceling order", exc)
    return _log_response("cancel_order", {"order_id": order_id, "canceled": bool(result)})


# =============================================================================
# CARTS
# =============================================================================
@mcp.tool()
async def get_abandoned_carts(days_old: int = 7, page_size: int = 50, current_page: int = 1) -> dict:
    """Get active, non-empty carts not updated for at least ``days_old`` days.

    Args:
        days_old: Minimum days since the cart was last updated (default 7).
        page_size: Results per page (default 50).
        current_page: Page number, starting at 1.
    """
    _log_request("get_abandoned_carts", days_old=days_old, page_size=page_size, current_page=current_page)
    cutoff = format_for_magento(datetime.now() - timedelta(days=days_old))
    criteria = (
        SearchCriteria()
        .where("is_active", 1)
        .where("updated_at", cutoff, "lteq")
        .where("items_count", 0, "gt")
        .paginate(page_size, current_page)
        .sort_by("updated_at", "DESC")
    )
    try:
        page = await fetch_page(_get_client(), "/carts/search", criteria)
    except MagentoError as exc:
        return _error("get_abandoned_carts", "fetching abandoned carts", exc)
    return _log_response("get_abandoned_carts", {
        "total_count": page.total_count,
        "criteria": {"days_abandoned": days_old, "cutoff_date": cutoff},
        "items": [format_cart(cart) for cart in page.items],
    })


# =============================================================================
# ANALYTICS
# =============================================================================
# These tools fetch EVERY matching order through core.pagination and then
# aggregate locally.  The date_range argument accepts the phrases listed in
# core.dates.parse_date_expression.
# =============================================================================
@mcp.tool()
async def get_revenue(date_range: str, status: Optional[str] = None, include_tax: bool = True) -> dict:
    """Get total revenue for a date range.

    Args:
        date_range: e.g. 'today', 'last month', 'YTD', '2024-01-01 to 2024-01-31'.
        status: Only count orders in this status (e.g. 'complete').
        include_tax: Include tax in the revenue figure (default true).

    Returns:
        query (the resolved period) and result (revenue, order_count,
        average_order_value, tax_amount, currency).
    """
    _log_request("get_revenue", date_range=date_range, status=status, include_tax=include_tax)
    try:
        period = parse_date_expression(date_range)
        orders = await _fetch_all("/orders", _orders_in_range(period, status))
    except MagentoError as exc:
        return _error("get_revenue", "fetching revenue", exc)
    _log_status(f"Aggregating {len(orders)} orders")

    result = summarize_revenue(orders, include_tax)
    result["currency"] = orders[0].get("base_currency_code") if orders else None
    return _log_response("get_revenue", {
        "query": _report_query(period, status=status or "All", include_tax=include_tax),
        "result": result,
    })


@mcp.tool()
async def get_order_count(date_range: str, status: Optional[str] = None) -> dict:
    """Get the number of orders placed in a date range.

    Only one order is requested; the count comes from total_count.
    """
    _log_request("get_order_count", date_range=date_range, status=status)
    try:
        period = parse_date_expression(date_range)
        criteria = _orders_in_range(period, status).paginate(1, 1)
        page = await fetch_page(_get_client(), "/orders", criteria)
    except MagentoError as exc:
        return _error("get_order_count", "fetching order count", exc)
    return _log_response("get_order_count", {
        "query": _report_query(period, status=status or "All"),
        "result": {"order_count": page.total_count},
    })


@mcp.tool()
async def get_product_sales(
    date_range: str,
    status: Optional[str] = None,
    country: Optional[str] = None,
) -> dict:
    """Get quantities sold and the top 10 products for a date range.

    Args:
        date_range: e.g. 'this week', 'last month', '2024-01-01 to 2024-01-31'.
        status: Only count orders in this status.
        country: Country code or name; matches billing or shipping address.
    """
    _log_request("get_product_sales", date_range=date_range, status=status, country=country)
    try:
        period = parse_date_expression(date_range)
        orders = await _fetch_all("/orders", _orders_in_range(period, status))
    except MagentoError as exc:
        return _error("get_product_sales", "fetching product sales", exc)

    if country:
        orders = filter_orders_by_country(orders, normalize_country(country))
    _log_status(f"Aggregating {len(orders)} orders")

    return _log_response("get_product_sales", {
        "query": _report_query(period, status=status or "All", country=country or "All"),
        "result": summarize_product_sales(orders),
    })


@mcp.tool()
async def get_revenue_by_country(
    date_range: str,
    country: str,
    status: Optional[str] = None,
    include_tax: bool = True,
) -> dict:
    """Get revenue for orders billed or shipped to one country.

    Args:
        date_range: e.g. 'YTD', 'last year', '2024-01-01 to 2024-01-31'.
        country: Country code ('US', 'NL') or name ('The Netherlands').
        status: Only count orders in this status.
        include_tax: Include tax in the revenue figure (default true).
    """
    _log_request("get_revenue_by_country", date_range=date_range, country=country,
                 status=status, include_tax=include_tax)
    codes = normalize_country(country)
    try:
        period = parse_date_expression(date_range)
        orders = await _fetch_all("/orders", _orders_in_range(period, status))
    except MagentoError as exc:
        return _error("get_revenue_by_country", "fetching revenue by country", exc)

    orders = filter_orders_by_country(orders, codes)
    _log_status(f"{len(orders)} orders matched {', '.join(codes)}")

    result = summarize_revenue(orders, include_tax)
    result["currency"] = orders[0].get("base_currency_code") if orders else None
    return _log_response("get_revenue_by_country", {
        "query": _report_query(
            period,
            country=country,
            normalized_country=", ".join(codes),
            status=status or "All",
            include_tax=include_tax,
        ),
        "result": result,
    })


@mcp.tool()
async def get_customer_ordered_products_by_email(email: str) -> dict:
    """Get every order of a customer, with product details for each line.

    Args:
        email: The customer's email address.
    """
    _log_request("get_customer_ordered_products_by_email", email=email)
    client = _get_client()
    try:
        customers = await fetch_page(client, "/customers/search", SearchCriteria().where("email", email).paginate(1, 1))
        if not customers.items:
            return _log_response("get_customer_ordered_products_by_email",
                                 {"error": f"No customer found with email: {email}"})
        orders = await _fetch_all("/orders", SearchCriteria().where("customer_email", email))
    except MagentoError as exc:
        return _error("get_customer_ordered_products_by_email", "fetching customer ordered products", exc)

    if not orders:
        return _log_response("get_customer_ordered_products_by_email",
                             {"error": f"No orders found for customer with email: {email}"})

    products: dict[str, dict] = {}
    for sku in collect_ordered_skus(orders):
        try:
            products[sku] = format_product(await client.get(f"/products/{_path(sku)}")) or {}
        except MagentoError as exc:
            _log_status(f"Product {sku} lookup failed: {exc}")
            products[sku] = {"sku": sku, "error": str(exc)}

    customer = customers.items[0]
    return _log_response("get_customer_ordered_products_by_email", {
        "customer": {
            "id": customer.get("id"),
            "email": customer.get("email"),
            "firstname": customer.get("firstname"),
            "lastname": customer.get("lastname"),
        },
        "orders": [
            {
                "order_id": order.get("entity_id"),
                "increment_id": order.get("increment_id"),
                "created_at": order.get("created_at"),
                "status": order.get("status"),
                "total": order.get("grand_total"),
                "items": [
                    {
                        "sku": item.get("sku"),
                        "name": item.get("name"),
                        "price": item.get("price"),
                        "qty_ordered": item.get("qty_ordered"),
                        "product_details": products.get(item.get("sku"), {}),
                    }
                    for item in order.get("items") or []
                ],
            }
            for order in orders
        ],
    })
