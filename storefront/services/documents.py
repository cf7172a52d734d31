"""HTML receipts and business reports"""

import os
from datetime import date, datetime
from typing import Any, Optional

from fastapi.templating import Jinja2Templates

from ..core.config import settings

templates_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
templates = Jinja2Templates(directory=templates_dir)

RECENT_TRANSACTIONS_LIMIT = 10


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def format_money(value: Any) -> str:
    amount = _number(value)
    if amount.is_integer():
        return f"{settings.currency} {int(amount):,}"
    return f"{settings.currency} {amount:,.2f}"


def format_date(value: Any) -> str:
    """Render an ISO timestamp as e.g. 'March 4, 2025'; unparseable values pass through"""
    if isinstance(value, (date, datetime)):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    else:
        return ""
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


templates.env.filters["money"] = format_money
templates.env.filters["longdate"] = format_date


def receipt_filename(order_id: Any) -> str:
    return f"receipt-order-{order_id}.html"


def report_filename(today: Optional[date] = None) -> str:
    return f"atlantic-leather-report-{(today or date.today()).isoformat()}.html"


def render_receipt(order: dict, today: Optional[date] = None) -> str:
    """
    Render the customer receipt for an order.

    Args:
        order: Order payload as returned by the backend order API
        today: Issue date printed on the receipt

    Returns:
        HTML document
    """
    items = []
    for item in order.get("items") or []:
        price = _number(item.get("price"))
        quantity = int(_number(item.get("quantity")))
        items.append({**item, "price": price, "quantity": quantity, "line_total": price * quantity})

    return templates.get_template("receipt.html").render(
        order=order,
        items=items,
        issued_on=today or date.today(),
    )


def render_report(report_data: dict, date_range: Any, today: Optional[date] = None) -> str:
    """Render the business summary report over the last ``date_range`` days"""
    report = report_data or {}
    transactions = (report.get("recentTransactions") or [])[:RECENT_TRANSACTIONS_LIMIT]

    return templates.get_template("report.html").render(
        report=report,
        transactions=transactions,
        date_range=date_range,
        issued_on=today or date.today(),
    )
