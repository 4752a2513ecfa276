# Overview: Read-only dashboard aggregates over the catalog and sale history.

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

from ..models import Product, Sale
from ..time_utils import local_date

# Abbreviated weekday labels, Monday first (date.weekday() order)
WEEKDAY_LABELS = {
    "fr": ["Lun.", "Mar.", "Mer.", "Jeu.", "Ven.", "Sam.", "Dim."],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
}


class ReportError(Exception):
    """Raised when report generation fails."""
    pass


def is_low_stock(product: Product, threshold: int) -> bool:
    return 0 < product.stock <= threshold


def sales_totals(sales: Iterable[Sale], products: Iterable[Product], *, low_stock_threshold: int) -> dict:
    total_revenue = 0
    total_profit = 0
    count = 0
    for sale in sales:
        total_revenue += sale.total
        total_profit += sale.profit
        count += 1
    return {
        "totalRevenue": total_revenue,
        "totalProfit": total_profit,
        "totalSalesCount": count,
        "lowStockCount": sum(1 for p in products if is_low_stock(p, low_stock_threshold)),
    }


def low_stock_products(products: Iterable[Product], *, low_stock_threshold: int) -> list[Product]:
    return sorted(
        (p for p in products if is_low_stock(p, low_stock_threshold)),
        key=lambda p: p.stock,
    )


def out_of_stock_products(products: Iterable[Product]) -> list[Product]:
    return [p for p in products if p.stock == 0]


def stock_level(product: Product, *, low_stock_threshold: int, bar_max: int = 100) -> dict:
    if product.stock == 0:
        status = "out"
    elif product.stock <= low_stock_threshold:
        status = "low"
    else:
        status = "ok"
    percentage = min(product.stock * 100 / bar_max, 100) if bar_max > 0 else 100
    return {"status": status, "percentage": percentage}


def top_sellers(products: Iterable[Product], *, limit: int = 5) -> list[dict]:
    """
    Best sellers by units sold. Revenue and profit use the product's current
    prices, not the prices recorded on each sale.
    """
    ranked = sorted(products, key=lambda p: p.total_sales, reverse=True)[:limit]
    rows = []
    for p in ranked:
        row = p.to_dict()
        row["revenue"] = p.sale_price * p.total_sales
        row["profit"] = p.unit_margin * p.total_sales
        rows.append(row)
    return rows


def _format_day(day: date, locale: str) -> str:
    if locale == "fr":
        return day.strftime("%d/%m/%Y")
    return day.isoformat()


def daily_revenue(
    sales: Iterable[Sale],
    *,
    now: datetime,
    days: int = 7,
    locale: str = "fr",
    tz_name: str = "UTC",
) -> list[dict]:
    """
    Revenue per calendar day over a window of `days` ending today (inclusive),
    oldest first. Days without sales report 0.
    """
    if days < 1:
        raise ReportError("days must be >= 1")
    labels = WEEKDAY_LABELS.get(locale)
    if labels is None:
        raise ReportError(f"Unsupported locale: {locale}")

    today = local_date(now, tz_name)
    buckets = {today - timedelta(days=i): 0 for i in range(days)}

    for sale in sales:
        day = local_date(sale.date, tz_name)
        if day in buckets:
            buckets[day] += sale.total

    return [
        {
            "name": labels[day.weekday()],
            "date": _format_day(day, locale),
            "day": day.isoformat(),
            "revenue": buckets[day],
        }
        for day in sorted(buckets)
    ]
