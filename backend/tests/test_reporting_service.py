from datetime import datetime

import pytest

from boutique.models import Product, Sale
from boutique.services import reporting_service
from boutique.services.reporting_service import ReportError


def product(pid, stock, total_sales=0, sale_price=100, purchase_price=60):
    return Product(
        id=pid, name=pid.title(), category_id="c", stock=stock,
        sale_price=sale_price, purchase_price=purchase_price, total_sales=total_sales,
    )


def sale(sid, when, total, profit=0, quantity=1):
    return Sale(
        id=sid, date=when, product_id="p", product_name="P", quantity=quantity,
        unit_price=total / quantity, total=total, profit=profit,
    )


def test_sales_totals():
    sales = [
        sale("s1", datetime(2026, 10, 1), 200, 80),
        sale("s2", datetime(2026, 10, 2), 50, 10),
    ]
    products = [product("a", 0), product("b", 5), product("c", 10), product("d", 11)]

    totals = reporting_service.sales_totals(sales, products, low_stock_threshold=10)

    assert totals == {
        "totalRevenue": 250,
        "totalProfit": 90,
        "totalSalesCount": 2,
        "lowStockCount": 2,
    }


def test_sales_totals_empty():
    totals = reporting_service.sales_totals([], [], low_stock_threshold=10)
    assert totals["totalRevenue"] == 0
    assert totals["totalSalesCount"] == 0


def test_stock_buckets():
    products = [product("a", 7), product("b", 0), product("c", 3), product("d", 40), product("e", 0), product("f", 10)]

    low = reporting_service.low_stock_products(products, low_stock_threshold=10)
    out = reporting_service.out_of_stock_products(products)

    assert [p.id for p in low] == ["c", "a", "f"]
    assert {p.id for p in out} == {"b", "e"}


def test_stock_level():
    assert reporting_service.stock_level(product("a", 0), low_stock_threshold=10) == {"status": "out", "percentage": 0}
    assert reporting_service.stock_level(product("a", 10), low_stock_threshold=10)["status"] == "low"
    level = reporting_service.stock_level(product("a", 50), low_stock_threshold=10)
    assert level == {"status": "ok", "percentage": 50}
    assert reporting_service.stock_level(product("a", 250), low_stock_threshold=10)["percentage"] == 100


def test_top_sellers_uses_current_prices():
    products = [
        product("a", 1, total_sales=3),
        product("b", 1, total_sales=9, sale_price=20, purchase_price=15),
        product("c", 1, total_sales=1),
        product("d", 1, total_sales=7),
        product("e", 1, total_sales=0),
        product("f", 1, total_sales=5),
    ]

    rows = reporting_service.top_sellers(products, limit=5)

    assert [r["id"] for r in rows] == ["b", "d", "f", "a", "c"]
    assert rows[0]["revenue"] == 180
    assert rows[0]["profit"] == 45
    assert rows[1]["revenue"] == 700
    assert rows[1]["profit"] == 280


def test_daily_revenue_window():
    now = datetime(2026, 10, 18, 20, 0)  # a Sunday
    sales = [
        sale("s1", datetime(2026, 10, 18, 8, 0), 100),
        sale("s2", datetime(2026, 10, 18, 19, 59), 50),
        sale("s3", datetime(2026, 10, 12, 0, 0), 30),   # first day of window
        sale("s4", datetime(2026, 10, 11, 23, 59), 999),  # just outside
        sale("s5", datetime(2026, 10, 15, 12, 0), 20),
    ]

    series = reporting_service.daily_revenue(sales, now=now, days=7, locale="fr")

    assert [p["day"] for p in series] == [
        "2026-10-12", "2026-10-13", "2026-10-14", "2026-10-15",
        "2026-10-16", "2026-10-17", "2026-10-18",
    ]
    assert [p["revenue"] for p in series] == [30, 0, 0, 20, 0, 0, 150]
    assert series[0]["name"] == "Lun."
    assert series[-1]["name"] == "Dim."
    assert series[-1]["date"] == "18/10/2026"


def test_daily_revenue_english_labels():
    series = reporting_service.daily_revenue([], now=datetime(2026, 10, 18, 12, 0), days=7, locale="en")
    assert [p["name"] for p in series] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert series[-1]["date"] == "2026-10-18"
    assert all(p["revenue"] == 0 for p in series)


def test_daily_revenue_uses_store_timezone():
    # 02:00 UTC on the 18th is still the 17th in Port-au-Prince
    now = datetime(2026, 10, 18, 2, 0)
    sales = [sale("s1", datetime(2026, 10, 18, 1, 0), 40)]

    series = reporting_service.daily_revenue(sales, now=now, days=7, tz_name="America/Port-au-Prince")

    assert series[-1]["day"] == "2026-10-17"
    assert series[-1]["revenue"] == 40


def test_daily_revenue_rejects_bad_arguments():
    with pytest.raises(ReportError):
        reporting_service.daily_revenue([], now=datetime(2026, 10, 18), days=0)
    with pytest.raises(ReportError):
        reporting_service.daily_revenue([], now=datetime(2026, 10, 18), locale="xx")
