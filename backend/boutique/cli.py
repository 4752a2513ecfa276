# backend/boutique/cli.py
#
# Usage:
# - python -m flask --app boutique boutique init-db
#   Create the kv_records table.
# - python -m flask --app boutique boutique seed
#   Write the starter catalog if no catalog has been saved yet.
# - python -m flask --app boutique boutique sell PRODUCT_ID QUANTITY
#   Record a sale from the command line.
# - python -m flask --app boutique boutique dashboard
#   Print revenue, profit, stock alerts and top sellers.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .services import get_pos
from .services.storage_service import KEY_CATEGORIES, KEY_PRODUCTS


@click.group('boutique')
def boutique_group():
    """Point-of-sale bootstrap and operator commands."""


@boutique_group.command('init-db')
@with_appcontext
def init_db():
    """Create database tables."""
    from . import models  # noqa: F401
    db.create_all()
    click.echo("PASS Database tables created")


@boutique_group.command('seed')
@with_appcontext
def seed_catalog():
    """Persist the starter catalog unless a catalog is already saved."""
    pos = get_pos()
    if pos.store.load(KEY_CATEGORIES, None) is not None or pos.store.load(KEY_PRODUCTS, None) is not None:
        click.echo("SKIP Catalog already saved; nothing to seed")
        return

    result = pos.save_all()
    if not result.ok:
        current_app.logger.error("Seeding failed: %s", result.error.message)
        raise click.ClickException(result.error.message)
    click.echo(
        f"PASS Seeded {len(pos.list_categories())} categories and {len(pos.list_products())} products"
    )


@boutique_group.command('sell')
@click.argument('product_id')
@click.argument('quantity', type=int)
@with_appcontext
def sell(product_id, quantity):
    """Record a sale of QUANTITY units of PRODUCT_ID."""
    result = get_pos().record_sale(product_id, quantity)
    if not result.ok:
        raise click.ClickException(f"{result.error.code}: {result.error.message}")
    sale = result.value
    click.echo(f"PASS Sale {sale.id}: {sale.quantity}x {sale.product_name} total={sale.total} profit={sale.profit}")


@boutique_group.command('dashboard')
@with_appcontext
def dashboard():
    """Print the dashboard summary."""
    pos = get_pos()
    totals = pos.totals()
    click.echo(f"Revenue: {totals['totalRevenue']}")
    click.echo(f"Profit: {totals['totalProfit']}")
    click.echo(f"Sales: {totals['totalSalesCount']}")
    click.echo(f"Low stock: {totals['lowStockCount']}")

    buckets = pos.stock_buckets()
    for row in buckets["lowStock"]:
        click.echo(f"  LOW  {row['name']} ({row['stock']})")
    for row in buckets["outOfStock"]:
        click.echo(f"  OUT  {row['name']}")

    click.echo("\nTop sellers:")
    for row in pos.top_sellers():
        click.echo(f"  {row['name']}: {row['totalSales']} sold, revenue={row['revenue']}, profit={row['profit']}")

    click.echo("\nLast days:")
    for point in pos.daily_revenue():
        click.echo(f"  {point['name']} {point['date']}: {point['revenue']}")


def register_commands(app):
    app.cli.add_command(boutique_group)
