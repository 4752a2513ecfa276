"""
Point-of-sale engine facade

One PointOfSale instance owns the catalog, the sale history, the alert log
and the settings. Callers hold a reference to it and go through its methods;
every mutation returns a CommandResult and is followed by a save of the
records it touched.

Load policy: a record that is missing, unreadable or malformed falls back to
its default (starter catalog, empty history, default settings) and the
problem is logged. Save policy: a failed save is returned to the caller as a
PersistenceError result; the in-memory change is kept.

Mutations run one at a time under the instance lock, so a shared instance
serves concurrent request threads without lost stock updates.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable

from ..errors import PersistenceError, PosError
from ..identifiers import new_id
from ..models import AppSettings, Category, Notification, Product, Sale
from ..models.notifications import TYPE_ERROR, TYPE_INFO, TYPE_SUCCESS
from ..starter_catalog import STARTER_CATEGORIES, STARTER_PRODUCTS
from ..time_utils import utcnow
from ..validation import (
    product_fields_from_payload,
    require_email_or_blank,
    require_non_negative_int,
)
from . import reporting_service
from .alert_service import AlertDispatcher
from .catalog_service import CatalogStore
from .results import CommandResult
from .sales_service import TransactionEngine
from .storage_service import (
    KEY_CATEGORIES,
    KEY_NOTIFICATIONS,
    KEY_PRODUCTS,
    KEY_SALES,
    KEY_SETTINGS,
    KeyValueStore,
)

logger = logging.getLogger(__name__)


def _load_list(store: KeyValueStore, key: str, factory: Callable[[dict], Any], default: list[dict]) -> list:
    raw = store.load(key, None)
    if raw is None:
        return [factory(item) for item in default]
    if not isinstance(raw, list):
        logger.warning("Record %s is not a list; falling back to defaults", key)
        return [factory(item) for item in default]
    try:
        return [factory(item) for item in raw]
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.warning("Record %s holds malformed entries; falling back to defaults", key, exc_info=True)
        return [factory(item) for item in default]


def _load_settings(store: KeyValueStore, default_email: str) -> AppSettings:
    raw = store.load(KEY_SETTINGS, None)
    if raw is None:
        return AppSettings(notification_email=default_email)
    try:
        return AppSettings.from_dict(raw)
    except (TypeError, ValueError, AttributeError):
        logger.warning("Record %s is malformed; falling back to defaults", KEY_SETTINGS)
        return AppSettings(notification_email=default_email)


class PointOfSale:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        low_stock_threshold: int = 10,
        default_notification_email: str = "",
        seed_on_empty: bool = True,
        top_sellers_limit: int = 5,
        revenue_window_days: int = 7,
        locale: str = "fr",
        tz_name: str = "UTC",
        stock_bar_max: int = 100,
        clock: Callable = utcnow,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store
        self.low_stock_threshold = low_stock_threshold
        self.top_sellers_limit = top_sellers_limit
        self.revenue_window_days = revenue_window_days
        self.locale = locale
        self.tz_name = tz_name
        self.stock_bar_max = stock_bar_max
        self._clock = clock
        self._lock = Lock()

        self.settings = _load_settings(store, default_notification_email)
        self.alerts = AlertDispatcher(
            _load_list(store, KEY_NOTIFICATIONS, Notification.from_dict, []),
            settings_provider=lambda: self.settings,
            clock=clock,
            id_factory=id_factory,
        )
        self.catalog = CatalogStore(
            _load_list(store, KEY_CATEGORIES, Category.from_dict, STARTER_CATEGORIES if seed_on_empty else []),
            _load_list(store, KEY_PRODUCTS, Product.from_dict, STARTER_PRODUCTS if seed_on_empty else []),
            id_factory=id_factory,
        )
        self.engine = TransactionEngine(
            self.catalog,
            self.alerts,
            _load_list(store, KEY_SALES, Sale.from_dict, []),
            low_stock_threshold=low_stock_threshold,
            clock=clock,
            id_factory=id_factory,
        )

    @classmethod
    def from_config(cls, config, store: KeyValueStore, **overrides) -> "PointOfSale":
        options = dict(
            low_stock_threshold=config.get("LOW_STOCK_THRESHOLD", 10),
            default_notification_email=config.get("DEFAULT_NOTIFICATION_EMAIL", ""),
            seed_on_empty=config.get("SEED_CATALOG_ON_EMPTY", True),
            top_sellers_limit=config.get("TOP_SELLERS_LIMIT", 5),
            revenue_window_days=config.get("REVENUE_WINDOW_DAYS", 7),
            locale=config.get("DASHBOARD_LOCALE", "fr"),
            tz_name=config.get("STORE_TIMEZONE", "UTC"),
            stock_bar_max=config.get("STOCK_BAR_MAX", 100),
        )
        options.update(overrides)
        return cls(store, **options)

    # --- Persistence ---

    def _snapshot(self, key: str):
        if key == KEY_CATEGORIES:
            return [c.to_dict() for c in self.catalog.categories]
        if key == KEY_PRODUCTS:
            return [p.to_dict() for p in self.catalog.products]
        if key == KEY_SALES:
            return [s.to_dict() for s in self.engine.sales]
        if key == KEY_NOTIFICATIONS:
            return [n.to_dict() for n in self.alerts.notifications]
        if key == KEY_SETTINGS:
            return self.settings.to_dict()
        raise KeyError(key)

    def _persist(self, *keys: str) -> PersistenceError | None:
        for key in keys:
            try:
                self.store.save(key, self._snapshot(key))
            except PersistenceError as exc:
                logger.error("Failed to persist %s: %s", key, exc.message)
                self.alerts.emit(f"Changes could not be saved ({key}).", TYPE_ERROR)
                return exc
        return None

    def save_all(self) -> CommandResult:
        with self._lock:
            error = self._persist(KEY_CATEGORIES, KEY_PRODUCTS, KEY_SALES, KEY_SETTINGS, KEY_NOTIFICATIONS)
        return CommandResult.failure(error) if error else CommandResult.success()

    def _command(self, op: Callable[[], Any], *keys: str, alerted: bool = False) -> CommandResult:
        """
        Run one mutation. Rejections become failed results and, unless the
        operation already announced them, an error alert.
        """
        with self._lock:
            try:
                value = op()
            except PosError as exc:
                if not alerted:
                    logger.warning("Command rejected: %s", exc.message)
                    self.alerts.emit(exc.message, TYPE_ERROR)
                # The rejection is what the caller sees; a failed save of the
                # alert log is only logged.
                save_error = self._persist(KEY_NOTIFICATIONS)
                if save_error is not None:
                    logger.warning("Alert log not saved after rejected command: %s", save_error.message)
                return CommandResult.failure(exc)

            error = self._persist(*keys, KEY_NOTIFICATIONS)
            if error is not None:
                return CommandResult.failure(error)
            return CommandResult.success(value)

    # --- Categories ---

    def list_categories(self) -> list[Category]:
        return self.catalog.categories

    def add_category(self, name: str, icon: str = "") -> CommandResult:
        def _op():
            category = self.catalog.add_category(name, icon)
            self.alerts.emit(f'Category "{category.name}" added.', TYPE_SUCCESS)
            return category
        return self._command(_op, KEY_CATEGORIES)

    def delete_category(self, category_id: str) -> CommandResult:
        def _op():
            category = self.catalog.delete_category(category_id)
            self.alerts.emit(f'Category "{category.name}" deleted.', TYPE_INFO)
            return category
        return self._command(_op, KEY_CATEGORIES)

    # --- Products ---

    def list_products(self, search: str | None = None, category_id: str | None = None) -> list[Product]:
        return self.catalog.search_products(search, category_id)

    def list_sellable_products(self) -> list[Product]:
        return self.catalog.sellable_products()

    def get_product(self, product_id: str) -> Product:
        return self.catalog.get_product(product_id)

    def add_product(
        self,
        *,
        name: str,
        category_id: str,
        stock: int,
        sale_price: float,
        purchase_price: float,
    ) -> CommandResult:
        def _op():
            product = self.catalog.add_product(
                name=name,
                category_id=category_id,
                stock=stock,
                sale_price=sale_price,
                purchase_price=purchase_price,
            )
            self.alerts.emit(f'Product "{product.name}" added.', TYPE_SUCCESS)
            return product
        return self._command(_op, KEY_PRODUCTS)

    def update_product(self, product: Product) -> CommandResult:
        def _op():
            updated = self.catalog.update_product(product)
            self.alerts.emit(f'Product "{updated.name}" updated.', TYPE_INFO)
            return updated
        return self._command(_op, KEY_PRODUCTS)

    def add_product_from_payload(self, payload: dict) -> CommandResult:
        """Create a product from a camelCase or snake_case request body."""
        def _op():
            fields = product_fields_from_payload(payload)
            product = self.catalog.add_product(**fields)
            self.alerts.emit(f'Product "{product.name}" added.', TYPE_SUCCESS)
            return product
        return self._command(_op, KEY_PRODUCTS)

    def update_product_from_payload(self, product_id: str, payload: dict) -> CommandResult:
        """
        Full replace from a request body. Every field is required except
        totalSales, which keeps the stored value when absent.
        """
        def _op():
            fields = product_fields_from_payload(payload)
            existing = self.catalog.get_product(product_id)
            total_sales = existing.total_sales
            if "totalSales" in payload:
                total_sales = require_non_negative_int(payload["totalSales"], "totalSales")
            updated = self.catalog.update_product(Product(id=product_id, total_sales=total_sales, **fields))
            self.alerts.emit(f'Product "{updated.name}" updated.', TYPE_INFO)
            return updated
        return self._command(_op, KEY_PRODUCTS)

    def delete_product(self, product_id: str) -> CommandResult:
        def _op():
            product = self.catalog.delete_product(product_id)
            self.alerts.emit(f'Product "{product.name}" deleted.', TYPE_INFO)
            return product
        return self._command(_op, KEY_PRODUCTS)

    def stock_level(self, product: Product) -> dict:
        return reporting_service.stock_level(
            product,
            low_stock_threshold=self.low_stock_threshold,
            bar_max=self.stock_bar_max,
        )

    # --- Sales ---

    def record_sale(self, product_id: str, quantity) -> CommandResult:
        return self._command(
            lambda: self.engine.record_sale(product_id, quantity),
            KEY_SALES,
            KEY_PRODUCTS,
            alerted=True,
        )

    def list_sales(self, limit: int | None = None) -> list[Sale]:
        sales = self.engine.sales
        if limit is not None:
            sales = sales[:max(limit, 0)]
        return sales

    # --- Notifications & settings ---

    def notify(self, message: str, type: str) -> CommandResult:
        return self._command(lambda: self.alerts.emit(message, type))

    def list_notifications(self, type: str | None = None, limit: int | None = None) -> list[Notification]:
        return self.alerts.query(type=type, limit=limit)

    def get_settings(self) -> AppSettings:
        return self.settings

    def update_settings(self, notification_email: str) -> CommandResult:
        def _op():
            self.settings = AppSettings(notification_email=require_email_or_blank(notification_email))
            self.alerts.emit("Settings updated.", TYPE_SUCCESS)
            return self.settings
        return self._command(_op, KEY_SETTINGS)

    # --- Dashboard ---

    def totals(self) -> dict:
        return reporting_service.sales_totals(
            self.engine.sales,
            self.catalog.products,
            low_stock_threshold=self.low_stock_threshold,
        )

    def stock_buckets(self) -> dict:
        products = self.catalog.products
        return {
            "lowStock": [
                p.to_dict()
                for p in reporting_service.low_stock_products(products, low_stock_threshold=self.low_stock_threshold)
            ],
            "outOfStock": [p.to_dict() for p in reporting_service.out_of_stock_products(products)],
        }

    def top_sellers(self) -> list[dict]:
        return reporting_service.top_sellers(self.catalog.products, limit=self.top_sellers_limit)

    def daily_revenue(self) -> list[dict]:
        return reporting_service.daily_revenue(
            self.engine.sales,
            now=self._clock(),
            days=self.revenue_window_days,
            locale=self.locale,
            tz_name=self.tz_name,
        )

    def dashboard(self) -> dict:
        return {
            "totals": self.totals(),
            "stock": self.stock_buckets(),
            "topSellers": self.top_sellers(),
            "revenue": self.daily_revenue(),
        }
