"""
Sales Service - Transaction engine

WHY: A sale request is validated, priced, committed and announced in one
synchronous step. There is no draft state: either the sale record and the
stock movement both exist afterwards, or neither does.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from ..errors import InsufficientStockError, NotFoundError, PosError
from ..identifiers import new_id
from ..models import Product, Sale
from ..models.notifications import TYPE_ERROR, TYPE_SUCCESS, TYPE_WARNING
from ..time_utils import utcnow
from ..validation import require_positive_int
from .alert_service import AlertDispatcher
from .catalog_service import CatalogStore

logger = logging.getLogger(__name__)


def price_sale(product: Product, quantity: int) -> tuple[float, float, float]:
    """(unit_price, total, profit) for selling `quantity` units at current prices."""
    unit_price = product.sale_price
    total = unit_price * quantity
    profit = product.unit_margin * quantity
    return unit_price, total, profit


class TransactionEngine:
    def __init__(
        self,
        catalog: CatalogStore,
        alerts: AlertDispatcher,
        sales: Iterable[Sale] = (),
        *,
        low_stock_threshold: int = 10,
        clock: Callable = utcnow,
        id_factory: Callable[[], str] = new_id,
    ):
        self.catalog = catalog
        self.alerts = alerts
        self._sales: list[Sale] = list(sales)
        self.low_stock_threshold = low_stock_threshold
        self._clock = clock
        self._new_id = id_factory

    @property
    def sales(self) -> list[Sale]:
        """Committed sales, most recent first."""
        return list(self._sales)

    def record_sale(self, product_id: str, quantity) -> Sale:
        """
        Validate and commit a sale.

        Raises NotFoundError, ValidationError or InsufficientStockError; each
        rejection has already been announced as an error alert and nothing
        was mutated.
        """
        try:
            product, quantity = self._authorize(product_id, quantity)
            updated = self.catalog.adjust_stock_for_sale(product.id, quantity)
        except PosError as exc:
            logger.warning("Sale rejected for product %s: %s", product_id, exc.message)
            self.alerts.emit(exc.message, TYPE_ERROR)
            raise

        unit_price, total, profit = price_sale(product, quantity)
        sale = Sale(
            id=self._new_id(),
            date=self._clock(),
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=unit_price,
            total=total,
            profit=profit,
        )

        self._sales.insert(0, sale)
        logger.info("Sale %s committed: %sx %s (stock now %s)", sale.id, quantity, product.id, updated.stock)

        self.alerts.emit(f'Sale of {quantity}x "{product.name}" recorded.', TYPE_SUCCESS)
        self._announce_stock_level(updated)
        return sale

    def _authorize(self, product_id: str, quantity) -> tuple[Product, int]:
        product = self.catalog.find_product(product_id)
        if product is None:
            raise NotFoundError(
                "Product not found. Sale cancelled.",
                details={"product_id": product_id},
            )
        quantity = require_positive_int(quantity, "quantity")
        if quantity > product.stock:
            raise InsufficientStockError(
                f'Insufficient stock for "{product.name}". Sale cancelled.',
                details={
                    "product_id": product.id,
                    "requested_quantity": quantity,
                    "on_hand": product.stock,
                },
            )
        return product, quantity

    def _announce_stock_level(self, product: Product) -> None:
        if product.stock == 0:
            self.alerts.emit(f'"{product.name}" is out of stock.', TYPE_ERROR)
        elif product.stock <= self.low_stock_threshold:
            self.alerts.emit(f'Low stock for "{product.name}" ({product.stock} left).', TYPE_WARNING)
