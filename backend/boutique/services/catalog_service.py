# Overview: Catalog store for categories and products; enforces referential and quantity rules.

"""
Catalog Store

Owns the category and product lists. Category deletion is refused while any
product still points at the category. `adjust_stock_for_sale` is the only
path that moves `stock` and `total_sales` together; it is reserved for the
transaction engine.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable

from ..errors import (
    CategoryInUseError,
    InsufficientStockError,
    NotFoundError,
    UnknownCategoryError,
)
from ..identifiers import new_id
from ..models import Category, Product
from ..validation import require_name, require_non_negative_int, require_price

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(
        self,
        categories: Iterable[Category] = (),
        products: Iterable[Product] = (),
        *,
        id_factory: Callable[[], str] = new_id,
    ):
        self._categories: list[Category] = list(categories)
        self._products: list[Product] = list(products)
        self._new_id = id_factory

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    # --- Categories ---

    def find_category(self, category_id: str) -> Category | None:
        return next((c for c in self._categories if c.id == category_id), None)

    def get_category(self, category_id: str) -> Category:
        category = self.find_category(category_id)
        if category is None:
            raise NotFoundError("Category not found", details={"category_id": category_id})
        return category

    def add_category(self, name: str, icon: str = "") -> Category:
        category = Category(id=self._new_id(), name=require_name(name), icon=(icon or "").strip())
        self._categories.append(category)
        logger.info("Category %s added (%s)", category.id, category.name)
        return category

    def products_in_category(self, category_id: str) -> list[Product]:
        return [p for p in self._products if p.category_id == category_id]

    def delete_category(self, category_id: str) -> Category:
        category = self.get_category(category_id)
        in_use = self.products_in_category(category_id)
        if in_use:
            raise CategoryInUseError(
                f'Cannot delete category "{category.name}": it still contains products.',
                details={"category_id": category_id, "product_count": len(in_use)},
            )
        self._categories = [c for c in self._categories if c.id != category_id]
        logger.info("Category %s deleted", category_id)
        return category

    # --- Products ---

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self._products if p.id == product_id), None)

    def get_product(self, product_id: str) -> Product:
        product = self.find_product(product_id)
        if product is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})
        return product

    def _require_category(self, category_id: str) -> None:
        if self.find_category(category_id) is None:
            raise UnknownCategoryError(
                "Unknown category",
                details={"category_id": category_id},
            )

    def add_product(
        self,
        *,
        name: str,
        category_id: str,
        stock: int,
        sale_price: float,
        purchase_price: float,
    ) -> Product:
        self._require_category(category_id)
        product = Product(
            id=self._new_id(),
            name=require_name(name),
            category_id=category_id,
            stock=require_non_negative_int(stock, "stock"),
            sale_price=require_price(sale_price, "salePrice"),
            purchase_price=require_price(purchase_price, "purchasePrice"),
            total_sales=0,
        )
        self._products.append(product)
        logger.info("Product %s added (%s)", product.id, product.name)
        return product

    def update_product(self, product: Product) -> Product:
        """Full replace by id. Writing `stock` here raises no alerts."""
        index = self._index_of(product.id)
        self._require_category(product.category_id)
        updated = Product(
            id=product.id,
            name=require_name(product.name),
            category_id=product.category_id,
            stock=require_non_negative_int(product.stock, "stock"),
            sale_price=require_price(product.sale_price, "salePrice"),
            purchase_price=require_price(product.purchase_price, "purchasePrice"),
            total_sales=require_non_negative_int(product.total_sales, "totalSales"),
        )
        self._products[index] = updated
        logger.info("Product %s updated", product.id)
        return updated

    def delete_product(self, product_id: str) -> Product:
        # Sales keep their own snapshot of the product, nothing to cascade.
        index = self._index_of(product_id)
        product = self._products.pop(index)
        logger.info("Product %s deleted", product_id)
        return product

    def adjust_stock_for_sale(self, product_id: str, quantity: int) -> Product:
        product = self.find_product(product_id)
        if product is None or quantity > product.stock:
            raise InsufficientStockError(
                "Insufficient stock",
                details={
                    "product_id": product_id,
                    "requested_quantity": quantity,
                    "on_hand": product.stock if product else 0,
                },
            )
        adjusted = replace(
            product,
            stock=product.stock - quantity,
            total_sales=product.total_sales + quantity,
        )
        self._products[self._index_of(product_id)] = adjusted
        return adjusted

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise NotFoundError("Product not found", details={"product_id": product_id})

    # --- Queries ---

    def search_products(self, search: str | None = None, category_id: str | None = None) -> list[Product]:
        """Case-insensitive name match plus optional category filter ("all" = any)."""
        term = (search or "").strip().lower()
        results = []
        for p in self._products:
            if term and term not in p.name.lower():
                continue
            if category_id and category_id != "all" and p.category_id != category_id:
                continue
            results.append(p)
        return results

    def sellable_products(self) -> list[Product]:
        return [p for p in self._products if p.stock > 0]
