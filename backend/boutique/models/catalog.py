from __future__ import annotations

from dataclasses import dataclass


def _number(value, field: str) -> float | int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    return value


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str = ""

    def to_dict(self):
        return {"id": self.id, "name": self.name, "icon": self.icon}

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(id=str(data["id"]), name=str(data["name"]), icon=str(data.get("icon") or ""))


@dataclass
class Product:
    """
    Catalog entry. `stock` and `total_sales` only move together through a
    committed sale; a full update may still overwrite `stock`.
    """
    id: str
    name: str
    category_id: str
    stock: int
    sale_price: float
    purchase_price: float
    total_sales: int = 0

    @property
    def unit_margin(self) -> float:
        return self.sale_price - self.purchase_price

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "categoryId": self.category_id,
            "stock": self.stock,
            "salePrice": self.sale_price,
            "purchasePrice": self.purchase_price,
            "totalSales": self.total_sales,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        stock = data["stock"]
        total_sales = data.get("totalSales", 0)
        if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
            raise ValueError("stock must be a non-negative integer")
        if not isinstance(total_sales, int) or isinstance(total_sales, bool) or total_sales < 0:
            raise ValueError("totalSales must be a non-negative integer")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            category_id=str(data["categoryId"]),
            stock=stock,
            sale_price=_number(data["salePrice"], "salePrice"),
            purchase_price=_number(data["purchasePrice"], "purchasePrice"),
            total_sales=total_sales,
        )
