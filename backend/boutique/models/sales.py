from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..time_utils import parse_iso_datetime, to_utc_z


@dataclass(frozen=True)
class Sale:
    """
    Immutable record of a committed sale.

    `product_name` and `unit_price` are snapshots taken at commit time and do
    not follow later edits to the product.
    """
    id: str
    date: datetime
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float
    profit: float

    def to_dict(self):
        return {
            "id": self.id,
            "date": to_utc_z(self.date),
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "total": self.total,
            "profit": self.profit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sale":
        sold_at = parse_iso_datetime(data["date"])
        if sold_at is None:
            raise ValueError("sale date is required")
        quantity = data["quantity"]
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError("quantity must be a positive integer")
        return cls(
            id=str(data["id"]),
            date=sold_at,
            product_id=str(data["productId"]),
            product_name=str(data["productName"]),
            quantity=quantity,
            unit_price=data["unitPrice"],
            total=data["total"],
            profit=data["profit"],
        )
