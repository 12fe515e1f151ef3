# backend/basket_api/schemas/basket_schema.py
"""
Esquemas Pydantic para el modelo de dominio del carrito.

Un CustomerBasket es el único valor almacenado para cada comprador. Los items
conservan el orden de inserción y no se agrupan por producto: dos líneas con
el mismo product_id son válidas y se guardan tal cual.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class BasketItem(BaseModel):
    """Una línea del carrito."""
    product_id: int
    quantity: int
    unit_price: Decimal = Decimal("0")

    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price


class CustomerBasket(BaseModel):
    """Carrito completo de un comprador."""
    buyer_id: str = Field(..., min_length=1)
    items: List[BasketItem] = Field(default_factory=list)

    def total_value(self) -> Decimal:
        """
        Valor monetario del carrito: suma de cantidad * precio unitario.
        Nunca se almacena, siempre se calcula.
        """
        return sum((item.line_total() for item in self.items), Decimal("0"))
