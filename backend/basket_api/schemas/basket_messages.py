# backend/basket_api/schemas/basket_messages.py
"""
Mensajes de entrada y salida de la API del carrito.

Los campos viajan en camelCase. La respuesta de un carrito solo incluye
productId y quantity: el precio unitario se acepta al actualizar pero nunca
se devuelve, quien lo necesite debe obtenerlo del catálogo.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base para los mensajes: alias camelCase, acepta también snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ========================================
# PETICIONES
# ========================================

class BasketItemRequest(CamelModel):
    """Línea de carrito tal como la envía el cliente."""
    product_id: int
    quantity: int
    unit_price: Decimal = Decimal("0")


class UpdateBasketRequest(CamelModel):
    """Reemplaza por completo el carrito del llamante."""
    items: List[BasketItemRequest] = Field(default_factory=list)


# ========================================
# RESPUESTAS
# ========================================

class BasketItemResponse(CamelModel):
    """Línea de carrito devuelta al cliente, sin precio."""
    product_id: int
    quantity: int


class CustomerBasketResponse(CamelModel):
    """Contenido del carrito del llamante."""
    items: List[BasketItemResponse] = Field(default_factory=list)


class DeleteBasketResponse(CamelModel):
    """Confirmación vacía del borrado."""
    pass
