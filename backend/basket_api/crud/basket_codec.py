# backend/basket_api/crud/basket_codec.py
"""
Serialización de un CustomerBasket a bytes para la caché, y viceversa.

Formato: un documento JSON UTF-8
    {"buyerId": str, "items": [{"productId": int, "quantity": int, "unitPrice": number}]}

Al leer, los nombres de campo se comparan sin distinguir mayúsculas, de modo
que documentos escritos como "BuyerId" o "buyerid" se interpretan igual. Los
números decimales se leen como Decimal para no perder precisión en precios.
"""

import json
from decimal import Decimal
from typing import Any, Dict

from pydantic import ValidationError

from basket_api.core.exceptions import BasketDecodeError
from basket_api.schemas.basket_schema import BasketItem, CustomerBasket

# Nombre en el documento -> nombre del campo en el modelo
_BASKET_FIELDS = {"buyerid": "buyer_id", "items": "items"}
_ITEM_FIELDS = {"productid": "product_id", "quantity": "quantity", "unitprice": "unit_price"}


def _match_fields(document: Any, fields: Dict[str, str]) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise BasketDecodeError(f"Se esperaba un objeto JSON, se recibió {type(document).__name__}")
    matched = {}
    for key, value in document.items():
        field_name = fields.get(str(key).lower())
        if field_name is not None:
            matched[field_name] = value
    return matched


def _encode_item(item: BasketItem) -> str:
    # El Decimal se escribe tal cual como número JSON; pasar por float lo redondearía
    return '{"productId":%s,"quantity":%s,"unitPrice":%s}' % (
        json.dumps(item.product_id),
        json.dumps(item.quantity),
        str(item.unit_price),
    )


def encode_basket(basket: CustomerBasket) -> bytes:
    """
    Convierte el carrito en el payload que se guarda en la caché.
    El modelo solo admite precios finitos, así que str(Decimal) siempre es un número JSON válido.
    """
    items = ",".join(_encode_item(item) for item in basket.items)
    document = '{"buyerId":%s,"items":[%s]}' % (json.dumps(basket.buyer_id), items)
    return document.encode("utf-8")


def decode_basket(payload: bytes) -> CustomerBasket:
    """
    Reconstruye el carrito a partir del payload de la caché.

    Raises:
        BasketDecodeError: si el payload no es JSON válido o no tiene la forma de un carrito.
    """
    try:
        document = json.loads(payload, parse_float=Decimal)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BasketDecodeError(f"Payload de carrito corrupto: {e}", payload) from e

    try:
        data = _match_fields(document, _BASKET_FIELDS)
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise BasketDecodeError("El campo items debe ser una lista", payload)
        data["items"] = [BasketItem(**_match_fields(raw, _ITEM_FIELDS)) for raw in raw_items]
        return CustomerBasket(**data)
    except ValidationError as e:
        raise BasketDecodeError(f"Carrito con formato inválido: {e}", payload) from e
    except BasketDecodeError as e:
        e.payload = payload
        raise
