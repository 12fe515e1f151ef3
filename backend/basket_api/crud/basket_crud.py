# backend/basket_api/crud/basket_crud.py
"""
Operaciones de persistencia para los carritos de compra.

Cada comprador tiene un único documento en Redis bajo la clave
`/basket/{buyer_id}`. Además de leer, reemplazar y borrar carritos, el
repositorio mantiene la métrica agregada con el valor de todos los carritos
aplicando la diferencia entre el carrito anterior y el nuevo.

La lectura del carrito anterior y la escritura del nuevo no son atómicas: dos
actualizaciones concurrentes del mismo comprador pueden leer el mismo valor
previo y aplicar ambas diferencias aunque solo una escritura prevalezca. La
métrica es una aproximación y puede desviarse bajo contención.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Optional

from redis.asyncio import Redis

from basket_api.core.config import settings
from basket_api.core.exceptions import BasketDecodeError
from basket_api.core.metrics import BasketValueCounter
from basket_api.crud.basket_codec import decode_basket, encode_basket
from basket_api.schemas.basket_schema import CustomerBasket

logger = logging.getLogger(__name__)


class BasketRepository(ABC):
    """Contrato de almacenamiento de carritos."""

    @abstractmethod
    async def get_basket(self, buyer_id: str) -> Optional[CustomerBasket]:
        """Devuelve el carrito del comprador o None si no tiene ninguno."""

    @abstractmethod
    async def update_basket(self, basket: CustomerBasket) -> Optional[CustomerBasket]:
        """Reemplaza el carrito completo. Devuelve None si no se pudo guardar."""

    @abstractmethod
    async def delete_basket(self, buyer_id: str) -> bool:
        """Borra el carrito. Devuelve si realmente existía una clave."""


class RedisBasketRepository(BasketRepository):
    """
    Repositorio de carritos sobre Redis.

    El cliente de Redis y el contador son recursos compartidos del proceso; se
    inyectan al construir el repositorio y nunca se cierran desde aquí.
    """

    def __init__(
        self,
        redis: Redis,
        counter: BasketValueCounter,
        key_prefix: str = settings.BASKET_KEY_PREFIX,
    ):
        self.redis = redis
        self.counter = counter
        self._key_prefix = key_prefix.encode("utf-8")

    def _get_basket_key(self, buyer_id: str) -> bytes:
        """Genera la clave de Redis del carrito: prefijo + buyer_id en bruto."""
        return self._key_prefix + buyer_id.encode("utf-8")

    async def _get_basket_value(self, buyer_id: str) -> Decimal:
        old_basket = await self.get_basket(buyer_id)
        if old_basket is None:
            return Decimal("0")
        return old_basket.total_value()

    async def get_basket(self, buyer_id: str) -> Optional[CustomerBasket]:
        data = await self.redis.get(self._get_basket_key(buyer_id))
        if not data:
            return None

        try:
            return decode_basket(data)
        except BasketDecodeError:
            logger.error(f"Error decodificando el carrito del comprador {buyer_id}")
            raise

    async def update_basket(self, basket: CustomerBasket) -> Optional[CustomerBasket]:
        old_basket_value = await self._get_basket_value(basket.buyer_id)
        new_basket_value = basket.total_value()

        self.counter.add(-float(old_basket_value))
        self.counter.add(float(new_basket_value))

        payload = encode_basket(basket)
        created = await self.redis.set(self._get_basket_key(basket.buyer_id), payload)

        if not created:
            logger.info("Se produjo un problema al guardar el carrito.")
            return None

        logger.info("Carrito guardado correctamente.")
        # Se relee: si otra actualización se coló, se devuelve lo que hay en la caché
        return await self.get_basket(basket.buyer_id)

    async def delete_basket(self, buyer_id: str) -> bool:
        old_basket_value = await self._get_basket_value(buyer_id)
        self.counter.add(-float(old_basket_value))

        removed = await self.redis.delete(self._get_basket_key(buyer_id))
        return removed > 0


# Usaremos un diccionario en memoria para sustituir a Redis en los tests.
class InMemoryBasketRepository(BasketRepository):
    """
    Repositorio de carritos en memoria, sin métrica ni serialización.
    """

    def __init__(self):
        self._baskets: Dict[str, CustomerBasket] = {}
        self.writes = 0

    async def get_basket(self, buyer_id: str) -> Optional[CustomerBasket]:
        basket = self._baskets.get(buyer_id)
        return basket.model_copy(deep=True) if basket is not None else None

    async def update_basket(self, basket: CustomerBasket) -> Optional[CustomerBasket]:
        self.writes += 1
        self._baskets[basket.buyer_id] = basket.model_copy(deep=True)
        return await self.get_basket(basket.buyer_id)

    async def delete_basket(self, buyer_id: str) -> bool:
        self.writes += 1
        return self._baskets.pop(buyer_id, None) is not None
