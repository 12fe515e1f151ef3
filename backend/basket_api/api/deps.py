# backend/basket_api/api/deps.py
"""
Módulo de dependencias para FastAPI.

Centraliza las dependencias inyectables en los endpoints: conexión a Redis, métrica agregada, repositorio y servicio de carritos.
Los recursos compartidos (cliente de Redis y contador) se crean en el
arranque de la aplicación y se guardan en `app.state`.
"""

from fastapi import Depends, Request
from redis.asyncio import Redis

from basket_api.core.config import settings
from basket_api.core.metrics import BasketValueCounter
from basket_api.crud.basket_crud import BasketRepository, RedisBasketRepository
from basket_api.services.basket_service import BasketService


def get_redis(request: Request) -> Redis:
    """Cliente de Redis compartido por todo el proceso."""
    return request.app.state.redis


def get_basket_value_counter(request: Request) -> BasketValueCounter:
    """Contador del valor total de los carritos, compartido por todo el proceso."""
    return request.app.state.basket_value_counter


def get_basket_repository(
    redis: Redis = Depends(get_redis),
    counter: BasketValueCounter = Depends(get_basket_value_counter),
) -> BasketRepository:
    return RedisBasketRepository(redis, counter, key_prefix=settings.BASKET_KEY_PREFIX)


def get_basket_service(
    repository: BasketRepository = Depends(get_basket_repository),
) -> BasketService:
    """
    Dependencia para obtener el servicio de carrito.
    """
    return BasketService(repository)
