"""
Fixtures compartidas por los tests del servicio de carritos.

- Los tests de endpoints usan el repositorio en memoria y tokens JWT reales.
- Los tests del repositorio usan fakeredis, sin necesidad de un Redis en marcha.
"""
import pytest
from fakeredis import aioredis
from fastapi.testclient import TestClient

from basket_api.api import deps
from basket_api.core.metrics import BasketValueCounter
from basket_api.core.security import create_access_token
from basket_api.crud.basket_crud import InMemoryBasketRepository, RedisBasketRepository
from basket_api.main import app


@pytest.fixture
def memory_repository() -> InMemoryBasketRepository:
    return InMemoryBasketRepository()


@pytest.fixture
def test_client(memory_repository):
    app.dependency_overrides[deps.get_basket_repository] = lambda: memory_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers


@pytest.fixture
def fake_redis():
    return aioredis.FakeRedis()


@pytest.fixture
def counter() -> BasketValueCounter:
    return BasketValueCounter()


@pytest.fixture
def redis_repository(fake_redis, counter) -> RedisBasketRepository:
    return RedisBasketRepository(fake_redis, counter)
