"""
Tests del repositorio de carritos sobre Redis (fakeredis).

Verifican la persistencia, el esquema de claves y la métrica agregada del
valor de los carritos.
"""
import logging
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from basket_api.core.exceptions import BasketDecodeError
from basket_api.crud.basket_codec import encode_basket
from basket_api.crud.basket_crud import RedisBasketRepository
from basket_api.schemas.basket_schema import BasketItem, CustomerBasket


def make_basket(buyer_id: str, *lines) -> CustomerBasket:
    return CustomerBasket(
        buyer_id=buyer_id,
        items=[
            BasketItem(product_id=product_id, quantity=quantity, unit_price=Decimal(price))
            for product_id, quantity, price in lines
        ],
    )


class TestGetBasket:

    async def test_missing_basket_is_none(self, redis_repository):
        assert await redis_repository.get_basket("nobody") is None

    async def test_empty_payload_is_none(self, redis_repository, fake_redis):
        await fake_redis.set(b"/basket/u1", b"")

        assert await redis_repository.get_basket("u1") is None

    async def test_basket_without_items_is_not_none(self, redis_repository):
        await redis_repository.update_basket(make_basket("u1"))

        basket = await redis_repository.get_basket("u1")

        assert basket is not None
        assert basket.items == []

    async def test_corrupt_payload_raises(self, redis_repository, fake_redis):
        await fake_redis.set(b"/basket/u1", b"{broken")

        with pytest.raises(BasketDecodeError):
            await redis_repository.get_basket("u1")


class TestUpdateBasket:

    async def test_round_trip_keeps_items_and_prices(self, redis_repository):
        stored = await redis_repository.update_basket(
            make_basket("u1", (1, 2, "9.99"), (2, 1, "5.00"))
        )

        fetched = await redis_repository.get_basket("u1")

        assert stored == fetched
        assert [(i.product_id, i.quantity, i.unit_price) for i in fetched.items] == [
            (1, 2, Decimal("9.99")),
            (2, 1, Decimal("5.00")),
        ]

    async def test_update_replaces_instead_of_merging(self, redis_repository):
        await redis_repository.update_basket(make_basket("u1", (1, 1, "1.00"), (2, 1, "1.00")))
        await redis_repository.update_basket(make_basket("u1", (3, 5, "2.00")))

        basket = await redis_repository.get_basket("u1")

        assert [(i.product_id, i.quantity) for i in basket.items] == [(3, 5)]

    async def test_duplicate_products_are_not_merged(self, redis_repository):
        await redis_repository.update_basket(make_basket("u1", (1, 1, "1.00"), (1, 2, "1.00")))

        basket = await redis_repository.get_basket("u1")

        assert [(i.product_id, i.quantity) for i in basket.items] == [(1, 1), (1, 2)]

    async def test_key_is_prefix_plus_raw_buyer_id(self, redis_repository, fake_redis):
        await redis_repository.update_basket(make_basket("usuario-ñ", (1, 1, "1.00")))

        assert await fake_redis.exists("/basket/usuario-ñ".encode("utf-8")) == 1

    async def test_baskets_of_different_buyers_are_independent(self, redis_repository):
        await redis_repository.update_basket(make_basket("u1", (1, 1, "1.00")))
        await redis_repository.update_basket(make_basket("u2", (2, 2, "2.00")))

        assert (await redis_repository.get_basket("u1")).items[0].product_id == 1
        assert (await redis_repository.get_basket("u2")).items[0].product_id == 2

    async def test_metric_changes_by_difference_with_previous_basket(self, redis_repository, counter):
        await redis_repository.update_basket(make_basket("u1", (1, 2, "9.99")))
        assert counter.value == pytest.approx(19.98)

        await redis_repository.update_basket(make_basket("u1", (1, 1, "9.99")))
        assert counter.value == pytest.approx(9.99)

        await redis_repository.update_basket(make_basket("u2", (4, 3, "10.00")))
        assert counter.value == pytest.approx(39.99)

    async def test_failed_write_returns_none(self, fake_redis, counter, caplog):
        caplog.set_level(logging.INFO, logger="basket_api.crud.basket_crud")
        fake_redis.set = AsyncMock(return_value=None)
        repository = RedisBasketRepository(fake_redis, counter)

        result = await repository.update_basket(make_basket("u1", (1, 1, "1.00")))

        assert result is None
        fake_redis.set.assert_awaited_once()
        assert "Se produjo un problema al guardar el carrito." in caplog.text

    async def test_returns_what_is_stored_after_the_write(self, fake_redis, counter):
        # Otra escritura se cuela entre el set y la relectura
        winner = make_basket("u1", (9, 9, "1.00"))
        original_set = fake_redis.set

        async def racing_set(key, value):
            created = await original_set(key, value)
            await original_set(key, encode_basket(winner))
            return created

        fake_redis.set = racing_set
        repository = RedisBasketRepository(fake_redis, counter)

        result = await repository.update_basket(make_basket("u1", (1, 1, "1.00")))

        assert result == winner


class TestDeleteBasket:

    async def test_delete_then_get_is_none(self, redis_repository):
        await redis_repository.update_basket(make_basket("u1", (1, 1, "1.00")))

        assert await redis_repository.delete_basket("u1") is True
        assert await redis_repository.get_basket("u1") is None

    async def test_delete_subtracts_basket_value(self, redis_repository, counter):
        await redis_repository.update_basket(make_basket("u1", (1, 2, "9.99")))
        await redis_repository.update_basket(make_basket("u2", (1, 1, "5.00")))

        await redis_repository.delete_basket("u1")

        assert counter.value == pytest.approx(5.00)

    async def test_delete_missing_basket_is_noop(self, redis_repository, counter):
        await redis_repository.update_basket(make_basket("u1", (1, 1, "3.00")))

        removed = await redis_repository.delete_basket("nobody")

        assert removed is False
        assert counter.value == pytest.approx(3.00)
