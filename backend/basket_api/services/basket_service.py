# backend/basket_api/services/basket_service.py
"""
Servicio del carrito de compras.

Este servicio es la capa que hay entre la API y el repositorio: valida la
identidad del llamante, traduce los mensajes de la API al modelo de dominio
(y de vuelta) y delega la persistencia en el repositorio.

La identidad llega ya resuelta como parámetro; el servicio no lee cabeceras
ni estado de la petición.
"""

import json
import logging
from typing import Optional

from fastapi import HTTPException
from starlette import status

from basket_api.crud.basket_crud import BasketRepository
from basket_api.schemas.basket_schema import BasketItem, CustomerBasket
from basket_api.schemas.basket_messages import (
    BasketItemResponse,
    CustomerBasketResponse,
    DeleteBasketResponse,
    UpdateBasketRequest,
)

logger = logging.getLogger(__name__)


class BasketService:
    """
    Operaciones remotas sobre el carrito del llamante.

    - get_basket: accesible sin autenticación; sin identidad devuelve un carrito vacío.
    - update_basket / delete_basket: requieren identidad (401 si falta).
    """

    def __init__(self, repository: BasketRepository):
        self.repository = repository

    async def get_basket(self, user_id: Optional[str]) -> CustomerBasketResponse:
        """
        Obtiene el carrito del llamante.

        No distingue entre "sin identidad", "sin carrito" y "carrito vacío":
        en los tres casos la respuesta es una lista de items vacía.
        """
        if not user_id:
            return CustomerBasketResponse()

        logger.debug(f"Inicio de GetBasket para el carrito {user_id}")

        data = await self.repository.get_basket(user_id)
        if data is not None:
            return map_to_customer_basket_response(data)

        return CustomerBasketResponse()

    async def update_basket(
        self, user_id: Optional[str], request: UpdateBasketRequest
    ) -> CustomerBasketResponse:
        """
        Reemplaza el carrito del llamante por los items de la petición.

        Si el repositorio no consigue guardar el carrito se responde 404, igual
        que si el comprador no tuviera carrito: el cliente no puede distinguir
        un fallo de escritura de un carrito inexistente.
        """
        if not user_id:
            raise_not_authenticated()

        logger.debug(f"Inicio de UpdateBasket para el carrito {user_id}")

        customer_basket = map_to_customer_basket(user_id, request)
        basket_value = customer_basket.total_value()
        logger.debug(
            f"Valor del carrito de {user_id}: {basket_value}",
            extra={
                "user_id": user_id,
                "basket.items": json.dumps(
                    [item.model_dump(mode="json") for item in customer_basket.items]
                ),
                "basket.value": float(basket_value),
            },
        )
        logger.info(f"El usuario actualizó su carrito con {len(customer_basket.items)} items")

        response = await self.repository.update_basket(customer_basket)
        if response is None:
            raise_basket_does_not_exist(user_id)

        return map_to_customer_basket_response(response)

    async def delete_basket(self, user_id: Optional[str]) -> DeleteBasketResponse:
        """Borra el carrito del llamante. Responde igual exista o no."""
        if not user_id:
            raise_not_authenticated()

        logger.debug(f"Inicio de DeleteBasket para el carrito {user_id}")

        await self.repository.delete_basket(user_id)
        return DeleteBasketResponse()


# ========================================
# ERRORES
# ========================================

def raise_not_authenticated():
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="The caller is not authenticated.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def raise_basket_does_not_exist(user_id: str):
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Basket with buyer id {user_id} does not exist",
    )


# ========================================
# MAPEO API <-> DOMINIO
# ========================================

def map_to_customer_basket_response(customer_basket: CustomerBasket) -> CustomerBasketResponse:
    """El precio unitario no forma parte de la respuesta."""
    return CustomerBasketResponse(
        items=[
            BasketItemResponse(product_id=item.product_id, quantity=item.quantity)
            for item in customer_basket.items
        ]
    )


def map_to_customer_basket(user_id: str, request: UpdateBasketRequest) -> CustomerBasket:
    return CustomerBasket(
        buyer_id=user_id,
        items=[
            BasketItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in request.items
        ],
    )
