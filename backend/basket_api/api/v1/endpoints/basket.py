# backend/basket_api/api/v1/endpoints/basket.py
"""
Este archivo contiene los endpoints del carrito de compras.

Expone las tres operaciones remotas sobre el carrito del llamante: obtenerlo,
reemplazarlo y borrarlo. El comprador siempre es el `sub` del token; nunca se
recibe en la URL ni en el cuerpo.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from basket_api.api import deps
from basket_api.core.security import get_user_identity
from basket_api.schemas.basket_messages import (
    CustomerBasketResponse,
    DeleteBasketResponse,
    UpdateBasketRequest,
)
from basket_api.services.basket_service import BasketService

# Router para el carrito de compras
router = APIRouter()


@router.get("", response_model=CustomerBasketResponse)
async def get_basket(
    user_id: Optional[str] = Depends(get_user_identity),
    basket_service: BasketService = Depends(deps.get_basket_service),
):
    """
    Obtiene el carrito del llamante. No requiere autenticación: sin token
    se devuelve un carrito vacío.
    """
    return await basket_service.get_basket(user_id)


@router.post("", response_model=CustomerBasketResponse)
async def update_basket(
    request: UpdateBasketRequest,
    user_id: Optional[str] = Depends(get_user_identity),
    basket_service: BasketService = Depends(deps.get_basket_service),
):
    """
    Reemplaza por completo el carrito del llamante.
    La respuesta no incluye el precio unitario de los items.
    """
    return await basket_service.update_basket(user_id, request)


@router.delete("", response_model=DeleteBasketResponse)
async def delete_basket(
    user_id: Optional[str] = Depends(get_user_identity),
    basket_service: BasketService = Depends(deps.get_basket_service),
):
    """
    Borra el carrito del llamante. Responde igual aunque no existiera.
    """
    return await basket_service.delete_basket(user_id)
