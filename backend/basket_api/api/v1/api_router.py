# backend/basket_api/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

from basket_api.api.v1.endpoints import basket

# Router principal de la v1
api_router_v1 = APIRouter()

# ROUTER DEL CARRITO
# Maneja las operaciones del carrito de compras del llamante
api_router_v1.include_router(
    basket.router,
    prefix="/basket",
    tags=["Basket"]
)
