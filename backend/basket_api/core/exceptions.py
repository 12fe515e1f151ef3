# backend/basket_api/core/exceptions.py
"""
Excepciones propias del dominio de carritos.

Los errores de identidad y de persistencia se comunican al cliente como
HTTPException desde la capa de servicios; aquí solo viven los errores
internos que no tienen una traducción directa a un código HTTP.
"""


class BasketError(Exception):
    """Error base para las operaciones sobre carritos."""


class BasketDecodeError(BasketError):
    """El contenido almacenado en la caché no se puede interpretar como un carrito."""

    def __init__(self, message: str, payload: bytes = b""):
        super().__init__(message)
        self.payload = payload
