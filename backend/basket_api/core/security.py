# backend/basket_api/core/security.py
"""
Resolución de la identidad del llamante.

La identidad es el claim `sub` de un JWT enviado como `Authorization: Bearer`.
La cabecera es opcional: si no llega, el token no es válido o no trae `sub`,
la identidad es None y cada operación decide si eso es un error.
"""

import logging
from typing import Optional

from fastapi import Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from basket_api.core.config import settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def decode_subject(token: str) -> Optional[str]:
    """Devuelve el `sub` del token, o None si el token no se puede validar."""
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Token rechazado: {e}")
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    return str(subject)


def create_access_token(subject: str) -> str:
    """Firma un token con el `sub` indicado. Útil para clientes internos y tests."""
    return jwt.encode(
        {"sub": subject}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


async def get_user_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> Optional[str]:
    """
    Dependencia de FastAPI que extrae la identidad del llamante.
    Nunca falla: la ausencia de identidad se representa con None.
    """
    if credentials is None:
        return None
    return decode_subject(credentials.credentials)
