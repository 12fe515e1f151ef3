# backend/basket_api/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura e inicializa la aplicación: logging, recursos
compartidos (cliente de Redis y métrica del valor de los carritos), rutas
de la API y traducción de errores internos a respuestas HTTP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from basket_api.api.v1.api_router import api_router_v1
from basket_api.core.config import settings
from basket_api.core.exceptions import BasketError
from basket_api.core.logging_config import setup_logging
from basket_api.core.metrics import BasketValueCounter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Crea los recursos compartidos al arrancar y los libera al parar.
    El cliente de Redis no abre conexiones hasta la primera operación.
    """
    app.state.redis = Redis.from_url(settings.REDIS_URL)
    app.state.basket_value_counter = BasketValueCounter()
    logger.info(f"Redis configurado en {settings.REDIS_URL}")
    try:
        yield
    finally:
        await app.state.redis.aclose()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
        description="API del carrito de compras por comprador",
        lifespan=lifespan,
    )

    app.include_router(api_router_v1, prefix=settings.API_V1_STR)

    @app.exception_handler(BasketError)
    async def basket_error_handler(request: Request, exc: BasketError):
        logger.error(f"Error interno del carrito en {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Stored basket could not be read"},
        )

    @app.get("/", tags=["Root"])
    async def read_root():
        """Mensaje de bienvenida con nombre y versión del servicio."""
        return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("basket_api.main:app", host=settings.HOST, port=settings.PORT)
