# backend/basket_api/core/logging_config.py
"""
Configuración del logging de la aplicación a partir de los settings.
"""

import logging
from typing import Optional

from basket_api.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configura el logger raíz con el nivel y formato definidos en la configuración.
    Se llama una única vez al arrancar la aplicación.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
