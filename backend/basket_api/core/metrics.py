# backend/basket_api/core/metrics.py
"""
Contador agregado del valor de todos los carritos.

Es un contador up-down: recibe incrementos con signo y mantiene el total
acumulado en el proceso. El pipeline de telemetría que lo exporta es externo;
el repositorio solo conoce esta interfaz, que se le inyecta al construirlo.
"""

import logging

from basket_api.core.config import settings

logger = logging.getLogger(__name__)


class BasketValueCounter:
    """
    Suma del valor de los productos de todos los carritos almacenados.
    """

    def __init__(
        self,
        name: str = settings.BASKET_METRIC_NAME,
        unit: str = settings.BASKET_METRIC_UNIT,
        description: str = "Total value of all baskets",
    ):
        self.name = name
        self.unit = unit
        self.description = description
        self._value = 0.0

    def add(self, amount: float) -> None:
        """Aplica un incremento (o decremento, si es negativo) al total."""
        self._value += amount
        logger.debug(f"{self.name} {amount:+.2f} {self.unit} -> {self._value:.2f}")

    @property
    def value(self) -> float:
        return self._value
