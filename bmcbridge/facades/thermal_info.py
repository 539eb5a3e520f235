"""
Thermal information facade.
"""

from typing import Any, List

from .base_facade import BaseFacade


class ThermalInfo(BaseFacade):
    """Fans and temperature sensors, best-effort"""

    KEYS = ("fans", "temperatures")
    STRICT = False

    @property
    def fans(self) -> List[Any]:
        return self._optional("fans", self.client.fans)

    @property
    def temperatures(self) -> List[Any]:
        return self._optional("temperatures", self.client.temperatures)
