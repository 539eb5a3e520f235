"""
System information facade.
"""

from typing import Any, Dict, List

from ..models import Controller, first_present
from .base_facade import BaseFacade


class SystemInfo(BaseFacade):
    """Normalized system identity and inventory"""

    KEYS = ("service_tag", "make", "model", "serial", "cpus", "memory", "nics",
            "fans", "psus", "health", "controllers")
    STRICT = True

    @property
    def service_tag(self) -> Any:
        return first_present(self._system_info(), "service_tag")

    @property
    def make(self) -> Any:
        return first_present(self._system_info(), "manufacturer", "make")

    @property
    def model(self) -> Any:
        return first_present(self._system_info(), "model")

    @property
    def serial(self) -> Any:
        return first_present(self._system_info(), "serial_number", "serial")

    @property
    def cpus(self) -> List[Any]:
        return self._memoize("cpus", self.client.cpus)

    @property
    def memory(self) -> List[Any]:
        return self._memoize("memory", self.client.memory)

    @property
    def nics(self) -> List[Any]:
        return self._memoize("nics", self.client.nics)

    @property
    def fans(self) -> List[Any]:
        return self._memoize("fans", self.client.fans)

    @property
    def psus(self) -> List[Any]:
        return self._memoize("psus", self.client.psus)

    @property
    def health(self) -> Any:
        return self._memoize("health", self.client.system_health)

    @property
    def controllers(self) -> List[Controller]:
        return self._memoize("controllers", self.client.controllers)

    def _system_info(self) -> Dict[str, Any]:
        return self._memoize("system_info", self.client.system_info)
