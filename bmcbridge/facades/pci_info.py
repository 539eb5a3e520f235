"""
PCI device facade.
"""

import re
from typing import Any, List

from ..models import read_field
from .base_facade import BaseFacade


class PciInfo(BaseFacade):
    """PCI devices and NIC slot placement"""

    KEYS = ("devices", "nics_with_slots")
    STRICT = True

    @property
    def devices(self) -> List[Any]:
        return self._memoize("devices", self.client.pci_devices)

    @property
    def nics_with_slots(self) -> List[Any]:
        return self._memoize("nics_with_slots", self.client.nics_with_pci_info)

    def devices_by_manufacturer(self, manufacturer: str) -> List[Any]:
        pattern = re.compile(re.escape(manufacturer), re.IGNORECASE)
        return [d for d in self.devices if self._matches(d, "manufacturer", pattern)]

    def mellanox_devices(self) -> List[Any]:
        return self.devices_by_manufacturer("Mellanox")

    def network_controllers(self) -> List[Any]:
        pattern = re.compile(r'NetworkController', re.IGNORECASE)
        return [d for d in self.devices if self._matches(d, "device_class", pattern)]

    @staticmethod
    def _matches(device: Any, field_name: str, pattern: "re.Pattern") -> bool:
        value = read_field(device, field_name)
        return isinstance(value, str) and bool(pattern.search(value))
