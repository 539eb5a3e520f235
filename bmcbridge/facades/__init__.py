"""
Normalized read-model facades - Facade Pattern.
Each facade reconciles vendor field names into one canonical key set.
"""

from .base_facade import BaseFacade
from .system_info import SystemInfo
from .bmc_info import BmcInfo
from .power_info import PowerInfo
from .thermal_info import ThermalInfo
from .pci_info import PciInfo

__all__ = [
    'BaseFacade',
    'SystemInfo',
    'BmcInfo',
    'PowerInfo',
    'ThermalInfo',
    'PciInfo',
]
