"""
Vendor adapter base class and capability interfaces - Strategy Pattern.
Concrete vendor adapters live in separate bmcbridge_<vendor> packages.
"""

from .base_adapter import (
    BaseAdapter,
    PowerInterface,
    SystemInterface,
    StorageInterface,
    VirtualMediaInterface,
    BootInterface,
    JobsInterface,
    UtilityInterface,
    NetworkInterface,
    FEATURE_INTERFACES,
    OPERATION_FEATURES,
)

__all__ = [
    'BaseAdapter',
    'PowerInterface',
    'SystemInterface',
    'StorageInterface',
    'VirtualMediaInterface',
    'BootInterface',
    'JobsInterface',
    'UtilityInterface',
    'NetworkInterface',
    'FEATURE_INTERFACES',
    'OPERATION_FEATURES',
]
