"""
BMC Bridge Package

This package provides a vendor-agnostic client for Redfish-style BMC
endpoints (Dell iDRAC, Supermicro, HPE iLO, Lenovo XCC, ASRock Rack).

Architecture:
- Strategy Pattern for vendor adapters
- Registry Pattern for resolving adapters by vendor key
- Facade Pattern for the client and the normalized read models
- Value Object Pattern for immutable storage models
"""

from .errors import (
    BmcBridgeError,
    AuthenticationError,
    ConnectionError,
    TimeoutError,
    NotFoundError,
    UnsupportedVendorError,
    FeatureNotSupportedError,
    VirtualMediaError,
    VirtualMediaNotFoundError,
    VirtualMediaConnectionError,
    VirtualMediaLicenseError,
    VirtualMediaBusyError,
    TaskError,
    TaskTimeoutError,
    TaskFailedError,
)
from .http_client import ConnectionDescriptor, HttpClient
from .models import Controller, Volume
from .parsers import VendorParser
from .adapters import (
    BaseAdapter,
    PowerInterface,
    SystemInterface,
    StorageInterface,
    VirtualMediaInterface,
    BootInterface,
    JobsInterface,
    UtilityInterface,
    NetworkInterface,
)
from .repositories import AdapterRegistry, register_adapter, get_adapter, supported_vendors
from .facades import SystemInfo, BmcInfo, PowerInfo, ThermalInfo, PciInfo
from .services import VendorDetector, detect_vendor, Client, connect

__version__ = "0.1.0"

__all__ = [
    # Errors
    "BmcBridgeError",
    "AuthenticationError",
    "ConnectionError",
    "TimeoutError",
    "NotFoundError",
    "UnsupportedVendorError",
    "FeatureNotSupportedError",
    "VirtualMediaError",
    "VirtualMediaNotFoundError",
    "VirtualMediaConnectionError",
    "VirtualMediaLicenseError",
    "VirtualMediaBusyError",
    "TaskError",
    "TaskTimeoutError",
    "TaskFailedError",
    # Transport
    "ConnectionDescriptor",
    "HttpClient",
    # Models
    "Controller",
    "Volume",
    # Parsers
    "VendorParser",
    # Adapters
    "BaseAdapter",
    "PowerInterface",
    "SystemInterface",
    "StorageInterface",
    "VirtualMediaInterface",
    "BootInterface",
    "JobsInterface",
    "UtilityInterface",
    "NetworkInterface",
    # Registry
    "AdapterRegistry",
    "register_adapter",
    "get_adapter",
    "supported_vendors",
    # Facades
    "SystemInfo",
    "BmcInfo",
    "PowerInfo",
    "ThermalInfo",
    "PciInfo",
    # Services
    "VendorDetector",
    "detect_vendor",
    "Client",
    "connect",
]
