"""
Base adapter and capability interfaces - Strategy Pattern.

Every vendor adapter derives from BaseAdapter and declares which feature
categories it supports by also deriving from the matching capability
interfaces. The Client reads capabilities from that declared conformance,
never from whichever methods happen to exist on the adapter.
"""

import logging
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

import requests

from ..config import ConnectionDefaults
from ..errors import BmcBridgeError, FeatureNotSupportedError
from ..http_client import ConnectionDescriptor, HttpClient

logger = logging.getLogger(__name__)


class BaseAdapter(ABC):
    """
    Abstract base class for vendor adapters.

    Design Pattern: Strategy Pattern
    Each vendor implements this interface with vendor-specific Redfish handling.

    Responsibilities:
    - Own the HTTP transport for one BMC
    - Manage the BMC session (login/logout)
    - Implement the operations of every capability interface it declares
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = ConnectionDefaults.PORT,
        use_ssl: bool = ConnectionDefaults.USE_SSL,
        verify_ssl: bool = ConnectionDefaults.VERIFY_SSL,
        retry_count: int = ConnectionDefaults.RETRY_COUNT,
        retry_delay: float = ConnectionDefaults.RETRY_DELAY,
        host_header: Optional[str] = None,
        **options,
    ):
        """
        Initialize adapter with connection settings.

        Args:
            host: BMC hostname or IP
            username: BMC username
            password: BMC password
            port: BMC port
            use_ssl: Use https
            verify_ssl: Verify the BMC certificate
            retry_count: Transport retries after the first attempt
            retry_delay: Base backoff delay in seconds
            host_header: Optional Host header override
            **options: Vendor-specific options, kept on `self.options`
        """
        self.connection = ConnectionDescriptor(
            host=host,
            port=port,
            use_ssl=use_ssl,
            verify_ssl=verify_ssl,
            username=username,
            password=password,
            host_header=host_header,
            retry_count=retry_count,
            retry_delay=retry_delay,
        )
        self.http = HttpClient(self.connection)
        self.options = options

    @property
    @abstractmethod
    def vendor(self) -> str:
        """Return normalized vendor key"""
        pass

    @abstractmethod
    def login(self) -> Any:
        """Open a BMC session"""
        pass

    @abstractmethod
    def logout(self) -> Any:
        """Close the BMC session"""
        pass

    @property
    def host(self) -> str:
        return self.connection.host

    @property
    def base_url(self) -> str:
        return self.connection.base_url

    def with_retries(
        self,
        operation: Callable[[], Any],
        max_retries: Optional[int] = None,
        initial_delay: Optional[float] = None,
        error_classes: Tuple[Type[BaseException], ...] = (BmcBridgeError,),
    ) -> Any:
        """
        Run an adapter-level operation with retries.

        Used for multi-request operations (e.g. polling a job) where the
        transport-level retry of a single request is not enough.

        Args:
            operation: Zero-argument callable
            max_retries: Retries after the first attempt (default: connection retry_count)
            initial_delay: Base delay (default: connection retry_delay)
            error_classes: Exceptions that trigger a retry

        Returns:
            The operation result
        """
        if max_retries is None:
            max_retries = self.connection.retry_count
        if initial_delay is None:
            initial_delay = self.connection.retry_delay

        retries = 0
        while True:
            try:
                return operation()
            except error_classes as e:
                retries += 1
                if retries > max_retries:
                    logger.error(f"Max retries reached for {self.host}: {e} after {max_retries} retries")
                    raise
                delay = initial_delay * int(retries ** 1.5)
                logger.warning(f"Retry {retries}/{max_retries} for {self.host}: {e}, waiting {delay}s")
                time.sleep(delay)

    def service_root(self) -> Dict[str, Any]:
        """Fetch the Redfish service root document"""
        response = self.http.get(ConnectionDefaults.SERVICE_ROOT)
        if response.status_code != 200:
            raise BmcBridgeError(
                f"Failed to get service root: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.json()

    def redfish_version(self) -> Optional[str]:
        return self.service_root().get("RedfishVersion")

    def handle_response(self, response: requests.Response) -> Any:
        """
        Return a successful response body, or follow a Location header.

        Raises:
            BmcBridgeError: On non-2xx status
        """
        location = response.headers.get("Location")
        if location:
            return self.handle_location(location)

        if 200 <= response.status_code < 300:
            return response.text

        raise BmcBridgeError(
            f"Request failed: HTTP {response.status_code} - {response.text[:200]}",
            status_code=response.status_code,
        )

    def handle_location(self, location: str) -> Any:
        """Subclasses override for vendor-specific task/job locations"""
        return None


# ============================================================================
# Capability interfaces
# ============================================================================
# Abstract methods are the operations an adapter must provide to claim the
# category. Non-abstract methods are optional extras that raise
# FeatureNotSupportedError until an adapter overrides them.

def _unsupported(adapter, operation: str):
    raise FeatureNotSupportedError(operation, getattr(adapter, "vendor", None))


class PowerInterface(ABC):
    """Power control"""

    FEATURE = "power"
    OPERATIONS = ("power_status", "power_on", "power_off", "power_restart",
                  "power_cycle", "reset_type_allowed")

    @abstractmethod
    def power_status(self) -> Any:
        pass

    @abstractmethod
    def power_on(self) -> Any:
        pass

    @abstractmethod
    def power_off(self, force: bool = False) -> Any:
        pass

    @abstractmethod
    def power_restart(self, force: bool = False) -> Any:
        pass

    @abstractmethod
    def power_cycle(self) -> Any:
        pass

    def reset_type_allowed(self) -> List[str]:
        _unsupported(self, "reset_type_allowed")


class SystemInterface(ABC):
    """System inventory"""

    FEATURE = "system"
    OPERATIONS = ("system_info", "cpus", "memory", "nics", "fans", "psus",
                  "temperatures", "system_health", "power_consumption",
                  "power_consumption_watts", "bmc_info", "pci_devices",
                  "nics_with_pci_info")

    @abstractmethod
    def system_info(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def cpus(self) -> List[Any]:
        pass

    @abstractmethod
    def memory(self) -> List[Any]:
        pass

    @abstractmethod
    def nics(self) -> List[Any]:
        pass

    @abstractmethod
    def fans(self) -> List[Any]:
        pass

    @abstractmethod
    def psus(self) -> List[Any]:
        pass

    @abstractmethod
    def temperatures(self) -> List[Any]:
        pass

    def system_health(self) -> Any:
        _unsupported(self, "system_health")

    def power_consumption(self) -> Dict[str, Any]:
        _unsupported(self, "power_consumption")

    def power_consumption_watts(self) -> Optional[float]:
        _unsupported(self, "power_consumption_watts")

    def bmc_info(self) -> Dict[str, Any]:
        _unsupported(self, "bmc_info")

    def pci_devices(self) -> List[Any]:
        _unsupported(self, "pci_devices")

    def nics_with_pci_info(self) -> List[Any]:
        _unsupported(self, "nics_with_pci_info")


class StorageInterface(ABC):
    """Storage controllers, drives and volumes"""

    FEATURE = "storage"
    OPERATIONS = ("storage_controllers", "drives", "volumes", "volume_drives",
                  "storage_summary")

    @abstractmethod
    def storage_controllers(self) -> List[Any]:
        pass

    @abstractmethod
    def drives(self, controller) -> List[Any]:
        pass

    @abstractmethod
    def volumes(self, controller) -> List[Any]:
        pass

    @abstractmethod
    def volume_drives(self, volume) -> List[Any]:
        pass

    def storage_summary(self) -> Dict[str, Any]:
        _unsupported(self, "storage_summary")


class VirtualMediaInterface(ABC):
    """Virtual media (remote ISO mounting)"""

    FEATURE = "virtual_media"
    OPERATIONS = ("virtual_media", "insert_virtual_media", "eject_virtual_media",
                  "virtual_media_status", "mount_iso_and_boot", "unmount_all_media")

    @abstractmethod
    def virtual_media(self) -> List[Any]:
        pass

    @abstractmethod
    def insert_virtual_media(self, iso_url: str, device: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    def eject_virtual_media(self, device: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    def virtual_media_status(self) -> Any:
        pass

    def mount_iso_and_boot(self, iso_url: str, device: Optional[str] = None) -> Any:
        _unsupported(self, "mount_iso_and_boot")

    def unmount_all_media(self) -> Any:
        _unsupported(self, "unmount_all_media")


class BootInterface(ABC):
    """Boot configuration"""

    FEATURE = "boot"
    OPERATIONS = ("boot_options", "set_boot_override", "clear_boot_override",
                  "set_boot_order", "get_boot_devices", "boot_to_pxe", "boot_to_disk",
                  "boot_to_cd", "boot_to_usb", "boot_to_bios_setup")

    @abstractmethod
    def boot_options(self) -> Any:
        pass

    @abstractmethod
    def set_boot_override(self, target: str, persistent: bool = False) -> Any:
        pass

    @abstractmethod
    def clear_boot_override(self) -> Any:
        pass

    def set_boot_order(self, devices: List[str]) -> Any:
        _unsupported(self, "set_boot_order")

    def get_boot_devices(self) -> List[Any]:
        _unsupported(self, "get_boot_devices")

    def boot_to_pxe(self) -> Any:
        return self.set_boot_override("Pxe")

    def boot_to_disk(self) -> Any:
        return self.set_boot_override("Hdd")

    def boot_to_cd(self) -> Any:
        return self.set_boot_override("Cd")

    def boot_to_usb(self) -> Any:
        return self.set_boot_override("Usb")

    def boot_to_bios_setup(self) -> Any:
        return self.set_boot_override("BiosSetup")


class JobsInterface(ABC):
    """BMC jobs and tasks"""

    FEATURE = "jobs"
    OPERATIONS = ("jobs", "job_status", "wait_for_job", "cancel_job",
                  "clear_completed_jobs", "jobs_summary")

    @abstractmethod
    def jobs(self) -> List[Any]:
        pass

    @abstractmethod
    def job_status(self, job_id: str) -> Any:
        pass

    @abstractmethod
    def wait_for_job(self, job_id: str, timeout: int = 600) -> Any:
        pass

    def cancel_job(self, job_id: str) -> Any:
        _unsupported(self, "cancel_job")

    def clear_completed_jobs(self) -> Any:
        _unsupported(self, "clear_completed_jobs")

    def jobs_summary(self) -> Dict[str, Any]:
        _unsupported(self, "jobs_summary")


class UtilityInterface(ABC):
    """Event log, accounts and sessions"""

    FEATURE = "utility"
    OPERATIONS = ("sel_log", "accounts", "sessions", "clear_sel_log", "sel_summary",
                  "create_account", "delete_account", "update_account_password",
                  "service_info", "get_firmware_version")

    @abstractmethod
    def sel_log(self) -> List[Any]:
        pass

    @abstractmethod
    def accounts(self) -> List[Any]:
        pass

    @abstractmethod
    def sessions(self) -> List[Any]:
        pass

    def clear_sel_log(self) -> Any:
        _unsupported(self, "clear_sel_log")

    def sel_summary(self, limit: int = 10) -> Any:
        _unsupported(self, "sel_summary")

    def create_account(self, username: str, password: str, role: str = "Administrator") -> Any:
        _unsupported(self, "create_account")

    def delete_account(self, username: str) -> Any:
        _unsupported(self, "delete_account")

    def update_account_password(self, username: str, new_password: str) -> Any:
        _unsupported(self, "update_account_password")

    def service_info(self) -> Dict[str, Any]:
        _unsupported(self, "service_info")

    def get_firmware_version(self) -> Optional[str]:
        _unsupported(self, "get_firmware_version")


class NetworkInterface(ABC):
    """BMC network settings"""

    FEATURE = "network"
    OPERATIONS = ("get_bmc_network", "set_bmc_network", "set_bmc_dhcp")

    @abstractmethod
    def get_bmc_network(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def set_bmc_network(
        self,
        ip_address: Optional[str] = None,
        subnet_mask: Optional[str] = None,
        gateway: Optional[str] = None,
        dns_primary: Optional[str] = None,
        dns_secondary: Optional[str] = None,
        hostname: Optional[str] = None,
        dhcp: bool = False,
    ) -> Any:
        pass

    def set_bmc_dhcp(self) -> Any:
        return self.set_bmc_network(dhcp=True)


# Ordered feature name -> interface
FEATURE_INTERFACES: "OrderedDict[str, Type[ABC]]" = OrderedDict(
    (interface.FEATURE, interface)
    for interface in (
        PowerInterface,
        SystemInterface,
        StorageInterface,
        VirtualMediaInterface,
        BootInterface,
        JobsInterface,
        UtilityInterface,
        NetworkInterface,
    )
)

# Operation name -> feature name, for every operation any interface declares
OPERATION_FEATURES: Dict[str, str] = {
    operation: feature
    for feature, interface in FEATURE_INTERFACES.items()
    for operation in interface.OPERATIONS
}
