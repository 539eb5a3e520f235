"""
Client - binds one BMC connection to one vendor adapter.

Design Pattern: Facade Pattern
Resolves the vendor (explicitly or through the VendorDetector), resolves the
adapter through the AdapterRegistry, and forwards vendor-neutral operations
to it.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from ..adapters.base_adapter import FEATURE_INTERFACES, OPERATION_FEATURES, BaseAdapter
from ..config import ConnectionDefaults, validate_connection_options
from ..errors import FeatureNotSupportedError, UnsupportedVendorError
from ..facades import BmcInfo, PciInfo, PowerInfo, SystemInfo, ThermalInfo
from ..models import Controller, Volume
from ..repositories import AdapterRegistry
from .vendor_detector import VendorDetector

logger = logging.getLogger(__name__)


class Client:
    """
    Vendor-neutral handle on one BMC.

    Not thread-safe: use a separate Client per concurrent session.

    Usage:
        with Client.connect(host="10.0.0.5", username="root", password="...") as bmc:
            print(bmc.power.state)
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        vendor: Optional[str] = None,
        port: int = ConnectionDefaults.PORT,
        use_ssl: bool = ConnectionDefaults.USE_SSL,
        verify_ssl: bool = ConnectionDefaults.VERIFY_SSL,
        retry_count: int = ConnectionDefaults.RETRY_COUNT,
        retry_delay: float = ConnectionDefaults.RETRY_DELAY,
        host_header: Optional[str] = None,
        detector: Optional[VendorDetector] = None,
        **options,
    ):
        """
        Build a client and its adapter.

        Args:
            host: BMC hostname or IP
            username: BMC username
            password: BMC password
            vendor: Vendor key; detected from the BMC when omitted
            port: BMC port
            use_ssl: Use https
            verify_ssl: Verify the BMC certificate
            retry_count: Transport retries after the first attempt
            retry_delay: Base backoff delay in seconds
            host_header: Optional Host header override
            detector: Optional detector to use instead of the default one
            **options: Passed through to the adapter

        Raises:
            UnsupportedVendorError: Vendor undetected or no adapter available
            ValueError: Invalid connection options
        """
        validate_connection_options(host, port, retry_count, retry_delay)

        self.host = host
        self.port = port

        if vendor is None:
            detector = detector or VendorDetector(
                host=host,
                username=username,
                password=password,
                port=port,
                use_ssl=use_ssl,
                verify_ssl=verify_ssl,
            )
            detected = detector.detect()
            if detected is None:
                raise UnsupportedVendorError(
                    f"Could not detect vendor for {host}:{port}. Please check: "
                    f"1) The host is reachable, "
                    f"2) Credentials are correct ({username}), "
                    f"3) The BMC supports Redfish API"
                )
            self._vendor = detected
            logger.info(f"Auto-detected vendor: {self._vendor}")
        else:
            self._vendor = str(vendor).strip().lower()
            if not self._vendor:
                raise UnsupportedVendorError(f"Empty vendor given for {host}:{port}")
            logger.info(f"Using specified vendor: {self._vendor}")

        factory = self._resolve_factory(self._vendor)
        self._adapter: BaseAdapter = factory(
            host=host,
            username=username,
            password=password,
            port=port,
            use_ssl=use_ssl,
            verify_ssl=verify_ssl,
            retry_count=retry_count,
            retry_delay=retry_delay,
            host_header=host_header,
            **options,
        )

        self._system: Optional[SystemInfo] = None
        self._bmc: Optional[BmcInfo] = None
        self._power: Optional[PowerInfo] = None
        self._thermal: Optional[ThermalInfo] = None
        self._pci: Optional[PciInfo] = None

    @staticmethod
    def _resolve_factory(vendor: str):
        factory = AdapterRegistry.lookup(vendor)
        if factory is None and AdapterRegistry.load_adapter_package(vendor):
            factory = AdapterRegistry.lookup(vendor)

        if factory is None:
            package = AdapterRegistry.package_name(vendor).replace("_", "-")
            raise UnsupportedVendorError(
                f"No adapter available for vendor: {vendor}. "
                f"Please install the {package} package or use a supported vendor."
            )
        return factory

    @classmethod
    @contextmanager
    def connect(cls, host: str, username: str, password: str, vendor: Optional[str] = None,
                **options) -> Iterator['Client']:
        """Build a client, log in, and always log out when the block exits"""
        client = cls(host=host, username=username, password=password, vendor=vendor, **options)
        try:
            client.login()
            yield client
        finally:
            client.logout()

    def __enter__(self) -> 'Client':
        self.login()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logout()

    # ------------------------------------------------------------------
    # Identity and capabilities
    # ------------------------------------------------------------------

    @property
    def vendor(self) -> str:
        return self._vendor

    @property
    def vendor_name(self) -> str:
        return self._vendor

    @property
    def adapter(self) -> BaseAdapter:
        return self._adapter

    @property
    def adapter_class(self) -> type:
        return type(self._adapter)

    def supports(self, feature: str) -> bool:
        """Check whether the adapter declares a feature category"""
        interface = FEATURE_INTERFACES.get(feature)
        return interface is not None and isinstance(self._adapter, interface)

    def supported_features(self) -> List[str]:
        return [feature for feature, interface in FEATURE_INTERFACES.items()
                if isinstance(self._adapter, interface)]

    def info(self) -> Dict[str, Any]:
        return {
            "vendor": self._vendor,
            "adapter": self.adapter_class.__name__,
            "features": self.supported_features(),
            "host": self._adapter.host,
            "base_url": self._adapter.base_url,
        }

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def login(self) -> Any:
        return self._adapter.login()

    def logout(self) -> Any:
        return self._adapter.logout()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _call(self, operation: str, *args, **kwargs) -> Any:
        feature = OPERATION_FEATURES[operation]
        if not self.supports(feature):
            raise FeatureNotSupportedError(operation, self._vendor)
        return getattr(self._adapter, operation)(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not defined on Client
        if name.startswith("_"):
            raise AttributeError(name)

        feature = OPERATION_FEATURES.get(name)
        if feature is not None:
            if not self.supports(feature):
                raise FeatureNotSupportedError(name, self._vendor)
            return getattr(self._adapter, name)

        if hasattr(self._adapter, name):
            return getattr(self._adapter, name)

        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # Power

    def power_status(self) -> Any:
        return self._call("power_status")

    def power_on(self) -> Any:
        return self._call("power_on")

    def power_off(self, force: bool = False) -> Any:
        return self._call("power_off", force=force)

    def power_restart(self, force: bool = False) -> Any:
        return self._call("power_restart", force=force)

    def power_cycle(self) -> Any:
        return self._call("power_cycle")

    def reset_type_allowed(self) -> List[str]:
        return self._call("reset_type_allowed")

    # System

    def system_info(self) -> Dict[str, Any]:
        return self._call("system_info")

    def cpus(self) -> List[Any]:
        return self._call("cpus")

    def memory(self) -> List[Any]:
        return self._call("memory")

    def nics(self) -> List[Any]:
        return self._call("nics")

    def fans(self) -> List[Any]:
        return self._call("fans")

    def psus(self) -> List[Any]:
        return self._call("psus")

    def temperatures(self) -> List[Any]:
        return self._call("temperatures")

    def system_health(self) -> Any:
        return self._call("system_health")

    def power_consumption(self) -> Dict[str, Any]:
        return self._call("power_consumption")

    def power_consumption_watts(self) -> Optional[float]:
        return self._call("power_consumption_watts")

    def bmc_info(self) -> Dict[str, Any]:
        return self._call("bmc_info")

    def pci_devices(self) -> List[Any]:
        return self._call("pci_devices")

    def nics_with_pci_info(self) -> List[Any]:
        return self._call("nics_with_pci_info")

    # Storage

    def storage_controllers(self) -> List[Any]:
        return self._call("storage_controllers")

    def controllers(self) -> List[Controller]:
        """
        List storage controllers as freshly built Controller objects.

        Each call builds new objects; nothing is cached across calls.
        """
        raw = self.storage_controllers() or []
        if not isinstance(raw, (list, tuple)):
            raw = [raw]
        return [Controller.from_raw(self, self._vendor, item) for item in raw]

    def drives(self, controller: Controller) -> List[Any]:
        self._check_controller(controller)
        return self._call("drives", controller)

    def volumes(self, controller: Controller) -> List[Volume]:
        self._check_controller(controller)
        raw = self._call("volumes", controller) or []
        return [item if isinstance(item, Volume) else Volume.from_raw(self, controller, item)
                for item in raw]

    def volume_drives(self, volume: Volume) -> List[Any]:
        if not isinstance(volume, Volume):
            raise TypeError(f"Volume required, got {type(volume).__name__}")
        return self._call("volume_drives", volume)

    def _check_controller(self, controller: Any):
        if not isinstance(controller, Controller):
            raise TypeError(f"Controller required, got {type(controller).__name__}")
        if controller.vendor != self._vendor:
            raise ValueError(
                f"Controller {controller.id} belongs to vendor '{controller.vendor}', "
                f"not '{self._vendor}'"
            )

    # Virtual media

    def virtual_media(self) -> List[Any]:
        return self._call("virtual_media")

    def insert_virtual_media(self, iso_url: str, device: Optional[str] = None) -> Any:
        return self._call("insert_virtual_media", iso_url, device=device)

    def eject_virtual_media(self, device: Optional[str] = None) -> Any:
        return self._call("eject_virtual_media", device=device)

    def virtual_media_status(self) -> Any:
        return self._call("virtual_media_status")

    # Boot

    def boot_options(self) -> Any:
        return self._call("boot_options")

    def set_boot_override(self, target: str, persistent: bool = False) -> Any:
        return self._call("set_boot_override", target, persistent=persistent)

    def clear_boot_override(self) -> Any:
        return self._call("clear_boot_override")

    # Jobs

    def jobs(self) -> List[Any]:
        return self._call("jobs")

    def job_status(self, job_id: str) -> Any:
        return self._call("job_status", job_id)

    def wait_for_job(self, job_id: str, timeout: int = 600) -> Any:
        return self._call("wait_for_job", job_id, timeout=timeout)

    # Utility

    def sel_log(self) -> List[Any]:
        return self._call("sel_log")

    def accounts(self) -> List[Any]:
        return self._call("accounts")

    def sessions(self) -> List[Any]:
        return self._call("sessions")

    # Network

    def get_bmc_network(self) -> Dict[str, Any]:
        return self._call("get_bmc_network")

    def set_bmc_network(self, **settings) -> Any:
        return self._call("set_bmc_network", **settings)

    # ------------------------------------------------------------------
    # Normalized facades (lazy, one per client)
    # ------------------------------------------------------------------

    @property
    def system(self) -> SystemInfo:
        if self._system is None:
            self._system = SystemInfo(self)
        return self._system

    @property
    def bmc(self) -> BmcInfo:
        if self._bmc is None:
            self._bmc = BmcInfo(self)
        return self._bmc

    @property
    def power(self) -> PowerInfo:
        if self._power is None:
            self._power = PowerInfo(self)
        return self._power

    @property
    def thermal(self) -> ThermalInfo:
        if self._thermal is None:
            self._thermal = ThermalInfo(self)
        return self._thermal

    @property
    def pci(self) -> PciInfo:
        if self._pci is None:
            self._pci = PciInfo(self)
        return self._pci

    @property
    def service_tag(self) -> Any:
        return self.system.service_tag

    def __repr__(self) -> str:
        return f"Client(host={self.host!r}, port={self.port}, vendor={self._vendor!r})"


def connect(host: str, username: str, password: str, vendor: Optional[str] = None, **options):
    """Module-level shortcut for Client.connect"""
    return Client.connect(host=host, username=username, password=password, vendor=vendor, **options)
