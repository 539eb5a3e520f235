"""
BMC information facade.
"""

import logging
from typing import Any, Dict

from ..errors import FeatureNotSupportedError
from ..models import first_present
from .base_facade import BaseFacade

logger = logging.getLogger(__name__)


class BmcInfo(BaseFacade):
    """
    Normalized BMC firmware and network identity.

    Reads the adapter's dedicated bmc_info when it has one, otherwise the
    bmc_* fields of system_info.
    """

    KEYS = ("license_version", "firmware_version", "redfish_version", "mac_address",
            "ip_address", "hostname", "health")
    STRICT = True

    @property
    def license_version(self) -> Any:
        return first_present(self._bmc_info(), "license_version", "bmc_license_version")

    @property
    def firmware_version(self) -> Any:
        return first_present(self._bmc_info(), "firmware_version", "bmc_firmware_version")

    @property
    def redfish_version(self) -> Any:
        return first_present(self._bmc_info(), "redfish_version")

    @property
    def mac_address(self) -> Any:
        return first_present(self._bmc_info(), "mac_address", "bmc_mac_address")

    @property
    def ip_address(self) -> Any:
        return first_present(self._bmc_info(), "ip_address", "bmc_ip_address")

    @property
    def hostname(self) -> Any:
        return first_present(self._bmc_info(), "hostname", "bmc_hostname")

    @property
    def health(self) -> Any:
        return first_present(self._bmc_info(), "health", "bmc_health")

    def _bmc_info(self) -> Dict[str, Any]:
        return self._memoize("bmc_info", self._load_bmc_info)

    def _load_bmc_info(self) -> Dict[str, Any]:
        if not self.client.supports("system"):
            return {}

        try:
            return self.client.bmc_info()
        except FeatureNotSupportedError:
            logger.debug(f"No dedicated bmc_info for {self.client.vendor}, using system_info")

        info = self.client.system_info()
        return {
            "firmware_version": first_present(info, "bmc_firmware_version", "firmware_version"),
            "license_version": first_present(info, "bmc_license_version", "license_version"),
            "redfish_version": first_present(info, "redfish_version"),
            "mac_address": first_present(info, "bmc_mac_address"),
            "ip_address": first_present(info, "bmc_ip_address"),
            "hostname": first_present(info, "bmc_hostname"),
            "health": first_present(info, "bmc_health"),
        }
