"""
Vendor Detector - infers the BMC vendor from its Redfish discovery documents.

Detection failure is an expected outcome: every probe error is absorbed and
reported as "no vendor" (None) instead of being raised.
"""

import logging
from typing import Any, Dict, Optional

import requests

from ..config import ConnectionDefaults
from ..errors import BmcBridgeError
from ..http_client import ConnectionDescriptor, HttpClient
from ..parsers import VendorParser

logger = logging.getLogger(__name__)


class VendorDetector:
    """
    Probes a BMC and infers which vendor dialect it speaks.

    Order (first match wins):
    1. Explicit vendor field or Oem vendor key in the service root
    2. Product name matched against known vendor aliases
    3. First manager resource model/description
    4. "generic" for any reachable, well-formed Redfish service
    """

    def __init__(
        self,
        host: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        port: int = ConnectionDefaults.PORT,
        use_ssl: bool = ConnectionDefaults.USE_SSL,
        verify_ssl: bool = ConnectionDefaults.VERIFY_SSL,
        use_auth: bool = True,
        http_client: Optional[HttpClient] = None,
    ):
        """
        Initialize detector.

        Args:
            host: BMC hostname or IP
            username: BMC username
            password: BMC password
            port: BMC port
            use_ssl: Use https
            verify_ssl: Verify the BMC certificate
            use_auth: Send credentials with the probes
            http_client: Optional transport (mainly for tests)
        """
        self.host = host
        self.port = port
        self.use_auth = use_auth
        self._http = http_client or HttpClient(ConnectionDescriptor(
            host=host,
            port=port,
            use_ssl=use_ssl,
            verify_ssl=verify_ssl,
            username=username,
            password=password,
            retry_count=ConnectionDefaults.DETECT_RETRY_COUNT,
            retry_delay=ConnectionDefaults.DETECT_RETRY_DELAY,
        ))

    def detect(self) -> Optional[str]:
        """
        Detect the vendor.

        Returns:
            Normalized vendor key, "generic" for unidentified Redfish services,
            or None when the service root could not be fetched
        """
        logger.info(f"Detecting vendor for {self.host}:{self.port}...")

        service_root = self.fetch_service_root()
        if service_root is None:
            logger.warning(f"Failed to fetch service root from {self.host}:{self.port}")
            return None

        vendor = self.identify_vendor(service_root)
        logger.info(f"Detected vendor: {vendor} for {self.host}:{self.port}")
        return vendor

    def fetch_service_root(self) -> Optional[Dict[str, Any]]:
        """Fetch and decode /redfish/v1, returning None on any failure"""
        data = self._fetch_json(ConnectionDefaults.SERVICE_ROOT, timeout=ConnectionDefaults.DETECT_TIMEOUT)
        if data is not None and not isinstance(data, dict):
            logger.debug(f"Service root from {self.host} is not a JSON object")
            return None
        return data

    def identify_vendor(self, service_root: Dict[str, Any]) -> str:
        """
        Infer a vendor key from a service root document.

        Args:
            service_root: Decoded /redfish/v1 document

        Returns:
            Normalized vendor key, never None
        """
        vendor = self._explicit_vendor(service_root)
        if vendor:
            return vendor

        vendor = VendorParser.match(service_root.get("Product"))
        if vendor:
            return vendor

        managers = service_root.get("Managers")
        if isinstance(managers, dict) and managers.get("@odata.id"):
            vendor = self.detect_from_managers(managers["@odata.id"])
            if vendor:
                return vendor

        return VendorParser.GENERIC

    def detect_from_managers(self, managers_path: str) -> Optional[str]:
        """
        Look for vendor evidence in the first manager resource.

        Returns:
            Vendor key, or None if the managers give no evidence
        """
        collection = self._fetch_json(managers_path, timeout=ConnectionDefaults.DETECT_TIMEOUT)
        if not isinstance(collection, dict):
            return None

        members = collection.get("Members")
        if not isinstance(members, list) or not members:
            return None

        first = members[0] if isinstance(members[0], dict) else None
        manager_path = first.get("@odata.id") if first else None
        if not manager_path:
            return None

        # Dell names its manager iDRAC.Embedded.1
        if "idrac" in manager_path.lower():
            return "dell"

        manager = self._fetch_json(manager_path, timeout=ConnectionDefaults.DETECT_TIMEOUT)
        if not isinstance(manager, dict):
            return None

        for field in ("Model", "Description", "Manufacturer"):
            vendor = VendorParser.match(manager.get(field))
            if vendor:
                return vendor
        return None

    @staticmethod
    def _explicit_vendor(service_root: Dict[str, Any]) -> Optional[str]:
        for field in ("Vendor", "Manufacturer"):
            value = service_root.get(field)
            if isinstance(value, str) and value.strip():
                return VendorParser.normalize(value)

        oem = service_root.get("Oem")
        if isinstance(oem, dict) and oem:
            return VendorParser.normalize(next(iter(oem)))
        return None

    def _fetch_json(self, path: str, timeout: Optional[float] = None) -> Optional[Any]:
        try:
            response = self._http.get(path, auth=self.use_auth, timeout=timeout)
        except (BmcBridgeError, requests.exceptions.RequestException) as e:
            logger.debug(f"Connection failed to {self.host}:{self.port}{path} - {e}")
            return None

        if response.status_code == 401:
            logger.debug(f"Authentication failed (HTTP 401) for {path} - check username/password")
            return None
        if response.status_code == 404:
            logger.debug(f"Resource not found at {path} (HTTP 404)")
            return None
        if response.status_code != 200:
            logger.debug(f"Failed to fetch {path}: HTTP {response.status_code}")
            return None

        try:
            return HttpClient.json(response)
        except ValueError as e:
            logger.debug(f"Invalid JSON response from {self.host}{path}: {e}")
            return None


def detect_vendor(host: str, username: Optional[str] = None, password: Optional[str] = None, **options) -> Optional[str]:
    """Detect the vendor of a BMC without building a client"""
    return VendorDetector(host=host, username=username, password=password, **options).detect()
