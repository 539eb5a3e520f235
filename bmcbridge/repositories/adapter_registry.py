"""
Adapter Registry - Registry Pattern implementation.
Maps normalized vendor keys to adapter factories.

Adapters register during process initialization (usually on import of the
adapter package); the registry is read-only once clients are being built.
"""

import importlib
import logging
from typing import Callable, Dict, Optional, Set

from ..adapters.base_adapter import BaseAdapter

logger = logging.getLogger(__name__)

AdapterFactory = Callable[..., BaseAdapter]


class AdapterRegistry:
    """
    Process-wide registry of vendor adapter factories.

    Design Pattern: Factory Pattern + Registry Pattern
    A factory is any callable (usually the adapter class) that accepts the
    connection keyword options and returns an adapter instance.
    """

    # Adapter registry
    _ADAPTERS: Dict[str, AdapterFactory] = {}

    # External adapter packages are named bmcbridge_<vendor>
    PACKAGE_PREFIX = "bmcbridge_"

    @staticmethod
    def _key(vendor: str) -> str:
        return str(vendor).strip().lower()

    @classmethod
    def register(cls, vendor: str, factory: AdapterFactory):
        """
        Register an adapter factory. A later registration for the same
        vendor replaces the earlier one.

        Args:
            vendor: Vendor key
            factory: Adapter class or factory callable
        """
        key = cls._key(vendor)
        if key in cls._ADAPTERS:
            logger.info(f"Replacing adapter for vendor: {key}")
        cls._ADAPTERS[key] = factory
        logger.info(f"Registered adapter for vendor: {key}")

    @classmethod
    def lookup(cls, vendor: str) -> Optional[AdapterFactory]:
        """
        Get the factory for a vendor.

        Returns:
            Registered factory, or None
        """
        return cls._ADAPTERS.get(cls._key(vendor))

    @classmethod
    def registered_vendors(cls) -> Set[str]:
        """Get the set of registered vendor keys"""
        return set(cls._ADAPTERS.keys())

    @classmethod
    def unregister(cls, vendor: str):
        cls._ADAPTERS.pop(cls._key(vendor), None)

    @classmethod
    def clear(cls):
        """Remove every registration (initialization and tests only)"""
        cls._ADAPTERS.clear()

    @classmethod
    def package_name(cls, vendor: str) -> str:
        return f"{cls.PACKAGE_PREFIX}{cls._key(vendor)}"

    @classmethod
    def load_adapter_package(cls, vendor: str) -> bool:
        """
        Import the external adapter package for a vendor, which is expected
        to register its adapter on import.

        Args:
            vendor: Vendor key

        Returns:
            True if the package was imported, False if it is not installed

        Raises:
            Any error raised while importing an installed package
        """
        module_name = cls.package_name(vendor)
        # "acme corp." cannot name a package; the dot would read as a parent
        if not module_name.isidentifier():
            logger.debug(f"No importable adapter package name for vendor: {vendor!r}")
            return False

        try:
            importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name != module_name:
                raise
            logger.debug(f"Adapter package not installed: {module_name}")
            return False

        logger.debug(f"Loaded adapter package: {module_name}")
        return True


def register_adapter(vendor: str, factory: AdapterFactory):
    AdapterRegistry.register(vendor, factory)


def get_adapter(vendor: str) -> Optional[AdapterFactory]:
    return AdapterRegistry.lookup(vendor)


def supported_vendors() -> Set[str]:
    return AdapterRegistry.registered_vendors()
