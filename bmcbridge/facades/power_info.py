"""
Power information facade.
"""

from typing import Any, Dict, List, Optional

from ..errors import FeatureNotSupportedError
from ..models import first_present
from .base_facade import BaseFacade


class PowerInfo(BaseFacade):
    """
    Normalized power state and consumption, plus power actions.

    Best-effort: values the adapter does not support read as None.
    Actions (on/off/restart/cycle) are never cached.
    """

    KEYS = ("state", "usage_watts", "capacity_watts", "allocated_watts",
            "reset_types_allowed", "psus")
    STRICT = False

    @property
    def state(self) -> Any:
        return first_present(self._power_status(), "power_state", "state")

    @property
    def usage_watts(self) -> Optional[float]:
        watts = first_present(self._power_consumption(), "consumed_watts", "power_usage_watts")
        if watts is not None:
            return watts
        return self._optional("power_consumption_watts", self.client.power_consumption_watts)

    @property
    def capacity_watts(self) -> Optional[float]:
        return first_present(self._power_consumption(), "capacity_watts", "power_capacity_watts")

    @property
    def allocated_watts(self) -> Optional[float]:
        return first_present(self._power_consumption(), "allocated_watts", "power_allocated_watts")

    @property
    def reset_types_allowed(self) -> Optional[List[str]]:
        return self._optional("reset_types", self.client.reset_type_allowed)

    @property
    def psus(self) -> List[Any]:
        return self._optional("psus", self.client.psus)

    def on(self) -> Any:
        return self.client.power_on()

    def off(self, force: bool = False) -> Any:
        return self.client.power_off(force=force)

    def restart(self, force: bool = False) -> Any:
        return self.client.power_restart(force=force)

    def cycle(self) -> Any:
        return self.client.power_cycle()

    def _power_status(self) -> Dict[str, Any]:
        return self._memoize("power_status", self._load_power_status)

    def _load_power_status(self) -> Dict[str, Any]:
        if not self.client.supports("power"):
            return {}
        status = self.client.power_status()
        if isinstance(status, dict):
            return status
        return {"power_state": str(status) if status is not None else None}

    def _power_consumption(self) -> Dict[str, Any]:
        return self._memoize("power_consumption", self._load_power_consumption)

    def _load_power_consumption(self) -> Dict[str, Any]:
        if not self.client.supports("system"):
            return {}
        try:
            return self.client.power_consumption() or {}
        except FeatureNotSupportedError:
            return {}
