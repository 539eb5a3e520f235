"""
Storage controller data model - Value Object pattern.
Immutable, normalized view of a controller returned by an adapter.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .fields import read_field


@dataclass(frozen=True, eq=False)
class Controller:
    """
    Immutable storage controller.

    Two controllers are equal when vendor and id match; every other
    attribute is descriptive.

    Attributes:
        id: Stable controller identifier
        vendor: Vendor key of the client that produced it
        name: Display name
        model: Controller model
        firmware_version: Controller firmware
        encryption_mode: Current encryption mode
        encryption_capability: Supported encryption
        controller_type: e.g. RAID, HBA
        pci_slot: PCI slot label
        status: Health / state
        drives_count: Number of attached drives
        adapter_data: Raw adapter payload, kept for unmodeled fields
        client: Owning client, used only to fetch drives and volumes
    """
    id: Optional[str]
    vendor: Optional[str] = None
    name: Optional[str] = None
    model: Optional[str] = None
    firmware_version: Optional[str] = None
    encryption_mode: Optional[str] = None
    encryption_capability: Optional[str] = None
    controller_type: Optional[str] = None
    pci_slot: Optional[str] = None
    status: Any = None
    drives_count: Optional[int] = None
    adapter_data: Any = field(default=None, repr=False)
    client: Any = field(default=None, repr=False)

    FIELDS = ("id", "name", "model", "firmware_version", "encryption_mode",
              "encryption_capability", "controller_type", "pci_slot", "status",
              "drives_count")

    @classmethod
    def from_raw(cls, client: Any, vendor: Optional[str], raw: Any) -> 'Controller':
        """Build a controller from an adapter payload (dict or object)"""
        attrs = {name: read_field(raw, name) for name in cls.FIELDS}
        return cls(vendor=vendor, adapter_data=raw, client=client, **attrs)

    def drives(self) -> List[Any]:
        return self.client.drives(self)

    def volumes(self) -> List[Any]:
        return self.client.volumes(self)

    def to_dict(self) -> dict:
        data = {name: getattr(self, name) for name in self.FIELDS}
        data["vendor"] = self.vendor
        return {k: v for k, v in data.items() if v is not None}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Controller):
            return NotImplemented
        return (str(self.vendor), self.id) == (str(other.vendor), other.id)

    def __hash__(self) -> int:
        return hash((str(self.vendor), self.id))
