"""
Storage volume data model - Value Object pattern.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .controller import Controller
from .fields import first_present, read_field


def _drive_refs(raw_drives: Any) -> Tuple[Any, ...]:
    """Normalize a drive list to reference ids (e.g. @odata.id)"""
    if not raw_drives:
        return ()
    if not isinstance(raw_drives, (list, tuple)):
        raw_drives = [raw_drives]
    refs = []
    for drive in raw_drives:
        ref = first_present(drive, "@odata.id", "id") if isinstance(drive, dict) else drive
        refs.append(ref)
    return tuple(refs)


@dataclass(frozen=True, eq=False)
class Volume:
    """
    Immutable logical volume on a storage controller.

    Equality follows the owning controller's vendor and the volume id.
    """
    id: Optional[str]
    controller: Optional[Controller] = field(default=None, repr=False)
    name: Optional[str] = None
    capacity_bytes: Optional[int] = None
    raid_type: Optional[str] = None
    volume_type: Optional[str] = None
    drive_refs: Tuple[Any, ...] = ()
    encrypted: Optional[bool] = None
    lock_status: Optional[str] = None
    stripe_size: Optional[int] = None
    operation_percent_complete: Optional[int] = None
    operation_name: Optional[str] = None
    write_cache_policy: Optional[str] = None
    read_cache_policy: Optional[str] = None
    health: Any = None
    adapter_data: Any = field(default=None, repr=False)
    client: Any = field(default=None, repr=False)

    FIELDS = ("id", "name", "capacity_bytes", "raid_type", "volume_type",
              "encrypted", "lock_status", "stripe_size", "operation_percent_complete",
              "operation_name", "write_cache_policy", "read_cache_policy", "health")

    @classmethod
    def from_raw(cls, client: Any, controller: Optional[Controller], raw: Any) -> 'Volume':
        """Build a volume from an adapter payload (dict or object)"""
        attrs = {name: read_field(raw, name) for name in cls.FIELDS}
        return cls(
            controller=controller,
            drive_refs=_drive_refs(read_field(raw, "drives")),
            adapter_data=raw,
            client=client,
            **attrs,
        )

    @property
    def vendor(self) -> Optional[str]:
        return self.controller.vendor if self.controller else None

    def drives(self) -> List[Any]:
        """Fetch the drives backing this volume"""
        return self.client.volume_drives(self)

    def to_dict(self) -> dict:
        data = {name: getattr(self, name) for name in self.FIELDS}
        data["drives"] = list(self.drive_refs) or None
        return {k: v for k, v in data.items() if v is not None}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Volume):
            return NotImplemented
        return (str(self.vendor), self.id) == (str(other.vendor), other.id)

    def __hash__(self) -> int:
        return hash((str(self.vendor), self.id))
