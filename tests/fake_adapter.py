"""
In-memory adapters used by the client and facade tests
"""

import json

import requests

from bmcbridge.adapters import (
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


def make_response(status_code=200, payload=None, text=None, headers=None):
    """Build a real requests.Response without touching the network"""
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        text = json.dumps(payload)
    response._content = (text or "").encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


class MockAdapter(BaseAdapter, PowerInterface, SystemInterface, StorageInterface,
                  VirtualMediaInterface, BootInterface, JobsInterface, UtilityInterface,
                  NetworkInterface):
    """Adapter declaring every capability"""

    SYSTEM_INFO = {
        "service_tag": "ABC1234",
        "manufacturer": "Dell Inc.",
        "model": "PowerEdge R650",
        "serial_number": "CN123456",
        "bmc_firmware_version": "6.10.30.00",
        "bmc_mac_address": "aa:bb:cc:dd:ee:ff",
    }

    CONTROLLERS = [
        {"id": "RAID.Integrated.1-1", "name": "PERC H755", "model": "PERC H755 Front",
         "firmware_version": "52.16.1-4405", "drives_count": 2},
        {"id": "AHCI.Embedded.1-1", "name": "BOSS-S2"},
    ]

    def __init__(self, **options):
        super().__init__(**options)
        self.logged_in = False
        self.calls = []

    @property
    def vendor(self):
        return "mock"

    def login(self):
        self.logged_in = True
        return True

    def logout(self):
        self.logged_in = False
        return True

    # Power
    def power_status(self):
        self.calls.append("power_status")
        return "On"

    def power_on(self):
        return True

    def power_off(self, force=False):
        self.calls.append(("power_off", force))
        return True

    def power_restart(self, force=False):
        self.calls.append(("power_restart", force))
        return True

    def power_cycle(self):
        return True

    def reset_type_allowed(self):
        return ["On", "ForceOff", "GracefulRestart"]

    # System
    def system_info(self):
        self.calls.append("system_info")
        return dict(self.SYSTEM_INFO)

    def cpus(self):
        self.calls.append("cpus")
        return [{"model": "Xeon Gold 6338", "cores": 32}]

    def memory(self):
        return [{"capacity_gb": 64}]

    def nics(self):
        return [{"mac": "00:11:22:33:44:55"}]

    def fans(self):
        self.calls.append("fans")
        return [{"name": "Fan1", "rpm": 5400}]

    def psus(self):
        return [{"name": "PSU1", "watts": 1400}]

    def temperatures(self):
        return [{"name": "Inlet", "celsius": 22}]

    def system_health(self):
        return "OK"

    def power_consumption(self):
        return {"consumed_watts": 312, "power_capacity_watts": 1400}

    def pci_devices(self):
        return [
            {"name": "ConnectX-6", "manufacturer": "Mellanox Technologies", "device_class": "NetworkController"},
            {"name": "PERC H755", "manufacturer": "Broadcom", "device_class": "MassStorageController"},
        ]

    def nics_with_pci_info(self):
        return [{"mac": "00:11:22:33:44:55", "pci_slot": "Slot 3"}]

    # Storage
    def storage_controllers(self):
        return [dict(c) for c in self.CONTROLLERS]

    def drives(self, controller):
        self.calls.append(("drives", controller.id))
        return [{"id": "Disk.Bay.0", "capacity_bytes": 960197124096}]

    def volumes(self, controller):
        return [{"id": "Disk.Virtual.0", "name": "os", "raid_type": "RAID1",
                 "drives": [{"@odata.id": "/redfish/v1/Disk.Bay.0"}, {"@odata.id": "/redfish/v1/Disk.Bay.1"}]}]

    def volume_drives(self, volume):
        return list(volume.drive_refs)

    # Virtual media
    def virtual_media(self):
        return [{"device": "CD", "inserted": False}]

    def insert_virtual_media(self, iso_url, device=None):
        self.calls.append(("insert_virtual_media", iso_url, device))
        return True

    def eject_virtual_media(self, device=None):
        return True

    def virtual_media_status(self):
        return {"inserted": False}

    # Boot
    def boot_options(self):
        return {"override": "None"}

    def set_boot_override(self, target, persistent=False):
        self.calls.append(("set_boot_override", target, persistent))
        return True

    def clear_boot_override(self):
        return True

    # Jobs
    def jobs(self):
        return []

    def job_status(self, job_id):
        return {"id": job_id, "state": "Completed"}

    def wait_for_job(self, job_id, timeout=600):
        return {"id": job_id, "state": "Completed", "timeout": timeout}

    # Utility
    def sel_log(self):
        return []

    def accounts(self):
        return [{"username": "root"}]

    def sessions(self):
        return []

    # Network
    def get_bmc_network(self):
        return {"ip_address": "10.0.0.5", "dhcp": False}

    def set_bmc_network(self, ip_address=None, subnet_mask=None, gateway=None,
                        dns_primary=None, dns_secondary=None, hostname=None, dhcp=False):
        self.calls.append(("set_bmc_network", ip_address, dhcp))
        return True

    # Vendor-specific extension outside every capability interface
    def export_scp(self):
        return "<SystemConfiguration/>"


class PowerOnlyAdapter(BaseAdapter, PowerInterface):
    """Adapter that only supports power control"""

    def __init__(self, **options):
        super().__init__(**options)
        self.status = {"power_state": "Off"}

    @property
    def vendor(self):
        return "poweronly"

    def login(self):
        return True

    def logout(self):
        return True

    def power_status(self):
        return self.status

    def power_on(self):
        return True

    def power_off(self, force=False):
        return True

    def power_restart(self, force=False):
        return True

    def power_cycle(self):
        return True

    # Duck-typed method that must NOT make the adapter count as storage-capable
    def storage_controllers(self):
        return [{"id": "ghost"}]
