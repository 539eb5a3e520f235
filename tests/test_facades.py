"""
Tests for the normalized read-model facades
"""

import pytest
from unittest.mock import Mock

from bmcbridge import Client
from bmcbridge.errors import FeatureNotSupportedError
from bmcbridge.facades import BmcInfo, PciInfo, PowerInfo, SystemInfo, ThermalInfo
from bmcbridge.repositories import AdapterRegistry

from fake_adapter import MockAdapter, PowerOnlyAdapter

CREDENTIALS = {"host": "10.0.0.5", "username": "root", "password": "calvin"}


@pytest.fixture(autouse=True)
def registry():
    saved = dict(AdapterRegistry._ADAPTERS)
    AdapterRegistry.clear()
    AdapterRegistry.register("mock", MockAdapter)
    AdapterRegistry.register("poweronly", PowerOnlyAdapter)
    yield
    AdapterRegistry.clear()
    AdapterRegistry._ADAPTERS.update(saved)


@pytest.fixture
def client():
    return Client(vendor="mock", **CREDENTIALS)


@pytest.fixture
def power_client():
    return Client(vendor="poweronly", **CREDENTIALS)


class TestSystemInfo:

    def test_fields(self, client):
        system = client.system
        assert system.service_tag == "ABC1234"
        assert system.make == "Dell Inc."
        assert system.model == "PowerEdge R650"
        assert system.serial == "CN123456"
        assert system.health == "OK"

    def test_alias_fallback(self):
        stub = Mock()
        stub.system_info.return_value = {"make": "Supermicro", "serial": "S1"}
        system = SystemInfo(stub)
        assert system.make == "Supermicro"
        assert system.serial == "S1"

    def test_first_alias_wins(self):
        stub = Mock()
        stub.system_info.return_value = {"manufacturer": "Lenovo", "make": "IBM"}
        assert SystemInfo(stub).make == "Lenovo"

    def test_system_info_fetched_once(self, client):
        system = client.system
        system.make
        system.model
        system.serial
        assert client.adapter.calls.count("system_info") == 1

    def test_collections_memoized(self, client):
        first = client.system.cpus
        assert client.system.cpus is first
        assert client.adapter.calls.count("cpus") == 1

    def test_controllers_are_normalized(self, client):
        assert client.system.controllers[0].id == "RAID.Integrated.1-1"

    def test_to_dict_has_all_keys(self, client):
        data = client.system.to_dict()
        assert list(data) == list(SystemInfo.KEYS)

    def test_strict_to_dict_propagates(self, power_client):
        with pytest.raises(FeatureNotSupportedError):
            power_client.system.to_dict()


class TestBmcInfo:

    def test_falls_back_to_system_info(self, client):
        bmc = client.bmc
        assert bmc.firmware_version == "6.10.30.00"
        assert bmc.mac_address == "aa:bb:cc:dd:ee:ff"
        assert bmc.hostname is None

    def test_dedicated_bmc_info(self):
        stub = Mock()
        stub.supports.return_value = True
        stub.bmc_info.return_value = {"bmc_firmware_version": "1.2", "ip_address": "10.0.0.5"}
        bmc = BmcInfo(stub)
        assert bmc.firmware_version == "1.2"
        assert bmc.ip_address == "10.0.0.5"
        stub.system_info.assert_not_called()

    def test_first_candidate_wins(self):
        stub = Mock()
        stub.supports.return_value = True
        stub.bmc_info.return_value = {"firmware_version": "3.0", "bmc_firmware_version": "9.9"}
        assert BmcInfo(stub).firmware_version == "3.0"

    def test_without_system_support(self, power_client):
        data = power_client.bmc.to_dict()
        assert set(data) == set(BmcInfo.KEYS)
        assert all(value is None for value in data.values())


class TestPowerInfo:

    def test_string_status_is_wrapped(self, client):
        assert client.power.state == "On"

    def test_dict_status(self, power_client):
        assert power_client.power.state == "Off"

    def test_state_alias(self):
        stub = Mock()
        stub.supports.return_value = True
        stub.power_status.return_value = {"state": "On"}
        assert PowerInfo(stub).state == "On"

    def test_state_memoized(self, client):
        client.power.state
        client.power.state
        assert client.adapter.calls.count("power_status") == 1

    def test_consumption(self, client):
        power = client.power
        assert power.usage_watts == 312
        assert power.capacity_watts == 1400
        assert power.allocated_watts is None

    def test_usage_falls_back_to_watts_operation(self):
        stub = Mock()
        stub.supports.return_value = True
        stub.power_consumption.return_value = {}
        stub.power_consumption_watts.return_value = 250
        assert PowerInfo(stub).usage_watts == 250

    def test_unsupported_fields_read_as_none(self, power_client):
        power = power_client.power
        assert power.reset_types_allowed is None
        assert power.usage_watts is None
        assert power.psus is None
        assert power.capacity_watts is None

    def test_unsupported_optional_extras_read_as_none(self):
        """Test an adapter declaring the category but not the extra"""
        stub = Mock()
        stub.supports.return_value = True
        stub.power_consumption.return_value = {}
        stub.power_consumption_watts.side_effect = FeatureNotSupportedError("power_consumption_watts", "mock")
        stub.reset_type_allowed.side_effect = FeatureNotSupportedError("reset_type_allowed", "mock")
        power = PowerInfo(stub)
        assert power.usage_watts is None
        assert power.reset_types_allowed is None
        assert power.usage_watts is None
        stub.power_consumption_watts.assert_called_once()

    def test_best_effort_to_dict(self, power_client):
        data = power_client.power.to_dict()
        assert data["state"] == "Off"
        assert data["psus"] is None
        assert data["reset_types_allowed"] is None

    def test_best_effort_to_dict_omits_failures(self):
        """Test keys whose computation fails outright are left out"""
        stub = Mock()
        stub.supports.return_value = True
        stub.power_status.return_value = "On"
        stub.psus.side_effect = RuntimeError("sensor read failed")
        data = PowerInfo(stub).to_dict()
        assert data["state"] == "On"
        assert "psus" not in data

    def test_full_to_dict(self, client):
        data = client.power.to_dict()
        assert data["reset_types_allowed"] == ["On", "ForceOff", "GracefulRestart"]
        assert data["psus"][0]["name"] == "PSU1"

    def test_actions_are_not_cached(self, client):
        client.power.off()
        client.power.off(force=True)
        client.power.restart()
        assert client.adapter.calls.count(("power_off", False)) == 1
        assert client.adapter.calls.count(("power_off", True)) == 1
        assert ("power_restart", False) in client.adapter.calls
        assert client.power.on() is True
        assert client.power.cycle() is True


class TestThermalInfo:

    def test_fans_and_temperatures(self, client):
        data = client.thermal.to_dict()
        assert data["fans"][0]["rpm"] == 5400
        assert data["temperatures"][0]["name"] == "Inlet"

    def test_memoized(self, client):
        client.thermal.fans
        client.thermal.fans
        assert client.adapter.calls.count("fans") == 1

    def test_unsupported_fields_read_as_none(self, power_client):
        thermal = power_client.thermal
        assert thermal.fans is None
        assert thermal.temperatures is None
        assert thermal.to_dict() == {"fans": None, "temperatures": None}


class TestPciInfo:

    def test_filters(self, client):
        pci = client.pci
        assert len(pci.devices) == 2
        assert [d["name"] for d in pci.mellanox_devices()] == ["ConnectX-6"]
        assert [d["name"] for d in pci.network_controllers()] == ["ConnectX-6"]
        assert pci.devices_by_manufacturer("broadcom")[0]["name"] == "PERC H755"
        assert pci.nics_with_slots[0]["pci_slot"] == "Slot 3"

    def test_manufacturer_is_literal(self, client):
        assert client.pci.devices_by_manufacturer("Mell.nox") == []


class TestMemoization:

    def test_none_is_cached(self):
        stub = Mock()
        stub.fans.return_value = None
        thermal = ThermalInfo(stub)
        assert thermal.fans is None
        assert thermal.fans is None
        stub.fans.assert_called_once()

    def test_failures_are_not_cached(self):
        stub = Mock()
        stub.fans.side_effect = [RuntimeError("busy"), ["fan"]]
        thermal = ThermalInfo(stub)
        with pytest.raises(RuntimeError):
            thermal.fans
        assert thermal.fans == ["fan"]

    def test_keys(self):
        assert PciInfo(Mock()).keys() == ["devices", "nics_with_slots"]
