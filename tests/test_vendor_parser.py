"""
Tests for vendor alias matching and normalization
"""

import pytest

from bmcbridge.parsers import VendorParser


@pytest.mark.parametrize("text,expected", [
    ("PowerEdge R750", "dell"),
    ("Integrated Dell Remote Access Controller", "dell"),
    ("iDRAC9", "dell"),
    ("Supermicro X12DPi", "supermicro"),
    ("SMC BMC", "supermicro"),
    ("HPE ProLiant DL380 Gen10", "hpe"),
    ("iLO 5", "hpe"),
    ("Hewlett Packard Enterprise", "hpe"),
    ("ThinkSystem SR650", "lenovo"),
    ("Lenovo XClarity Controller", "lenovo"),
    ("ASRockRack ROMED8", "asrockrack"),
    ("ASRock Rack", "asrockrack"),
])
def test_match_known_products(text, expected):
    assert VendorParser.match(text) == expected


@pytest.mark.parametrize("text", [None, "", "Redfish Service", "OpenBMC", 42])
def test_match_without_evidence(text):
    assert VendorParser.match(text) is None


@pytest.mark.parametrize("vendor,expected", [
    ("Dell Inc.", "dell"),
    ("iDRAC", "dell"),
    ("Supermicro", "supermicro"),
    ("HP", "hpe"),
    ("HPE", "hpe"),
    ("HP Enterprise", "hpe"),
    ("Hewlett Packard", "hpe"),
    ("Hewlett-Packard Enterprise", "hpe"),
    ("Lenovo", "lenovo"),
    ("ASRockRack", "asrockrack"),
    ("  Acme Compute  ", "acme compute"),
])
def test_normalize(vendor, expected):
    assert VendorParser.normalize(vendor) == expected


@pytest.mark.parametrize("vendor", list(VendorParser.KNOWN_VENDORS) + ["acme"])
def test_normalize_is_idempotent(vendor):
    """Test normalizing an already normalized key returns it unchanged"""
    once = VendorParser.normalize(vendor)
    assert once == vendor
    assert VendorParser.normalize(once) == once


def test_normalize_empty():
    assert VendorParser.normalize(None) is None
    assert VendorParser.normalize("   ") is None
