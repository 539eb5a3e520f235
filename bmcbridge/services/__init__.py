"""
Services - vendor detection and the client facade.
"""

from .vendor_detector import VendorDetector, detect_vendor
from .client import Client, connect

__all__ = ['VendorDetector', 'detect_vendor', 'Client', 'connect']
