"""
Parser utilities for extracting structured data from BMC documents.
"""

from .vendor_parser import VendorParser

__all__ = ['VendorParser']
