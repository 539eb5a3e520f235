"""
Repositories and factories - Registry Pattern implementation.
"""

from .adapter_registry import AdapterRegistry, register_adapter, get_adapter, supported_vendors

__all__ = ['AdapterRegistry', 'register_adapter', 'get_adapter', 'supported_vendors']
