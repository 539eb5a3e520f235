"""
Data models and value objects.
Immutable, normalized structures built from adapter payloads.
"""

from .controller import Controller
from .volume import Volume
from .fields import first_present, read_field

__all__ = ['Controller', 'Volume', 'first_present', 'read_field']
