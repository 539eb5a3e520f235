"""
Vendor name parser for BMC discovery documents.

Logic:
1. Match free text (product names, manager models) against known aliases
2. Normalize explicit vendor strings through the same alias table
3. Unknown vendor strings are kept, lowercased
"""

import re
from typing import Optional, Tuple


class VendorParser:
    """
    Maps vendor names and aliases to normalized vendor keys.

    The alias table is ordered: the first vendor whose pattern matches wins.
    """

    GENERIC = "generic"

    ALIASES: Tuple[Tuple[str, "re.Pattern"], ...] = (
        ("dell", re.compile(r'dell|poweredge|idrac', re.IGNORECASE)),
        ("supermicro", re.compile(r'supermicro|smc', re.IGNORECASE)),
        ("hpe", re.compile(r'hpe|hp\s*enterprise|hewlett|proliant|ilo', re.IGNORECASE)),
        ("lenovo", re.compile(r'lenovo|thinkserver|thinksystem|xcc', re.IGNORECASE)),
        ("asrockrack", re.compile(r'asrock', re.IGNORECASE)),
    )

    # Explicit vendor fields may say just "HP"; free text is too noisy for that
    EXPLICIT_ALIASES = {
        "hp": "hpe",
    }

    KNOWN_VENDORS = tuple(name for name, _ in ALIASES) + (GENERIC,)

    @classmethod
    def match(cls, text: Optional[str]) -> Optional[str]:
        """
        Find a known vendor in free text.

        Args:
            text: Product name, model or description

        Returns:
            Normalized vendor key, or None if nothing matches
        """
        if not text or not isinstance(text, str):
            return None

        for vendor, pattern in cls.ALIASES:
            if pattern.search(text):
                return vendor
        return None

    @classmethod
    def normalize(cls, vendor: Optional[str]) -> Optional[str]:
        """
        Normalize an explicit vendor string.

        "Dell Inc." and "iDRAC" both become "dell". Unknown strings are
        returned lowercased. Normalizing a normalized key returns it unchanged.

        Args:
            vendor: Vendor string as reported by the BMC or the caller

        Returns:
            Normalized vendor key, or None for empty input
        """
        if vendor is None:
            return None

        value = str(vendor).strip().lower()
        if not value:
            return None

        if value in cls.EXPLICIT_ALIASES:
            return cls.EXPLICIT_ALIASES[value]

        return cls.match(value) or value
