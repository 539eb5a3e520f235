"""
Field lookup helpers for adapter payloads.

Adapters return dicts (string or enum-like keys) or plain objects; these
helpers read both without exception-based control flow.
"""

from typing import Any, Optional


def read_field(raw: Any, name: str) -> Any:
    """
    Read one field from an adapter payload.

    Args:
        raw: dict or object returned by an adapter
        name: Field name

    Returns:
        The value, or None if the field is absent
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw.get(name)
    return getattr(raw, name, None)


def first_present(raw: Any, *candidates: str) -> Optional[Any]:
    """
    Return the value of the first candidate field that is present and not None.

    Candidates are tried in order, so the first one always wins when it has a
    value, whatever the later candidates hold.
    """
    for name in candidates:
        value = read_field(raw, name)
        if value is not None:
            return value
    return None
