"""
Base facade - memoizing read model over a client.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple

from ..errors import FeatureNotSupportedError

logger = logging.getLogger(__name__)


class BaseFacade:
    """
    Per-client, lazily computed view of adapter data.

    Each value is computed at most once per facade; there is no invalidation.
    A strict facade propagates failures from `to_dict`, a best-effort facade
    leaves failing keys out.
    """

    KEYS: Tuple[str, ...] = ()
    STRICT = True

    def __init__(self, client):
        self.client = client
        self._cache: Dict[str, Any] = {}

    def keys(self) -> List[str]:
        return list(self.KEYS)

    def to_dict(self) -> Dict[str, Any]:
        if self.STRICT:
            return {key: getattr(self, key) for key in self.KEYS}

        data = {}
        for key in self.KEYS:
            try:
                data[key] = getattr(self, key)
            except Exception as e:
                logger.debug(f"{type(self).__name__}.{key} unavailable: {e}")
        return data

    def _memoize(self, key: str, compute: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    def _optional(self, key: str, compute: Callable[[], Any]) -> Any:
        """Memoize like `_memoize`, but an unsupported operation yields None"""
        def guarded():
            try:
                return compute()
            except FeatureNotSupportedError as e:
                logger.debug(f"{type(self).__name__}.{key} not supported: {e}")
                return None

        return self._memoize(key, guarded)
