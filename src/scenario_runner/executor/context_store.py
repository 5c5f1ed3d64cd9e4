from typing import Any, Dict, List
import logging

from ..core.exceptions import ContextKeyError

logger = logging.getLogger(__name__)


class ContextStore:
    """
    Run-scoped key/value carryover between steps

    Values written by one step (a measured count, the id of a created
    entity) are read back by later steps of the same run. The engine
    clears the store when the run ends.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store data for use in later steps"""
        if key in self._data:
            logger.warning(f"Overwriting context key '{key}' ({self._data[key]!r} -> {value!r})")
        else:
            logger.debug(f"Context key '{key}' = {value!r}")
        self._data[key] = value

    def get(self, key: str) -> Any:
        """Retrieve stored data, failing when the key was never set"""
        try:
            return self._data[key]
        except KeyError:
            raise ContextKeyError(key) from None

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
