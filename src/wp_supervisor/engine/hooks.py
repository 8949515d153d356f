"""Filter hooks - Explicit extension points for reported values.

Callers register callbacks against a filter name; the owning component
threads its value through every callback before returning it.

Example:
    >>> hooks = FilterRegistry()
    >>> hooks.add_filter(SERVER_IP_FILTER, lambda ip: "203.0.113.7")
    >>> hooks.apply_filters(SERVER_IP_FILTER, "10.0.0.2")
    '203.0.113.7'
"""

from dataclasses import dataclass
from typing import Any, Callable

SERVER_DATA_FILTER = "server_data"
SERVER_IP_FILTER = "server_ip"
SERVER_REQUIREMENTS_FILTER = "server_requirements"

FilterCallback = Callable[..., Any]


@dataclass
class _RegisteredFilter:
    callback: FilterCallback
    priority: int
    order: int


class FilterRegistry:
    """Registry of value filters keyed by name."""

    def __init__(self) -> None:
        self._filters: dict[str, list[_RegisteredFilter]] = {}
        self._counter = 0

    def add_filter(self, name: str, callback: FilterCallback, priority: int = 10) -> FilterCallback:
        """Register ``callback``; lower priorities run first. Returns the callback."""
        self._counter += 1
        self._filters.setdefault(name, []).append(_RegisteredFilter(callback, priority, self._counter))
        self._filters[name].sort(key=lambda f: (f.priority, f.order))
        return callback

    def remove_filter(self, name: str, callback: FilterCallback) -> bool:
        """Unregister ``callback`` from ``name``. Returns True if it was registered."""
        registered = self._filters.get(name, [])
        remaining = [f for f in registered if f.callback is not callback]
        if len(remaining) == len(registered):
            return False
        self._filters[name] = remaining
        return True

    def has_filters(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` (plus any extra ``args``) through each callback in turn."""
        for registered in self._filters.get(name, []):
            value = registered.callback(value, *args)
        return value
