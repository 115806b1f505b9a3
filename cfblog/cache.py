"""Cache for singleton site metadata."""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class SiteInfoCache(Generic[T]):
    """Holds one value for the lifetime of its owner or for ``ttl`` seconds.

    The clock is injectable so tests can expire entries without sleeping.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            ttl: Seconds a stored value stays valid; None keeps it until
                ``invalidate`` is called
            clock: Monotonic time source
        """
        self.ttl = ttl
        self._clock = clock
        self._value: Optional[T] = None
        self._stored_at: Optional[float] = None

    def get(self) -> Optional[T]:
        """Return the cached value, or None when empty or expired."""
        if self._value is None:
            return None
        if self.ttl is not None and self._clock() - self._stored_at >= self.ttl:
            self.invalidate()
            return None
        return self._value

    def set(self, value: T) -> T:
        self._value = value
        self._stored_at = self._clock()
        return value

    def invalidate(self) -> None:
        self._value = None
        self._stored_at = None
