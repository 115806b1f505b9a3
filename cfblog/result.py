"""Outcome of fail-open fetches."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from typing_extensions import Literal

T = TypeVar("T")


class FetchResult(BaseModel, Generic[T]):
    """Value of a fetch that never raises.

    ``status`` tells an empty upstream answer (``empty``) apart from a
    fallback value returned because the request failed (``failed``).
    """

    model_config = ConfigDict(frozen=True)

    value: T
    status: Literal["ok", "empty", "failed"]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @classmethod
    def of(cls, value: T) -> "FetchResult[T]":
        """Wrap a successful value, marking falsy values as empty."""
        return cls(value=value, status="ok" if value else "empty")

    @classmethod
    def failed(cls, fallback: T, error: Exception) -> "FetchResult[T]":
        return cls(value=fallback, status="failed", error=str(error) or type(error).__name__)
