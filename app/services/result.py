"""Success/failure values returned by every remote call."""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """A failed call. ``reason`` is diagnostic text for the logs, not for users."""
    reason: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[Any], Err]
