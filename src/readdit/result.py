# ABOUTME: Ok/Empty result type returned by every source adapter and public engine operation.
# ABOUTME: Failures degrade to Empty(reason) instead of raising across the engine boundary.

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful lookup carrying its (possibly empty) value."""

    value: T

    @property
    def is_empty(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Empty:
    """A lookup that produced nothing usable.

    The reason is for logs and the user-visible empty state; callers never
    need to inspect it to decide control flow.
    """

    reason: str = ""

    @property
    def is_empty(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Ok[T], Empty]
