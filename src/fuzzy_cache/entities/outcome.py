"""Outcome wrapper: a computation's result stored as data.

A ``Failure`` keeps the exception instance and the traceback it was raised
with, so a cached failure can be raised again later from a different call
site and look exactly like the original failure to the caller.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A computation that returned ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def replay(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A computation that raised ``error``."""

    error: Exception
    traceback: TracebackType | None = field(default=None, compare=False, repr=False)

    @property
    def is_success(self) -> bool:
        return False

    def replay(self) -> NoReturn:
        # Re-seat the original traceback so repeated replays do not keep growing it.
        raise self.error.with_traceback(self.traceback)


Outcome = Union[Success[Any], Failure]


async def capture(fn: Callable[..., Awaitable[T]], *args: Any) -> "Success[T] | Failure":
    """Call and await ``fn(*args)``, capturing its result or exception.

    Only ``Exception`` subclasses are captured. Cancellation and other
    ``BaseException``s propagate to the caller untouched.
    """
    try:
        value = await fn(*args)
    except Exception as e:
        return Failure(error=e, traceback=e.__traceback__)
    return Success(value)
