"""Value-or-error results returned by controller operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Why an operation failed."""

    PRECONDITION = "precondition"  # never reached the driver
    DRIVER = "driver"  # binding raised DriverError
    RESULT_MISMATCH = "result_mismatch"  # driver answered with the wrong IO kind


@dataclass(frozen=True)
class IOResult(Generic[T]):
    """
    Outcome of a single controller operation.

    Exactly one of value/error is meaningful: a successful result has
    error=None, a failed one carries the error text and its ErrorKind.
    `applied` lists the steps of a multi-step operation that completed
    before the failure.
    """

    value: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    applied: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        """Return the value on success, otherwise `default`."""
        return self.value if self.ok else default

    @classmethod
    def success(cls, value: T) -> "IOResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        applied: Tuple[str, ...] = (),
    ) -> "IOResult[T]":
        return cls(error=message, kind=kind, applied=tuple(applied))

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class AnalogInputConfig:
    """Settings pushed to the device by a successful configure_analog()."""

    channel: int
    range_code: int
    resolution: int
    settling_time: int
