"""Tagged success/failure values returned by the validator, codecs and service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class UnwrapError(RuntimeError):
    """Raised when ``unwrap`` is called on an ``Err``."""

    def __init__(self, error: object):
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise UnwrapError(self.error)


Result = Union[Ok[T], Err[E]]


__all__ = ["Err", "Ok", "Result", "UnwrapError"]
