"""
Results
=======

Every public client operation returns a `Result` instead of raising.

A Result is exactly one of:

- Ok(data)   → the call succeeded; `data` may still be None (e.g. "not found"
               for a single entry, or a DELETE without a body).
- Err(error) → the call failed; `error` is a ServiceError.

Both variants unpack as an `(error, data)` pair, so callers can write:

    err, article = client.find(id=1)
    if err:
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError:
    """
    A failed API call.

    Attributes:
        message:
            Human readable description, always prefixed with "Strapi API error:".
        status:
            HTTP status code when the server answered; None for transport
            failures (connection refused, DNS, timeouts raised by httpx).
    """

    message: str
    status: Optional[int] = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the (possibly None) payload."""

    data: T

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter((None, self.data))

    def as_tuple(self) -> Tuple[None, T]:
        return (None, self.data)


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the ServiceError."""

    error: ServiceError

    @property
    def ok(self) -> bool:
        return False

    @property
    def data(self) -> None:
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.error, None))

    def as_tuple(self) -> Tuple[ServiceError, None]:
        return (self.error, None)


Result = Union[Ok[T], Err]


def api_error(detail: str, status: Optional[int] = None) -> Err:
    """Build an Err with the standard message prefix."""
    return Err(ServiceError(message=f"Strapi API error: {detail}", status=status))


__all__ = [
    "ServiceError",
    "Ok",
    "Err",
    "Result",
    "api_error",
]
