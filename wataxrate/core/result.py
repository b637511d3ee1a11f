"""
Result pattern for lookups that can fail.

Lookups return either a Success holding the decoded value or a Failure
holding a typed error, so callers branch on the outcome instead of
catching exceptions.

Example:
    >>> result = await get("400 Broad St", "Seattle", "98109")
    >>> if result.is_success():
    ...     print(f"Rate: {result.unwrap().rate}")
    ... else:
    ...     print(f"Lookup failed: {result.error}")
    Rate: 0.101
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Never


@dataclass(frozen=True, slots=True)
class Success[T]:
    """
    A lookup that produced a value.

    Attributes:
        value: The success value.
    """

    value: T

    def is_success(self) -> bool:
        """Return True."""
        return True

    def is_failure(self) -> bool:
        """Return False."""
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """
    A lookup that produced an error.

    Attributes:
        error: The error value.
    """

    error: E

    def is_success(self) -> bool:
        """Return False."""
        return False

    def is_failure(self) -> bool:
        """Return True."""
        return True

    def unwrap(self) -> Never:
        """
        Refuse to produce a value.

        Raises:
            ValueError: Always, a Failure carries no value.
        """
        raise ValueError(f"Cannot unwrap Failure: {self.error}")


type Result[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Wrap a value in a Success."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Wrap an error in a Failure."""
    return Failure(error)
