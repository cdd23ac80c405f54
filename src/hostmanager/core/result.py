"""Lightweight, typed Result container for explicit success/failure returns.

Motivation
----------
Compensating actions (restoring a snapshot, re-applying the old hostname)
must never raise over the error that triggered them. They return a
``Result[T, E]`` instead, so the caller decides what to log and what to
attach to the original failure:

- `Ok(value)` / `Err(error)` variants,
- helpers: `unwrap`, `unwrap_err`, `err_or_none`.

Example
-------
>>> from hostmanager.core.result import ok, err, Result
>>> def parse_port(x: str) -> Result[int, str]:
...     return ok(int(x)) if x.isdigit() else err("not a port")
>>> parse_port("8080").unwrap()
8080
>>> parse_port("http").err_or_none()
'not a port'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

T = TypeVar("T")
E = TypeVar("E")


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    def unwrap(self) -> T:
        """Return the inner value if ``Ok``, else raise ``RuntimeError``."""
        if isinstance(self, Ok):
            return cast(Ok[T, E], self).value
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    def err_or_none(self) -> E | None:
        """Return the error value if ``Err``, else ``None``."""
        if isinstance(self, Err):
            return cast(Err[T, E], self).error
        return None


@dataclass(frozen=True)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T


@dataclass(frozen=True)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E


def ok(value: T) -> Result[T, E]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[T, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)


__all__ = ["Err", "Ok", "Result", "err", "ok"]
