"""Deferred values: compute once on first read, cache forever."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """Memoizing wrapper around a zero-argument supplier.

    The supplier runs on the first ``get()``; every later read returns the
    cached value. If the supplier raises, the exception propagates and nothing
    is cached, so the next read calls the supplier again.

    A ``Lazy`` is itself callable, which lets one be passed anywhere a supplier
    is expected (wrapping shares the inner cache).

    First reads are not guarded. Callers generating from several threads must
    serialize the first read themselves.
    """

    __slots__ = ("_supplier", "_value")

    def __init__(self, supplier: Callable[[], T]):
        if not callable(supplier):
            msg = f"Lazy supplier must be callable, got {type(supplier).__name__}"
            raise TypeError(msg)
        self._supplier = supplier
        self._value: object = _UNSET

    @property
    def evaluated(self) -> bool:
        """True once the supplier has produced a value."""
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            self._value = self._supplier()
        return self._value  # type: ignore[return-value]

    __call__ = get

    def __repr__(self) -> str:
        if self.evaluated:
            return f"Lazy({self._value!r})"
        return "Lazy(<pending>)"
