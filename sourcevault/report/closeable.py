"""Forward-only iterators that own an external resource until closed."""

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class CloseableIterator(Generic[T]):
    """Iterator over a resource that must be released with close().

    Single pass, not restartable. Once closed, iteration stops. close() is
    idempotent.
    """

    def __init__(self, items: Iterable[T], on_close: Callable[[], None] | None = None):
        self._items: Iterator[T] = iter(items)
        self._on_close = on_close
        self.closed = False

    @classmethod
    def empty(cls) -> "CloseableIterator[T]":
        return cls(())

    def __iter__(self) -> "CloseableIterator[T]":
        return self

    def __next__(self) -> T:
        if self.closed:
            raise StopIteration
        return next(self._items)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        close_items = getattr(self._items, "close", None)
        if close_items is not None:
            close_items()
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> "CloseableIterator[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
