"""Load-once caches shared by request handlers.

Built in :func:`lottori.create_app` and kept in ``app.extensions``. The
source files only change between deployments, so entries live until the
process restarts.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from typing import Generic, TypeVar

T = TypeVar("T")


class LazyCache(Generic[T]):
    def __init__(self, loader: Callable[[], T]) -> None:
        self._loader = loader
        self._lock = Lock()
        self._loaded = False
        self._value: T | None = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self) -> T:
        if self._loaded:
            return self._value  # type: ignore[return-value]

        with self._lock:
            if not self._loaded:
                self._value = self._loader()
                self._loaded = True
            return self._value  # type: ignore[return-value]


def draw_dataset():  # type: ignore[no-untyped-def]
    """Cached :class:`~lottori.repositories.lotto_result_repository.DrawDataset`."""

    from flask import current_app

    return current_app.extensions["draw_cache"].get()


def blog_posts() -> list[dict]:
    from flask import current_app

    return current_app.extensions["blog_cache"].get()
