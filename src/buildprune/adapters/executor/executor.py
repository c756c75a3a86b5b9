"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


class SynchronousExecutor:
    """Executor that runs each task immediately in the calling thread.

    Deletions then happen one after another in candidate order, which
    keeps tests deterministic.
    """

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Run fn now and return an already completed future.

        Exceptions raised by fn are stored on the future rather than
        propagated, as a thread pool would do.
        """
        future: Future[object] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def __enter__(self) -> SynchronousExecutor:
        """Enter context manager."""
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager (nothing to shut down)."""
        return None


class ThreadPoolExecutorAdapter:
    """Adapter wrapping ThreadPoolExecutor to implement ExecutorPort.

    The pool is created on enter and shut down on exit, waiting for every
    submitted deletion to settle. Without max_workers the pool size follows
    the ThreadPoolExecutor default.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        """Initialize the adapter.

        Args:
            max_workers: Maximum number of worker threads. None uses default.
        """
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Submit fn to the thread pool.

        Raises:
            RuntimeError: If called outside a with block.
        """
        if self._executor is None:
            raise RuntimeError("ThreadPoolExecutorAdapter used outside 'with' block")
        return self._executor.submit(fn, *args, **kwargs)

    def __enter__(self) -> ThreadPoolExecutorAdapter:
        """Start a fresh thread pool."""
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="buildprune-delete",
        )
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Wait for pending tasks and shut the pool down."""
        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        return None
