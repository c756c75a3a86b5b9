"""Unit tests for executor adapters."""

from __future__ import annotations

import threading

import pytest

from buildprune.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter


@pytest.mark.core
@pytest.mark.tra("Adapter.Executor.Synchronous")
@pytest.mark.tier(0)
class TestSynchronousExecutor:
    """Tests for SynchronousExecutor."""

    def test_runs_in_calling_thread(self) -> None:
        """Tasks run immediately on the caller's thread."""
        with SynchronousExecutor() as executor:
            future = executor.submit(threading.get_ident)

        assert future.done()
        assert future.result() == threading.get_ident()

    def test_passes_arguments(self) -> None:
        """Positional and keyword arguments reach the task."""
        future = SynchronousExecutor().submit(lambda a, b=0: a + b, 1, b=2)

        assert future.result() == 3

    def test_exception_is_stored_on_future(self) -> None:
        """Task exceptions surface from result(), not from submit()."""

        def fail() -> None:
            raise OSError("boom")

        future = SynchronousExecutor().submit(fail)

        with pytest.raises(OSError, match="boom"):
            future.result()


@pytest.mark.core
@pytest.mark.tra("Adapter.Executor.ThreadPool")
@pytest.mark.tier(1)
class TestThreadPoolExecutorAdapter:
    """Tests for ThreadPoolExecutorAdapter."""

    def test_runs_tasks_on_worker_threads(self) -> None:
        """Tasks run on named pool threads."""
        with ThreadPoolExecutorAdapter(max_workers=2) as executor:
            future = executor.submit(lambda: threading.current_thread().name)

        assert future.result().startswith("buildprune-delete")

    def test_exit_waits_for_pending_tasks(self) -> None:
        """Leaving the with block settles every submitted task."""
        with ThreadPoolExecutorAdapter(max_workers=4) as executor:
            futures = [executor.submit(pow, n, 2) for n in range(20)]

        assert all(f.done() for f in futures)
        assert [f.result() for f in futures] == [n * n for n in range(20)]

    def test_submit_outside_with_block_fails(self) -> None:
        """The pool only exists inside a with block."""
        with pytest.raises(RuntimeError, match="outside 'with' block"):
            ThreadPoolExecutorAdapter().submit(print)

    def test_reusable_after_exit(self) -> None:
        """Each with block starts a fresh pool."""
        adapter = ThreadPoolExecutorAdapter(max_workers=1)
        with adapter as executor:
            first = executor.submit(lambda: 1).result()
        with adapter as executor:
            second = executor.submit(lambda: 2).result()

        assert (first, second) == (1, 2)
