"""Core domain services for buildprune."""

from __future__ import annotations

import asyncio
import inspect
import os
from collections.abc import (
    AsyncIterable,
    AsyncIterator,
    Iterable,
    Iterator,
    Mapping,
)
from concurrent.futures import Future
from pathlib import Path

from buildprune.core.exceptions import (
    ConfigurationError,
    DeletionFailedError,
    EnumerationError,
    FilterError,
    MapperContractError,
    MapperExecutionError,
    StageStateError,
)
from buildprune.core.models import (
    DeletionResult,
    FileRecord,
    KeepSet,
    StageState,
    relative_name,
)
from buildprune.core.options import PruneOptions, resolve_options
from buildprune.core.ports import (
    DestinationPort,
    ExecutorPort,
    NullPruneReporter,
    PruneReporter,
)


class PruneStage:
    """Pipeline stage that forwards source records and prunes stale outputs.

    While records flow through, every destination path they map to is added
    to a keep set. Once the input ends, files under the destination that
    are not kept (and pass the filter) are deleted.

    A stage runs once: IDLE -> CONSUMING -> FLUSHING -> DONE or FAILED.
    """

    def __init__(
        self,
        options: PruneOptions,
        destination: DestinationPort,
        executor: ExecutorPort | None = None,
        reporter: PruneReporter | None = None,
    ) -> None:
        self._options = options
        self._destination = destination
        self._executor = executor
        self._reporter = reporter if reporter is not None else NullPruneReporter()
        self._keep = KeepSet()
        self._state = StageState.IDLE
        self._error: Exception | None = None
        self._results: list[DeletionResult] = []

    @classmethod
    def from_options(
        cls,
        options: PruneOptions,
        reporter: PruneReporter | None = None,
    ) -> PruneStage:
        """Create a stage with the default filesystem and thread pool adapters.

        Args:
            options: Resolved options.
            reporter: Reporter used when options.verbose is set. Defaults to
                a RichPruneReporter writing to the terminal.

        Returns:
            PruneStage deleting through FilesystemDestination, concurrently.
        """
        from buildprune.adapters.destination import FilesystemDestination
        from buildprune.adapters.executor import ThreadPoolExecutorAdapter

        if not options.verbose:
            reporter = NullPruneReporter()
        elif reporter is None:
            from buildprune.reporting import RichPruneReporter

            reporter = RichPruneReporter()

        return cls(
            options=options,
            destination=FilesystemDestination(),
            executor=ThreadPoolExecutorAdapter(),
            reporter=reporter,
        )

    @property
    def options(self) -> PruneOptions:
        """The resolved options this stage runs with."""
        return self._options

    @property
    def state(self) -> StageState:
        """Current lifecycle state."""
        return self._state

    @property
    def error(self) -> Exception | None:
        """The error that failed the stage, if it failed.

        Usually a BuildpruneError; an exception raised by the upstream
        iterable or a reporter is kept as is.
        """
        return self._error

    @property
    def keep(self) -> KeepSet:
        """Destination-relative paths claimed so far."""
        return self._keep

    @property
    def results(self) -> list[DeletionResult]:
        """Outcome of every deletion attempted by the flush phase."""
        return list(self._results)

    def run(self, items: Iterable[object]) -> Iterator[object]:
        """Forward items unchanged, then prune the destination.

        The next upstream item is only pulled once the consumer asks for
        the next output, so downstream pace governs consumption. The flush
        phase runs when items is exhausted, before the generator returns.

        Args:
            items: Upstream records. Items that are not FileRecords pass
                through without claiming anything.

        Yields:
            Each item, in receipt order.

        Raises:
            StageStateError: If the stage has already run.
            MapperError: If the map function raises or returns a bad value.
            FilterError: If the filter predicate raises.
            EnumerationError: If the destination cannot be listed.
            DeletionFailedError: If any deletion failed.
        """
        self._start()
        try:
            for item in items:
                if isinstance(item, FileRecord):
                    name = relative_name(item)
                    self._claim(self._resolve(name, self._call_mapper(name)))
                yield item
            self._flush()
        except Exception as e:
            self._fail(e)
            raise
        self._state = StageState.DONE

    async def arun(
        self, items: AsyncIterable[object] | Iterable[object]
    ) -> AsyncIterator[object]:
        """Asynchronous variant of run() for asyncio pipelines.

        Awaitable map results are awaited before the record is forwarded.
        The flush phase runs in a worker thread.

        Args:
            items: Upstream records, sync or async iterable.

        Yields:
            Each item, in receipt order.
        """
        self._start()
        try:
            async for item in _aiter(items):
                if isinstance(item, FileRecord):
                    name = relative_name(item)
                    mapped = self._call_mapper(name)
                    if isinstance(mapped, Future):
                        mapped = asyncio.wrap_future(mapped)
                    if inspect.isawaitable(mapped):
                        try:
                            mapped = await mapped
                        except Exception as e:
                            raise MapperExecutionError(
                                f"options.map failed for '{name}': {e}",
                                relative_path=name,
                                cause=e,
                            ) from e
                    self._claim(self._resolve(name, mapped))
                yield item
            await asyncio.to_thread(self._flush)
        except Exception as e:
            self._fail(e)
            raise
        self._state = StageState.DONE

    def consume(self, items: Iterable[object]) -> list[DeletionResult]:
        """Drain run() and return the deletion results.

        For hosts that only need the side effect on the destination.
        """
        for _ in self.run(items):
            pass
        return self.results

    def _start(self) -> None:
        if self._state is not StageState.IDLE:
            raise StageStateError(
                f"Prune stage for {self._options.dest} has already run "
                f"(state: {self._state.value})"
            )
        self._state = StageState.CONSUMING

    def _fail(self, error: Exception) -> None:
        self._state = StageState.FAILED
        self._error = error

    def _call_mapper(self, name: str) -> object:
        try:
            return self._options.mapper(name)
        except Exception as e:
            raise MapperExecutionError(
                f"options.map failed for '{name}': {e}",
                relative_path=name,
                cause=e,
            ) from e

    def _resolve(self, name: str, mapped: object) -> list[str]:
        """Validate a map result and return it as a list of paths."""
        if isinstance(mapped, Future):
            try:
                mapped = mapped.result()
            except Exception as e:
                raise MapperExecutionError(
                    f"options.map failed for '{name}': {e}",
                    relative_path=name,
                    cause=e,
                ) from e
        if inspect.isawaitable(mapped):
            if inspect.iscoroutine(mapped):
                mapped.close()
            raise MapperContractError(
                "options.map returned an awaitable; use arun() for async mappers",
                relative_path=name,
            )
        if isinstance(mapped, str | os.PathLike):
            mapped = [mapped]
        if not isinstance(mapped, list | tuple) or not all(
            isinstance(path, str | os.PathLike) for path in mapped
        ):
            raise MapperContractError(
                "options.map function must return a string or list of strings, "
                f"or a future that resolves to that (got {type(mapped).__name__})",
                relative_path=name,
            )
        return [os.fspath(path) for path in mapped]

    def _claim(self, paths: list[str]) -> None:
        for path in paths:
            self._keep.add(path)

    def _flush(self) -> None:
        """List candidates, filter them against the keep set, delete the rest."""
        self._state = StageState.FLUSHING
        dest = self._options.dest

        try:
            candidates = self._destination.list_files(
                dest, self._options.candidate_patterns
            )
        except EnumerationError:
            raise
        except OSError as e:
            raise EnumerationError(
                f"Could not list {dest}: {e}", dest=dest, cause=e
            ) from e

        should_delete = self._options.build_predicate(self._keep)
        deleting: list[str] = []
        for candidate in candidates:
            try:
                if should_delete(candidate):
                    deleting.append(candidate)
            except Exception as e:
                raise FilterError(
                    f"options.filter failed for '{candidate}': {e}",
                    path=candidate,
                    cause=e,
                ) from e

        self._results = self._remove_all(deleting)

        failures = [result for result in self._results if not result.success]
        if failures:
            raise DeletionFailedError(failures)

    def _remove_all(self, candidates: list[str]) -> list[DeletionResult]:
        """Attempt every deletion and collect the outcomes in candidate order."""
        if not candidates:
            return []

        if self._executor is None:
            return [self._remove(candidate) for candidate in candidates]

        results: list[DeletionResult] = []
        with self._executor as executor:
            futures = [executor.submit(self._remove, c) for c in candidates]
            for future in futures:
                result = future.result()
                assert isinstance(result, DeletionResult)
                results.append(result)
        return results

    def _remove(self, candidate: str) -> DeletionResult:
        target = self._options.dest / candidate
        display_path = _display_path(target)

        try:
            self._destination.remove(target)
        except OSError as e:
            reason = e.strerror or str(e)
            self._reporter.failed(display_path, reason)
            return DeletionResult(
                path=candidate,
                display_path=display_path,
                success=False,
                error=reason,
            )

        self._reporter.deleted(display_path)
        return DeletionResult(path=candidate, display_path=display_path, success=True)


def prune(
    dest: str | os.PathLike[str] | Mapping[str, object],
    options: Mapping[str, object] | None = None,
    /,
    **kwargs: object,
) -> PruneStage:
    """Create a prune stage for a destination directory.

    Accepts either a destination plus options, or a single options mapping
    carrying the destination under "dest". Options may be given as a
    mapping or as keyword arguments, not both.

    Args:
        dest: Destination directory, or options mapping with "dest".
        options: Options mapping (map, filter, ext, verbose).
        **kwargs: Options as keyword arguments.

    Returns:
        A PruneStage wired with the default filesystem adapters.

    Raises:
        ConfigurationError: If the arguments are invalid.

    Example:
        >>> stage = prune("dist", ext=".js", verbose=True)
        >>> for record in stage.run(records):
        ...     write(record)
    """
    if kwargs:
        if options is not None:
            raise ConfigurationError(
                "pass options either as a mapping or as keyword arguments, not both",
                option="options",
            )
        if isinstance(dest, Mapping):
            options_with_dest = {**dest, **kwargs}
            return PruneStage.from_options(resolve_options(options_with_dest))
        options = kwargs

    return PruneStage.from_options(resolve_options(dest, options))


def _display_path(target: Path) -> str:
    """Path relative to the working directory, falling back to absolute."""
    try:
        return os.path.relpath(target)
    except ValueError:
        # Different drive on Windows
        return str(target)


async def _aiter(
    items: AsyncIterable[object] | Iterable[object],
) -> AsyncIterator[object]:
    if isinstance(items, AsyncIterable):
        async for item in items:
            yield item
    else:
        for item in items:
            yield item
