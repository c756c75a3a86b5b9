"""buildprune - Remove stale outputs from a build destination.

This library provides a pipeline stage that forwards source file records
unchanged, remembers which destination files they produce, and deletes
every other file under the destination once the stream ends.

Example:
    >>> from pathlib import Path
    >>> from buildprune import iter_source_files, prune
    >>> stage = prune("dist", ext=".js")
    >>> for record in stage.run(iter_source_files(Path("src"))):
    ...     compile_to(record, "dist")
"""

from buildprune.adapters.destination import FilesystemDestination
from buildprune.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from buildprune.adapters.source import iter_source_files
from buildprune.config import find_project_root, load_project_settings
from buildprune.core.exceptions import (
    BuildpruneError,
    ConfigurationError,
    DeletionFailedError,
    DestinationNotFoundError,
    EnumerationError,
    FilterError,
    MapperContractError,
    MapperError,
    MapperExecutionError,
    StageStateError,
)
from buildprune.core.models import (
    DeletionResult,
    FileRecord,
    KeepSet,
    SourceFile,
    StageState,
)
from buildprune.core.options import PruneOptions, resolve_options
from buildprune.core.ports import (
    DestinationPort,
    ExecutorPort,
    NullPruneReporter,
    PruneReporter,
)
from buildprune.core.services import PruneStage, prune
from buildprune.reporting import RichPruneReporter


__version__ = "0.3.0"

__all__ = [
    "BuildpruneError",
    "ConfigurationError",
    "DeletionFailedError",
    "DeletionResult",
    "DestinationNotFoundError",
    "DestinationPort",
    "EnumerationError",
    "ExecutorPort",
    "FileRecord",
    "FilesystemDestination",
    "FilterError",
    "KeepSet",
    "MapperContractError",
    "MapperError",
    "MapperExecutionError",
    "NullPruneReporter",
    "PruneOptions",
    "PruneReporter",
    "PruneStage",
    "RichPruneReporter",
    "StageState",
    "StageStateError",
    "SourceFile",
    "SynchronousExecutor",
    "ThreadPoolExecutorAdapter",
    "__version__",
    "find_project_root",
    "iter_source_files",
    "load_project_settings",
    "prune",
    "resolve_options",
]
