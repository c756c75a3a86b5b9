"""Core domain module for buildprune.

This module contains the prune stage, its option resolution, domain models
and port definitions. Apart from the stage's flush phase, which goes through
the ports, it has no I/O dependencies and can be tested in isolation.
"""

from buildprune.core.models import DeletionResult, KeepSet, SourceFile, StageState
from buildprune.core.options import PruneOptions, resolve_options
from buildprune.core.ports import DestinationPort, ExecutorPort, PruneReporter
from buildprune.core.services import PruneStage, prune


__all__ = [
    "DeletionResult",
    "DestinationPort",
    "ExecutorPort",
    "KeepSet",
    "PruneOptions",
    "PruneReporter",
    "PruneStage",
    "SourceFile",
    "StageState",
    "prune",
    "resolve_options",
]
