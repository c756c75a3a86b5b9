"""Error handling patterns for buildprune.

Every library error derives from BuildpruneError and carries a
recovery_hint. Catch the specific subclasses you can act on.
"""

from pathlib import Path

from buildprune import (
    BuildpruneError,
    ConfigurationError,
    DeletionFailedError,
    DestinationNotFoundError,
    MapperError,
    iter_source_files,
    prune,
)


# Option errors are raised immediately, before any input is read
try:
    prune("dist", {"map": lambda name: name, "ext": ".js"})
except ConfigurationError as e:
    print(f"Bad option {e.option!r}: {e}")


stage = prune("dist", ext=".js")
try:
    stage.consume(iter_source_files(Path("src")))
except DestinationNotFoundError as e:
    # Nothing was deleted; the destination was never listed
    print(f"Nothing to prune: {e}")
    print(f"Hint: {e.recovery_hint}")
except DeletionFailedError as e:
    # Every candidate was attempted; these are the ones that remain
    for failure in e.failures:
        print(f"Could not remove {failure.display_path}: {failure.error}")
except MapperError as e:
    print(f"Map function failed on {e.relative_path}: {e}")
except BuildpruneError as e:
    print(f"Prune failed: {e}")
    if e.recovery_hint:
        print(f"Hint: {e.recovery_hint}")

# The stage remembers how it ended
print(stage.state, stage.error)
