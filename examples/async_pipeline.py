"""Async pipeline example.

arun() is the asyncio flavour of run(). The map function may be a
coroutine function, which is awaited before each record moves on, and
the flush phase runs in a worker thread so the event loop stays free.
"""

import asyncio
from pathlib import Path

from buildprune import iter_source_files, prune


async def output_names(name: str) -> list[str]:
    """Look up outputs for a source, e.g. from a build manifest service."""
    await asyncio.sleep(0)
    stem = name.rsplit(".", 1)[0]
    return [f"{stem}.css", f"{stem}.css.map"]


async def main() -> None:
    stage = prune("dist", map=output_names)

    async for record in stage.arun(iter_source_files(Path("styles"), "**/*.scss")):
        print(f"Compiling {record.relative}")

    for result in stage.results:
        print(f"Removed {result.display_path}")


asyncio.run(main())
