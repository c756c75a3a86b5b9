"""Basic prune-after-build example.

This example shows the simplest usage pattern: put the prune stage in
front of your build step, let every source record flow through it, and
stale outputs are removed once the stream ends.
"""

from pathlib import Path

from buildprune import iter_source_files, prune


def compile_file(record, dest: Path) -> None:
    """Stand-in for a real compiler writing dest/<name>.js."""
    target = dest / Path(record.relative).with_suffix(".js")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"// compiled from {record.relative}\n")


src = Path("src")
dist = Path("dist")

# Each .ts source keeps its .js output; any other .js under dist is deleted.
# Files with other extensions (dist/index.html, dist/logo.png) are left alone.
stage = prune(dist, ext=".js", verbose=True)

for record in stage.run(iter_source_files(src, "**/*.ts")):
    compile_file(record, dist)

print(f"Removed {len(stage.results)} stale file(s)")

# Option 2: options mapping, e.g. loaded from a config file
# stage = prune({"dest": "dist", "ext": [".js", ".js.map"]})

# Option 3: custom mapping for outputs that do not share the source's name
# stage = prune("dist", map=lambda name: name.replace(".md", ".html"))
