"""Reading defaults from pyproject.toml.

Projects can keep their prune options in a [tool.buildprune] table so the
CLI and scripts share them:

    [tool.buildprune]
    ext = [".js", ".js.map"]
    pattern = "**/*.ts"
    verbose = true
"""

from pathlib import Path

from buildprune import (
    find_project_root,
    iter_source_files,
    load_project_settings,
    prune,
)


# Walks up from the cwd to the directory holding pyproject.toml or .git
root = find_project_root()
settings = load_project_settings(root)

pattern = settings.pop("pattern", "**/*")
stage = prune(root / "dist", settings)
stage.consume(iter_source_files(root / "src", pattern))

print(f"Pruned {len(stage.results)} file(s) under {root / 'dist'}")
