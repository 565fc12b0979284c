"""Write a :class:`FileSet` to disk.

This is the only module of the engine that touches the filesystem.  All
checks (containment inside the root, existing files) run before the first
write, so a refused write leaves the output tree untouched.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .errors import InvalidNameError, OutputExistsError
from .fileset import FileSet


def project_exists(root: str | Path) -> bool:
    """Whether *root* already holds a Flutter project (has a ``pubspec.yaml``)."""
    return (Path(root) / "pubspec.yaml").is_file()


def existing_paths(fileset: FileSet, root: str | Path) -> list[str]:
    """Paths of *fileset* that already exist under *root*."""
    base = Path(root)
    return [path for path in fileset if (base / path).exists()]


async def write_fileset(
    fileset: FileSet,
    root: str | Path,
    *,
    overwrite: bool = True,
) -> list[Path]:
    """Write every entry of *fileset* below *root*.

    Args:
        fileset: Files to write, keyed by root-relative POSIX path.
        root: Output directory.  Created if missing.
        overwrite: When False, refuse to write if any target already exists.

    Returns:
        The absolute paths written, in FileSet order.

    Raises:
        InvalidNameError: If a path would resolve outside *root*.
        OutputExistsError: If *overwrite* is False and a target exists.
    """
    base = Path(root).resolve()
    targets: list[tuple[Path, str]] = []
    for path, content in fileset.items():
        target = (base / path).resolve()
        if not target.is_relative_to(base):
            raise InvalidNameError(path, "generated path escapes the output directory")
        targets.append((target, content))

    if not overwrite:
        clashes = existing_paths(fileset, base)
        if clashes:
            raise OutputExistsError(clashes)

    for target, content in targets:
        await asyncio.to_thread(_write_file, target, content)
    return [target for target, _ in targets]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write *content* to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
