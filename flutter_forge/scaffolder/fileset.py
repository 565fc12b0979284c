"""The generation output type.

A :class:`FileSet` is an ordered mapping from a relative POSIX path to the
text that should be written there.  Templates build one up and hand it back;
nothing is written to disk until the caller passes it to
:func:`flutter_forge.scaffolder.writer.write_fileset`.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterator, Mapping

from .errors import InvalidNameError


def normalize_path(path: str) -> str:
    """Normalize *path* to a clean relative POSIX path.

    Raises:
        InvalidNameError: For absolute paths, empty paths, or paths that
            climb above their base with ``..``.
    """
    raw = (path or "").replace("\\", "/")
    if not raw.strip() or raw.startswith("/"):
        raise InvalidNameError(path, "generated paths must be relative and non-empty")
    clean = posixpath.normpath(raw)
    if clean == "." or clean == ".." or clean.startswith("../"):
        raise InvalidNameError(path, "generated paths must stay inside the output root")
    return clean


class FileSet(Mapping[str, str]):
    """Ordered ``path -> content`` mapping with last-write-wins semantics.

    Adding a path that is already present replaces its content but keeps its
    original position, so merging a regenerated artifact never reorders the
    listing shown to the user.
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        if entries:
            self.update(entries)

    # -- Mapping protocol --------------------------------------------------

    def __getitem__(self, path: str) -> str:
        return self._files[normalize_path(path)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return normalize_path(path) in self._files
        except InvalidNameError:
            return False

    def __repr__(self) -> str:
        return f"FileSet({len(self)} files)"

    # -- Building ----------------------------------------------------------

    def add(self, path: str, content: str) -> None:
        """Insert or replace one file."""
        self._files[normalize_path(path)] = content

    def update(self, entries: Mapping[str, str]) -> None:
        for path, content in entries.items():
            self.add(path, content)

    def merge(self, other: Mapping[str, str]) -> "FileSet":
        """Return a new FileSet with *other* layered on top of this one."""
        merged = FileSet(self)
        merged.update(other)
        return merged

    def prefixed(self, base: str) -> "FileSet":
        """Return a copy with every path placed under *base*."""
        base = normalize_path(base)
        return FileSet({posixpath.join(base, path): content for path, content in self._files.items()})

    # -- Inspection --------------------------------------------------------

    @property
    def paths(self) -> list[str]:
        return list(self._files)

    def to_dict(self) -> dict[str, str]:
        return dict(self._files)
