"""Exceptions raised by the generation engine.

Every error is raised synchronously from a template constructor or from
``generate()`` before any output is built, so callers never receive a
partial ``FileSet`` alongside an error.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all generation errors."""


class InvalidNameError(ScaffoldError):
    """Raised when a user-supplied name cannot be used as an identifier or path segment."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class ProjectNameError(InvalidNameError):
    """Raised when a project name is not a valid Dart package name."""


class MalformedFieldSpecError(ScaffoldError):
    """Raised when a ``name:type`` field specification cannot be parsed."""

    def __init__(self, spec: str, reason: str = "expected the form name:type") -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"Malformed field spec {spec!r}: {reason}")


class DuplicateFieldError(ScaffoldError):
    """Raised when two fields of one model share the same name."""

    def __init__(self, model_name: str, field_name: str) -> None:
        self.model_name = model_name
        self.field_name = field_name
        super().__init__(f"Duplicate field {field_name!r} in {model_name}")


class OutputExistsError(ScaffoldError):
    """Raised by the writer when target files exist and overwriting was not requested."""

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths
        preview = ", ".join(paths[:3])
        more = f" (+{len(paths) - 3} more)" if len(paths) > 3 else ""
        super().__init__(f"Refusing to overwrite existing files: {preview}{more}")


class UnknownMethodWarning(UserWarning):
    """Issued when a repository method is not in the catalog.

    The method is still generated, as a stub that throws ``UnimplementedError``.
    """
