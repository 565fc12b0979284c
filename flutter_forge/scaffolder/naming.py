"""Case conversion and name validation.

Every template derives its class names, file names and variable names from a
single user-supplied name through the helpers below, so the same input always
yields the same identifiers across every generated file.
"""

from __future__ import annotations

import re

from .errors import InvalidNameError, ProjectNameError


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def to_snake_case(value: str) -> str:
    """Convert ``UserProfile`` to ``user_profile``.

    An underscore is inserted before every uppercase letter that is not the
    first character, then everything is lower-cased.  Already snake-cased
    input is returned unchanged.

    Examples::

        to_snake_case("UserProfile")  -> "user_profile"
        to_snake_case("user_profile") -> "user_profile"
    """
    return re.sub(r"(?<!^)([A-Z])", r"_\1", value).lower()


def to_pascal_case(value: str) -> str:
    """Convert ``user_profile`` to ``UserProfile``.

    Splits on ``_`` and upper-cases the first letter of every segment; the
    rest of each segment is left as is, so PascalCase input is unchanged.
    """
    return "".join(part[:1].upper() + part[1:] for part in value.split("_"))


def to_camel_case(value: str) -> str:
    """Convert ``user_profile`` to ``userProfile``."""
    parts = value.split("_")
    head = parts[0].lower()
    return head + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def to_sentence_case(value: str) -> str:
    """Convert ``GetUserProfile`` to ``Get User Profile``.

    Inserts a space before every interior uppercase letter.  Letters are
    not lower-cased.
    """
    return re.sub(r"(?<!^)([A-Z])", r" \1", value)


def lower_first(value: str) -> str:
    """Lower-case only the first character (``TaskEntity`` -> ``taskEntity``)."""
    return value[:1].lower() + value[1:]


def canonical_snake_case(value: str) -> str:
    """snake_case form that survives a trip through PascalCase.

    File names and class names of one feature are derived from this form, so
    ``step_2`` becomes ``step2`` and ``user_Profile`` becomes ``user_profile``
    to match what ``to_snake_case(to_pascal_case(...))`` yields for classes.
    """
    return to_snake_case(to_pascal_case(value))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_PROJECT_NAME_RE = re.compile(r"[a-z][a-z0-9_]*")
_ORG_RE = re.compile(r"[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+")

DART_RESERVED_WORDS: frozenset[str] = frozenset({
    "abstract", "as", "assert", "async", "await", "break", "case", "catch",
    "class", "const", "continue", "covariant", "default", "deferred", "do",
    "dynamic", "else", "enum", "export", "extends", "extension", "external",
    "factory", "false", "final", "finally", "for", "function", "get", "hide",
    "if", "implements", "import", "in", "interface", "is", "late", "library",
    "mixin", "new", "null", "on", "operator", "part", "required", "rethrow",
    "return", "set", "show", "static", "super", "switch", "sync", "this",
    "throw", "true", "try", "typedef", "var", "void", "while", "with", "yield",
})

# Words Dart never accepts as a field, parameter or method name.
DART_KEYWORDS: frozenset[str] = frozenset({
    "assert", "break", "case", "catch", "class", "const", "continue",
    "default", "do", "else", "enum", "extends", "false", "final", "finally",
    "for", "if", "in", "is", "new", "null", "rethrow", "return", "super",
    "switch", "this", "throw", "true", "try", "var", "void", "while", "with",
})


def validate_name(name: str, kind: str = "name") -> str:
    """Check that *name* is safe to use as an identifier and a path segment.

    Rejects empty names, path separators, ``..`` sequences and anything that
    is not an ASCII identifier, both as given and after snake-casing.

    Returns:
        The name, stripped of surrounding whitespace.

    Raises:
        InvalidNameError: If any rule is violated.
    """
    if name is None or not name.strip():
        raise InvalidNameError(name or "", f"{kind} must not be empty")
    cleaned = name.strip()
    if "/" in cleaned or "\\" in cleaned:
        raise InvalidNameError(cleaned, f"{kind} must not contain path separators")
    if ".." in cleaned:
        raise InvalidNameError(cleaned, f"{kind} must not contain '..'")
    if not _IDENTIFIER_RE.fullmatch(cleaned):
        raise InvalidNameError(cleaned, f"{kind} must be an ASCII identifier")
    snake = to_snake_case(cleaned)
    if not _IDENTIFIER_RE.fullmatch(snake) or not snake.strip("_"):
        raise InvalidNameError(cleaned, f"{kind} does not survive case conversion")
    return cleaned


def validate_identifier(name: str, kind: str = "identifier") -> str:
    """Validate a member name emitted verbatim into Dart (fields, methods).

    On top of :func:`validate_name`, rejects Dart keywords and leading
    underscores.  Private names cannot be named constructor parameters and
    collide with generated private helpers.
    """
    cleaned = validate_name(name, kind)
    if cleaned in DART_KEYWORDS:
        raise InvalidNameError(cleaned, f"{kind} is a Dart reserved word")
    if cleaned.startswith("_"):
        raise InvalidNameError(cleaned, f"{kind} must not start with '_'")
    return cleaned


def validate_project_name(name: str) -> str:
    """Validate a Dart package name (lowercase with underscores, not reserved)."""
    cleaned = validate_name(name, "project name")
    if not _PROJECT_NAME_RE.fullmatch(cleaned):
        raise ProjectNameError(
            cleaned, "project names must be lowercase with underscores"
        )
    if cleaned in DART_RESERVED_WORDS:
        raise ProjectNameError(cleaned, "project name is a Dart reserved word")
    return cleaned


def validate_org_identifier(org: str) -> str:
    """Validate a reverse-domain organization identifier such as ``com.example``."""
    cleaned = (org or "").strip()
    if not _ORG_RE.fullmatch(cleaned):
        raise InvalidNameError(
            cleaned, "organization must look like 'com.example' (lowercase, dotted)"
        )
    return cleaned
