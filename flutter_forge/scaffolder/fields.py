"""Field specifications for generated data classes.

A :class:`FieldSpec` describes one Dart field and knows how to project itself
into the handful of code shapes the model and entity templates need: a
freezed factory parameter, an initializing-formal constructor parameter, a
``final`` declaration, a ``copyWith`` override parameter, and so on.

Field specs are usually parsed from the compact ``name:type`` strings given on
the command line::

    title:String
    dueDate:DateTime?
    isDone:bool=false
    createdAt:DateTime@created_at
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .errors import MalformedFieldSpecError
from .naming import validate_identifier


@dataclass(frozen=True)
class FieldSpec:
    """One generated field.  Immutable once constructed."""

    name: str
    type: str
    nullable: bool = False
    default: str | None = None
    wire_key: str | None = None
    doc: str | None = None

    def __post_init__(self) -> None:
        validate_identifier(self.name, "field name")
        if not self.type or not self.type.strip():
            raise MalformedFieldSpecError(f"{self.name}:", "field type must not be empty")

    # -- Derived properties ------------------------------------------------

    @property
    def base_type(self) -> str:
        """The type without a trailing ``?``."""
        return self.type[:-1] if self.type.endswith("?") else self.type

    @property
    def is_nullable(self) -> bool:
        return self.nullable or self.type.endswith("?")

    @property
    def full_type(self) -> str:
        """The declared type, including ``?`` when nullable."""
        return f"{self.base_type}?" if self.is_nullable else self.base_type

    @property
    def json_key(self) -> str:
        """Key used on the wire: the explicit wire key, else the field name."""
        return self.wire_key or self.name

    @property
    def is_required(self) -> bool:
        """A field is required when it is neither nullable nor defaulted."""
        return not self.is_nullable and self.default is None

    # -- Renderers ---------------------------------------------------------

    def json_key_annotation(self) -> str:
        """``@JsonKey(name: '...')`` when the wire key differs, else ``""``."""
        if self.wire_key and self.wire_key != self.name:
            return f"@JsonKey(name: '{self.wire_key}')"
        return ""

    def to_factory_param(self, include_json: bool = True) -> str:
        """Render as a freezed factory parameter.

        ``@Default(false) bool isDone`` / ``required String title`` /
        ``@JsonKey(name: 'due_date') DateTime? dueDate``.
        """
        parts: list[str] = []
        if self.default is not None:
            parts.append(f"@Default({self.default})")
        if include_json and self.json_key_annotation():
            parts.append(self.json_key_annotation())
        if self.is_required:
            parts.append("required")
        parts.append(f"{self.full_type} {self.name}")
        return " ".join(parts)

    def to_initializer_param(self) -> str:
        """Render as an initializing formal: ``required this.x``, ``this.x = 0`` or ``this.x``."""
        if self.default is not None:
            return f"this.{self.name} = {self.default}"
        if self.is_nullable:
            return f"this.{self.name}"
        return f"required this.{self.name}"

    def to_declaration(self, include_json: bool = False) -> list[str]:
        """Render the ``final`` declaration, preceded by doc and annotation lines."""
        lines: list[str] = []
        if self.doc:
            lines.append(f"/// {self.doc}")
        if include_json and self.json_key_annotation():
            lines.append(self.json_key_annotation())
        lines.append(f"final {self.full_type} {self.name};")
        return lines

    def to_equality_entry(self) -> str:
        return self.name

    def to_copy_with_param(self) -> str:
        """Every ``copyWith`` parameter is optional: ``String? title``."""
        return f"{self.base_type}? {self.name}"

    def to_copy_with_assignment(self) -> str:
        return f"{self.name}: {self.name} ?? this.{self.name}"

    # -- Parsing -----------------------------------------------------------

    @classmethod
    def parse(cls, spec: str) -> "FieldSpec":
        """Parse a ``name:type`` field string.

        The full grammar is ``name:type[?][@wire_key][=default]``.  Splitting
        happens on the first ``:`` only, so ``meta:Map<String, int>`` works.

        Raises:
            MalformedFieldSpecError: If the separator is missing or either
                half is empty.
        """
        if spec is None or ":" not in spec:
            raise MalformedFieldSpecError(spec or "")
        name, _, rest = spec.partition(":")
        name = name.strip()
        rest = rest.strip()
        if not name:
            raise MalformedFieldSpecError(spec, "field name is empty")

        default: str | None = None
        if "=" in rest:
            rest, _, default = rest.partition("=")
            rest = rest.strip()
            default = default.strip()
            if not default:
                raise MalformedFieldSpecError(spec, "default value is empty")

        wire_key: str | None = None
        if "@" in rest:
            rest, _, wire_key = rest.partition("@")
            rest = rest.strip()
            wire_key = wire_key.strip()
            if not wire_key:
                raise MalformedFieldSpecError(spec, "wire key is empty")

        nullable = rest.endswith("?")
        type_name = rest[:-1].strip() if nullable else rest
        if not type_name:
            raise MalformedFieldSpecError(spec, "field type is empty")

        return cls(
            name=name,
            type=type_name,
            nullable=nullable,
            default=default,
            wire_key=wire_key,
        )


def parse_field_specs(specs: Iterable[str]) -> list[FieldSpec]:
    """Parse every string in *specs*, failing on the first malformed one."""
    return [FieldSpec.parse(spec) for spec in specs]


def find_duplicate(fields: Iterable[FieldSpec]) -> str | None:
    """Return the first field name that appears twice, or ``None``."""
    seen: set[str] = set()
    for field_spec in fields:
        if field_spec.name in seen:
            return field_spec.name
        seen.add(field_spec.name)
    return None
