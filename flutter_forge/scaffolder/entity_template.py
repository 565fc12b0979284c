"""Domain entity generation.

Entities are the core business objects of a feature: immutable, compared by
value through ``Equatable``, and free of any wire-format concerns (those live
in the matching model).
"""

from __future__ import annotations

from typing import Iterable

from .fields import FieldSpec
from .model_template import ModelTemplate
from .naming import to_pascal_case, to_snake_case, validate_name


DEFAULT_ENTITY_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("id", "String", doc="Unique identifier for the entity."),
    FieldSpec("name", "String", doc="The name of the entity."),
    FieldSpec("description", "String", nullable=True, doc="Optional description."),
    FieldSpec("createdAt", "DateTime", wire_key="created_at", doc="When the entity was created."),
    FieldSpec(
        "updatedAt", "DateTime", nullable=True, wire_key="updated_at",
        doc="When the entity was last updated.",
    ),
    FieldSpec(
        "isActive", "bool", default="true", wire_key="is_active",
        doc="Whether the entity is active.",
    ),
)

_ID_FIELD = DEFAULT_ENTITY_FIELDS[0]


def entity_class_name(name: str) -> str:
    """``task`` -> ``TaskEntity``; names already ending in ``Entity`` are kept."""
    pascal = to_pascal_case(validate_name(name, "entity name"))
    return pascal if pascal.endswith("Entity") else f"{pascal}Entity"


class EntityTemplate(ModelTemplate):
    """Renders an ``Equatable`` entity with ``copyWith`` and ``props``.

    When *fields* is omitted the standard entity field set is used.  An
    ``id`` field is always present because repositories and local caches key
    entities by it; one is prepended when a custom field list lacks it.
    """

    def __init__(
        self,
        entity_name: str,
        fields: Iterable[FieldSpec] | None = None,
        *,
        documentation: str | None = None,
    ) -> None:
        class_name = entity_class_name(entity_name)
        field_list = list(DEFAULT_ENTITY_FIELDS) if fields is None else list(fields)
        if not any(f.name == "id" for f in field_list):
            field_list.insert(0, _ID_FIELD)
        subject = class_name[: -len("Entity")] or class_name
        super().__init__(
            class_name,
            field_list,
            use_freezed=False,
            include_json=False,
            include_equatable=True,
            documentation=documentation or (
                f"Entity representing a {subject}.\n"
                "\n"
                f"This is the core business object for the {to_snake_case(subject)} feature."
            ),
        )

    @property
    def class_name(self) -> str:
        return self.model_name

    def _equatable_model(self) -> list[str]:
        lines = super()._equatable_model()
        closing = lines.pop()
        lines += ["", "  @override", "  bool get stringify => true;", closing]
        return lines
