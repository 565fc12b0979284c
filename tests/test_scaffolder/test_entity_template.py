"""Tests for EntityTemplate."""

from __future__ import annotations

import pytest

from flutter_forge.scaffolder.entity_template import (
    DEFAULT_ENTITY_FIELDS,
    EntityTemplate,
    entity_class_name,
)
from flutter_forge.scaffolder.errors import DuplicateFieldError, InvalidNameError
from flutter_forge.scaffolder.fields import FieldSpec


pytestmark = pytest.mark.unit


@pytest.fixture
def task_entity() -> str:
    """Rendered default TaskEntity module."""
    return EntityTemplate("Task").generate()


class TestEntityNames:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Task", "TaskEntity"), ("task", "TaskEntity"), ("TaskEntity", "TaskEntity"),
         ("user_profile", "UserProfileEntity")],
    )
    def test_entity_class_name(self, name: str, expected: str) -> None:
        assert entity_class_name(name) == expected

    def test_file_name(self) -> None:
        assert EntityTemplate("user_profile").file_name == "user_profile_entity.dart"

    def test_invalid_name(self) -> None:
        with pytest.raises(InvalidNameError):
            EntityTemplate("../Task")


class TestDefaultEntity:
    def test_equatable_class(self, task_entity: str) -> None:
        assert task_entity.startswith("import 'package:equatable/equatable.dart';\n")
        assert "class TaskEntity extends Equatable {" in task_entity

    def test_documentation(self, task_entity: str) -> None:
        assert "/// Entity representing a Task." in task_entity
        assert "/// This is the core business object for the task feature." in task_entity

    def test_constructor(self, task_entity: str) -> None:
        assert "    required this.id," in task_entity
        assert "    required this.name," in task_entity
        assert "    this.description," in task_entity
        assert "    required this.createdAt," in task_entity
        assert "    this.updatedAt," in task_entity
        assert "    this.isActive = true," in task_entity

    def test_field_docs(self, task_entity: str) -> None:
        assert "  /// Unique identifier for the entity.\n  final String id;" in task_entity

    def test_props_and_stringify(self, task_entity: str) -> None:
        assert (
            "List<Object?> get props => [id, name, description, createdAt, updatedAt, isActive];"
        ) in task_entity
        assert "  @override\n  bool get stringify => true;\n}" in task_entity

    def test_no_wire_format(self, task_entity: str) -> None:
        assert "JsonKey" not in task_entity
        assert "fromJson" not in task_entity
        assert "part '" not in task_entity

    def test_copy_with(self, task_entity: str) -> None:
        assert "  TaskEntity copyWith({" in task_entity
        assert "      isActive: isActive ?? this.isActive," in task_entity


class TestCustomFields:
    def test_id_prepended_when_missing(self) -> None:
        source = EntityTemplate("Tag", [FieldSpec("label", "String")]).generate()
        assert "List<Object?> get props => [id, label];" in source

    def test_id_kept_in_place(self) -> None:
        fields = [FieldSpec("label", "String"), FieldSpec("id", "String")]
        source = EntityTemplate("Tag", fields).generate()
        assert "List<Object?> get props => [label, id];" in source

    def test_duplicates_rejected(self) -> None:
        fields = [FieldSpec("id", "String"), FieldSpec("label", "String"), FieldSpec("label", "int")]
        with pytest.raises(DuplicateFieldError):
            EntityTemplate("Tag", fields)

    def test_documentation_override(self) -> None:
        source = EntityTemplate("Tag", documentation="A label.").generate()
        assert "/// A label.\nclass TagEntity extends Equatable {" in source

    def test_default_fields_have_id_first(self) -> None:
        assert DEFAULT_ENTITY_FIELDS[0].name == "id"
