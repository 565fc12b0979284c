"""Tests for ModelTemplate.

Covers:
- The three rendering styles (freezed, equatable, plain)
- Wire-codec members and ``@JsonKey`` annotations
- Field-count invariants including the zero-field model
- Request / response / list-response variants
- Entity conversion and documentation overrides
- Duplicate and invalid names
"""

from __future__ import annotations

import re

import pytest

from flutter_forge.scaffolder.errors import DuplicateFieldError, InvalidNameError
from flutter_forge.scaffolder.fields import FieldSpec
from flutter_forge.scaffolder.model_template import ModelStyle, ModelTemplate


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class TestFreezedStyle:
    def test_structure(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate()
        assert "import 'package:freezed_annotation/freezed_annotation.dart';" in source
        assert "part 'task_model.freezed.dart';" in source
        assert "part 'task_model.g.dart';" in source
        assert "@freezed\nclass TaskModel with _$TaskModel {" in source
        assert "  const factory TaskModel({" in source
        assert "  }) = _TaskModel;" in source
        assert "  const TaskModel._();" in source

    def test_factory_parameters(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate()
        assert "    required String id," in source
        assert "    @JsonKey(name: 'due_date') DateTime? dueDate," in source
        assert "    @Default(false) bool isDone," in source

    def test_json_members(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate()
        assert "factory TaskModel.fromJson(Map<String, dynamic> json) =>" in source
        assert "_$TaskModelFromJson(json);" in source

    def test_without_json(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields, include_json=False).generate()
        assert "part 'task_model.g.dart';" not in source
        assert "fromJson" not in source
        assert "JsonKey" not in source

    def test_display_name(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate()
        assert "String get displayName => '${id}';" in source

    def test_zero_fields(self) -> None:
        source = ModelTemplate("Empty").generate()
        assert "const factory Empty() = _Empty;" in source
        assert "String get displayName => 'Empty';" in source


class TestEquatableStyle:
    def test_structure(self, task_fields) -> None:
        source = ModelTemplate(
            "TaskModel", task_fields, use_freezed=False, include_equatable=True
        ).generate()
        assert "import 'package:equatable/equatable.dart';" in source
        assert "@JsonSerializable()\nclass TaskModel extends Equatable {" in source
        assert "List<Object?> get props => [id, title, dueDate, isDone];" in source
        assert "Map<String, dynamic> toJson() => _$TaskModelToJson(this);" in source

    def test_wire_key_on_declaration(self, task_fields) -> None:
        source = ModelTemplate(
            "TaskModel", task_fields, use_freezed=False, include_equatable=True
        ).generate()
        assert "  @JsonKey(name: 'due_date')\n  final DateTime? dueDate;" in source


class TestPlainStyle:
    def test_structure(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields, use_freezed=False).generate()
        assert "class TaskModel {" in source
        assert "  const TaskModel({" in source
        assert "    required this.title," in source
        assert "    this.dueDate," in source
        assert "    this.isDone = false," in source
        assert "Equatable" not in source

    def test_to_string_lists_every_field(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields, use_freezed=False).generate()
        assert (
            "String toString() => "
            "'TaskModel(id: ${id}, title: ${title}, dueDate: ${dueDate}, isDone: ${isDone})';"
        ) in source

    def test_equality_and_hash(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields, use_freezed=False).generate()
        assert "    return other is TaskModel &&" in source
        assert "        other.isDone == isDone;" in source
        assert "int get hashCode => Object.hashAll([id, title, dueDate, isDone]);" in source

    def test_copy_with(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields, use_freezed=False).generate()
        assert "  TaskModel copyWith({" in source
        assert "    DateTime? dueDate," in source
        assert "      dueDate: dueDate ?? this.dueDate," in source

    def test_zero_fields(self) -> None:
        source = ModelTemplate("Empty", [], use_freezed=False, include_json=False).generate()
        assert "  const Empty();" in source
        assert "Empty copyWith() => const Empty();" in source
        assert "    return other is Empty;" in source
        assert "Object.hashAll([])" in source

    def test_without_json_has_no_imports(self, task_fields) -> None:
        source = ModelTemplate(
            "TaskModel", task_fields, use_freezed=False, include_json=False
        ).generate()
        assert "import" not in source
        assert source.startswith("/// Data model for TaskModel.")


class TestStyleSelection:
    @pytest.mark.parametrize(
        ("use_freezed", "include_equatable", "expected"),
        [
            (True, False, ModelStyle.FREEZED),
            (True, True, ModelStyle.FREEZED),
            (False, True, ModelStyle.EQUATABLE),
            (False, False, ModelStyle.PLAIN),
        ],
    )
    def test_style(self, use_freezed, include_equatable, expected) -> None:
        template = ModelTemplate(
            "M", use_freezed=use_freezed, include_equatable=include_equatable
        )
        assert template.style is expected

    def test_file_name(self) -> None:
        assert ModelTemplate("UserProfileModel").file_name == "user_profile_model.dart"


# ---------------------------------------------------------------------------
# Field-count invariant
# ---------------------------------------------------------------------------


class TestFieldCount:
    @pytest.mark.parametrize("count", [0, 1, 3, 7])
    def test_constructor_and_equality_match_field_count(self, count: int) -> None:
        fields = [FieldSpec(f"f{i}", "int") for i in range(count)]

        plain = ModelTemplate("M", fields, use_freezed=False, include_json=False).generate()
        assert len(re.findall(r"^    required this\.f\d+,$", plain, re.MULTILINE)) == count

        equatable = ModelTemplate(
            "M", fields, use_freezed=False, include_json=False, include_equatable=True
        ).generate()
        props = re.search(r"get props => \[(.*)\];", equatable).group(1)
        assert len([p for p in props.split(", ") if p]) == count


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TestVariants:
    def test_request_model_drops_id(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate_request_model()
        assert "class TaskModelRequest with _$TaskModelRequest {" in source
        assert "String id" not in source
        assert "required String title," in source

    def test_response_model(self, task_fields) -> None:
        source = ModelTemplate("TaskModel", task_fields).generate_response_model()
        assert "class TaskModelResponse" in source
        assert "required bool success," in source
        assert "TaskModel? data," in source
        assert "String? message," in source

    def test_list_response_model(self, task_fields) -> None:
        source = ModelTemplate(
            "TaskModel", task_fields, include_json=False
        ).generate_list_response_model()
        assert "class TaskModelListResponse" in source
        assert "required List<TaskModel> data," in source
        assert "PaginationInfo? pagination," in source
        # Variants always carry the wire codec.
        assert "_$TaskModelListResponseFromJson(json)" in source


# ---------------------------------------------------------------------------
# Entity conversion and docs
# ---------------------------------------------------------------------------


class TestEntityConversion:
    def test_from_and_to_entity(self, task_fields) -> None:
        source = ModelTemplate(
            "TaskModel",
            task_fields,
            entity_name="TaskEntity",
            entity_import="../../domain/entities/task_entity.dart",
        ).generate()
        assert "import '../../domain/entities/task_entity.dart';" in source
        assert "factory TaskModel.fromEntity(TaskEntity taskEntity) {" in source
        assert "      title: taskEntity.title," in source
        assert "  TaskEntity toEntity() {" in source
        assert "      title: title," in source

    def test_zero_field_conversion_is_const(self) -> None:
        source = ModelTemplate("EmptyModel", entity_name="EmptyEntity").generate()
        assert "factory EmptyModel.fromEntity(EmptyEntity emptyEntity) => const EmptyModel();" in source
        assert "EmptyEntity toEntity() => const EmptyEntity();" in source


class TestDocumentation:
    def test_default_doc(self) -> None:
        assert "/// Data model for TaskModel." in ModelTemplate("TaskModel").generate()

    def test_multi_line_override(self) -> None:
        source = ModelTemplate(
            "TaskModel", documentation="Line one.\n\nLine two."
        ).generate()
        assert "/// Line one.\n///\n/// Line two.\n@freezed" in source


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_duplicate_fields_rejected(self) -> None:
        fields = [FieldSpec("title", "String"), FieldSpec("title", "int")]
        with pytest.raises(DuplicateFieldError) as info:
            ModelTemplate("TaskModel", fields)
        assert info.value.field_name == "title"
        assert info.value.model_name == "TaskModel"

    @pytest.mark.parametrize("name", ["", "Task Model", "../Task"])
    def test_invalid_model_name(self, name: str) -> None:
        with pytest.raises(InvalidNameError):
            ModelTemplate(name)

    def test_keyword_field_rejected_before_rendering(self) -> None:
        with pytest.raises(InvalidNameError, match="reserved word"):
            ModelTemplate("Task", [FieldSpec.parse("class:String")], use_freezed=False)

    @pytest.mark.parametrize("name", ["class", "_TaskModel"])
    def test_keyword_or_private_model_name_rejected(self, name: str) -> None:
        with pytest.raises(InvalidNameError):
            ModelTemplate(name)
