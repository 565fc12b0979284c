"""Data model generation.

Renders one serializable Dart model class from a name and an ordered list of
:class:`~flutter_forge.scaffolder.fields.FieldSpec`.  Three rendering styles
are supported and exactly one is chosen per model:

- ``freezed``   -- ``@freezed`` value type; equality, hash and ``copyWith``
  come from code generation.
- ``equatable`` -- plain class extending ``Equatable`` with a ``props`` list.
- ``plain``     -- plain class with hand-written ``==``, ``hashCode`` and
  ``toString``.

Wire-format support (``fromJson`` / ``toJson``) goes through
``json_serializable``; fields whose wire key differs from their name carry a
``@JsonKey(name: ...)`` annotation.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from .errors import DuplicateFieldError
from .fields import FieldSpec, find_duplicate
from .naming import lower_first, to_snake_case, validate_identifier


class ModelStyle(str, Enum):
    """Rendering strategy for a model class."""
    FREEZED = "freezed"
    EQUATABLE = "equatable"
    PLAIN = "plain"


class ModelTemplate:
    """Renders a single data model module.

    Args:
        model_name: PascalCase class name, e.g. ``TaskModel``.
        fields: Fields in declaration order.  May be empty.
        use_freezed: Render a freezed value type.
        include_json: Add ``fromJson`` / ``toJson``.
        include_equatable: When not using freezed, delegate equality to
            ``Equatable`` instead of writing ``==`` and ``hashCode`` by hand.
        documentation: Class doc comment, defaults to ``Data model for X.``.
        entity_name: When given, render ``fromEntity`` / ``toEntity``
            conversions against this entity class.
        entity_import: Import URI for the entity class.

    Raises:
        InvalidNameError: If the model name is not a valid identifier.
        DuplicateFieldError: If two fields share a name.
    """

    def __init__(
        self,
        model_name: str,
        fields: Iterable[FieldSpec] | None = None,
        *,
        use_freezed: bool = True,
        include_json: bool = True,
        include_equatable: bool = False,
        documentation: str | None = None,
        entity_name: str | None = None,
        entity_import: str | None = None,
    ) -> None:
        self.model_name = validate_identifier(model_name, "model name")
        self.fields: list[FieldSpec] = list(fields or [])
        duplicate = find_duplicate(self.fields)
        if duplicate is not None:
            raise DuplicateFieldError(self.model_name, duplicate)
        self.use_freezed = use_freezed
        self.include_json = include_json
        self.include_equatable = include_equatable
        self.documentation = documentation
        if entity_name is not None:
            entity_name = validate_identifier(entity_name, "entity name")
        self.entity_name = entity_name
        self.entity_import = entity_import

    # -- Properties --------------------------------------------------------

    @property
    def style(self) -> ModelStyle:
        if self.use_freezed:
            return ModelStyle.FREEZED
        if self.include_equatable:
            return ModelStyle.EQUATABLE
        return ModelStyle.PLAIN

    @property
    def model_name_snake(self) -> str:
        return to_snake_case(self.model_name)

    @property
    def file_name(self) -> str:
        return f"{self.model_name_snake}.dart"

    # -- Generation --------------------------------------------------------

    def generate(self) -> str:
        """Render the model module for the selected style."""
        if self.style is ModelStyle.FREEZED:
            lines = self._freezed_model()
        elif self.style is ModelStyle.EQUATABLE:
            lines = self._equatable_model()
        else:
            lines = self._plain_model()
        return "\n".join(lines) + "\n"

    def generate_request_model(self) -> str:
        """Request payload variant: every field except ``id``."""
        return self._variant(
            f"{self.model_name}Request",
            [f for f in self.fields if f.name != "id"],
        ).generate()

    def generate_response_model(self) -> str:
        """Single-item API envelope: ``success``, ``data?``, ``message?``."""
        return self._variant(
            f"{self.model_name}Response",
            [
                FieldSpec("success", "bool"),
                FieldSpec("data", self.model_name, nullable=True),
                FieldSpec("message", "String", nullable=True),
            ],
        ).generate()

    def generate_list_response_model(self) -> str:
        """List API envelope: ``success``, ``data``, ``pagination?``."""
        return self._variant(
            f"{self.model_name}ListResponse",
            [
                FieldSpec("success", "bool"),
                FieldSpec("data", f"List<{self.model_name}>"),
                FieldSpec("pagination", "PaginationInfo", nullable=True),
            ],
        ).generate()

    def _variant(self, name: str, fields: list[FieldSpec]) -> "ModelTemplate":
        return ModelTemplate(
            name,
            fields,
            use_freezed=self.use_freezed,
            include_json=True,
            include_equatable=self.include_equatable,
        )

    # -- Shared pieces -----------------------------------------------------

    def _class_doc(self) -> list[str]:
        doc = self.documentation or f"Data model for {self.model_name}."
        return [f"/// {line}".rstrip() for line in doc.splitlines()]

    def _entity_import_lines(self) -> list[str]:
        if self.entity_name and self.entity_import:
            return [f"import '{self.entity_import}';"]
        return []

    def _json_members(self, *, with_to_json: bool) -> list[str]:
        if not self.include_json:
            return []
        name = self.model_name
        lines = [
            "  /// Creates a model from JSON.",
            f"  factory {name}.fromJson(Map<String, dynamic> json) =>",
            f"      _${name}FromJson(json);",
            "",
        ]
        if with_to_json:
            lines += [
                "  /// Converts this model to JSON.",
                f"  Map<String, dynamic> toJson() => _${name}ToJson(this);",
                "",
            ]
        return lines

    def _entity_members(self) -> list[str]:
        if not self.entity_name:
            return []
        name = self.model_name
        entity = self.entity_name
        var = lower_first(entity)
        if not self.fields:
            return [
                f"  /// Creates a model from a [{entity}].",
                f"  factory {name}.fromEntity({entity} {var}) => const {name}();",
                "",
                f"  /// Converts this model to a [{entity}].",
                f"  {entity} toEntity() => const {entity}();",
                "",
            ]
        lines = [
            f"  /// Creates a model from a [{entity}].",
            f"  factory {name}.fromEntity({entity} {var}) {{",
            f"    return {name}(",
        ]
        lines += [f"      {f.name}: {var}.{f.name}," for f in self.fields]
        lines += [
            "    );",
            "  }",
            "",
            f"  /// Converts this model to a [{entity}].",
            f"  {entity} toEntity() {{",
            f"    return {entity}(",
        ]
        lines += [f"      {f.name}: {f.name}," for f in self.fields]
        lines += ["    );", "  }", ""]
        return lines

    def _constructor(self) -> list[str]:
        name = self.model_name
        lines = [f"  /// Creates a new [{name}]."]
        if not self.fields:
            return lines + [f"  const {name}();", ""]
        lines.append(f"  const {name}({{")
        lines += [f"    {f.to_initializer_param()}," for f in self.fields]
        lines += ["  });", ""]
        return lines

    def _declarations(self) -> list[str]:
        lines: list[str] = []
        for f in self.fields:
            lines += [f"  {line}" for line in f.to_declaration(include_json=self.include_json)]
            lines.append("")
        return lines

    def _copy_with(self) -> list[str]:
        name = self.model_name
        lines = ["  /// Creates a copy with the given fields replaced."]
        if not self.fields:
            return lines + [f"  {name} copyWith() => const {name}();", ""]
        lines.append(f"  {name} copyWith({{")
        lines += [f"    {f.to_copy_with_param()}," for f in self.fields]
        lines += ["  }) {", f"    return {name}("]
        lines += [f"      {f.to_copy_with_assignment()}," for f in self.fields]
        lines += ["    );", "  }", ""]
        return lines

    def _json_header(self) -> list[str]:
        lines = ["import 'package:json_annotation/json_annotation.dart';"]
        lines += self._entity_import_lines()
        lines += ["", f"part '{self.model_name_snake}.g.dart';", ""]
        return lines

    def _close(self, lines: list[str]) -> list[str]:
        while lines and lines[-1] == "":
            lines.pop()
        lines.append("}")
        return lines

    # -- Styles ------------------------------------------------------------

    def _freezed_model(self) -> list[str]:
        name = self.model_name
        lines = ["import 'package:freezed_annotation/freezed_annotation.dart';"]
        lines += self._entity_import_lines()
        lines += ["", f"part '{self.model_name_snake}.freezed.dart';"]
        if self.include_json:
            lines.append(f"part '{self.model_name_snake}.g.dart';")
        lines += [
            "",
            *self._class_doc(),
            "@freezed",
            f"class {name} with _${name} {{",
            f"  /// Creates a new [{name}].",
        ]
        if self.fields:
            lines.append(f"  const factory {name}({{")
            for f in self.fields:
                if f.doc:
                    lines.append(f"    /// {f.doc}")
                lines.append(f"    {f.to_factory_param(self.include_json)},")
            lines.append(f"  }}) = _{name};")
        else:
            lines.append(f"  const factory {name}() = _{name};")
        lines += ["", f"  const {name}._();", ""]
        lines += self._json_members(with_to_json=False)
        lines += self._entity_members()
        display = "${" + self.fields[0].name + "}" if self.fields else name
        lines += [
            "  /// Returns a formatted string representation.",
            f"  String get displayName => '{display}';",
        ]
        return self._close(lines)

    def _equatable_model(self) -> list[str]:
        name = self.model_name
        lines = ["import 'package:equatable/equatable.dart';"]
        if self.include_json:
            lines += self._json_header()
        else:
            lines += self._entity_import_lines() + [""]
        lines += self._class_doc()
        if self.include_json:
            lines.append("@JsonSerializable()")
        lines.append(f"class {name} extends Equatable {{")
        lines += self._constructor()
        lines += self._declarations()
        lines += self._json_members(with_to_json=True)
        lines += self._entity_members()
        lines += self._copy_with()
        props = ", ".join(f.to_equality_entry() for f in self.fields)
        lines += ["  @override", f"  List<Object?> get props => [{props}];"]
        return self._close(lines)

    def _plain_model(self) -> list[str]:
        name = self.model_name
        lines: list[str] = []
        if self.include_json:
            lines += self._json_header()
        elif self._entity_import_lines():
            lines += self._entity_import_lines() + [""]
        lines += self._class_doc()
        if self.include_json:
            lines.append("@JsonSerializable()")
        lines.append(f"class {name} {{")
        lines += self._constructor()
        lines += self._declarations()
        lines += self._json_members(with_to_json=True)
        lines += self._entity_members()
        lines += self._copy_with()

        pairs = ", ".join(f"{f.name}: ${{{f.name}}}" for f in self.fields)
        lines += ["  @override", f"  String toString() => '{name}({pairs})';", ""]

        lines += [
            "  @override",
            "  bool operator ==(Object other) {",
            "    if (identical(this, other)) return true;",
        ]
        if self.fields:
            lines.append(f"    return other is {name} &&")
            checks = [f"other.{f.name} == {f.name}" for f in self.fields]
            for i, check in enumerate(checks):
                end = ";" if i == len(checks) - 1 else " &&"
                lines.append(f"        {check}{end}")
        else:
            lines.append(f"    return other is {name};")
        lines += ["  }", ""]

        hashed = ", ".join(f.to_equality_entry() for f in self.fields)
        lines += ["  @override", f"  int get hashCode => Object.hashAll([{hashed}]);"]
        return self._close(lines)
