"""Single-file component templates.

Small renderers behind ``generate usecase|widget|page|service``.  Each one
returns a one-entry :class:`FileSet` keyed by its project-relative path.
"""

from __future__ import annotations

import posixpath
from typing import Iterable

from .fileset import FileSet
from .naming import (
    canonical_snake_case,
    to_pascal_case,
    to_sentence_case,
    to_snake_case,
    validate_identifier,
    validate_name,
)
from .repository_template import relative_import

FEATURES_DIR = "lib/src/features"
CORE_DIR = "lib/src/core"
USE_CASE_BASE = "usecases/usecase.dart"


def _feature_dir(feature: str, features_dir: str) -> str:
    return posixpath.join(features_dir, canonical_snake_case(validate_name(feature, "feature name")))


def render_use_case(
    name: str,
    feature: str,
    input_type: str = "void",
    output_type: str = "void",
    *,
    features_dir: str = FEATURES_DIR,
    core_dir: str = CORE_DIR,
) -> FileSet:
    """A ``UseCase<Output, Input>`` subclass in the feature's domain layer."""
    name = to_pascal_case(validate_name(name, "use case name"))
    path = posixpath.join(
        _feature_dir(feature, features_dir), "domain/usecases", f"{to_snake_case(name)}.dart"
    )
    base = relative_import(path, posixpath.join(core_dir, USE_CASE_BASE))
    content = "\n".join([
        f"import '{base}';",
        "",
        f"/// Use case for {to_sentence_case(name)}.",
        f"class {name} extends UseCase<{output_type}, {input_type}> {{",
        f"  /// Creates a new [{name}] instance.",
        f"  const {name}();",
        "",
        "  @override",
        f"  Future<{output_type}> call({input_type} params) async {{",
        "    // TODO: Implement use case logic",
        "    throw UnimplementedError();",
        "  }",
        "}",
    ]) + "\n"
    return FileSet({path: content})


def render_widget(
    name: str,
    feature: str | None = None,
    *,
    stateful: bool = False,
    features_dir: str = FEATURES_DIR,
    core_dir: str = CORE_DIR,
) -> FileSet:
    """A stateless or stateful widget, in a feature or in ``core/widgets``."""
    name = to_pascal_case(validate_name(name, "widget name"))
    base = (
        posixpath.join(_feature_dir(feature, features_dir), "presentation/widgets")
        if feature else posixpath.join(core_dir, "widgets")
    )
    lines = ["import 'package:flutter/material.dart';", ""]
    if stateful:
        lines += [
            f"/// A stateful widget for {name}.",
            f"class {name} extends StatefulWidget {{",
            f"  /// Creates a new [{name}] instance.",
            f"  const {name}({{super.key}});",
            "",
            "  @override",
            f"  State<{name}> createState() => _{name}State();",
            "}",
            "",
            f"class _{name}State extends State<{name}> {{",
        ]
    else:
        lines += [
            f"/// A stateless widget for {name}.",
            f"class {name} extends StatelessWidget {{",
            f"  /// Creates a new [{name}] instance.",
            f"  const {name}({{super.key}});",
            "",
        ]
    lines += [
        "  @override",
        "  Widget build(BuildContext context) {",
        "    return const Placeholder();",
        "  }",
        "}",
    ]
    return FileSet({posixpath.join(base, f"{to_snake_case(name)}.dart"): "\n".join(lines) + "\n"})


def render_page(
    name: str,
    feature: str,
    *,
    include_scaffold: bool = True,
    features_dir: str = FEATURES_DIR,
) -> FileSet:
    """A ``ConsumerWidget`` page, optionally wrapped in a ``Scaffold``."""
    name = to_pascal_case(validate_name(name, "page name"))
    title = to_sentence_case(name).replace(" Page", "")
    path = posixpath.join(
        _feature_dir(feature, features_dir), "presentation/pages", f"{to_snake_case(name)}.dart"
    )
    lines = [
        "import 'package:flutter/material.dart';",
        "import 'package:flutter_riverpod/flutter_riverpod.dart';",
        "",
        f"/// Page widget for {title}.",
        f"class {name} extends ConsumerWidget {{",
        f"  /// Creates a new [{name}] instance.",
        f"  const {name}({{super.key}});",
        "",
        "  @override",
        "  Widget build(BuildContext context, WidgetRef ref) {",
    ]
    if include_scaffold:
        lines += [
            "    return Scaffold(",
            "      appBar: AppBar(",
            f"        title: const Text('{title}'),",
            "      ),",
            "      body: const Center(",
            f"        child: Text('{title}'),",
            "      ),",
            "    );",
        ]
    else:
        lines += [
            "    return const Center(",
            f"      child: Text('{title}'),",
            "    );",
        ]
    lines += ["  }", "}"]
    return FileSet({path: "\n".join(lines) + "\n"})


def render_service(
    name: str,
    methods: Iterable[str] = (),
    *,
    core_dir: str = CORE_DIR,
) -> FileSet:
    """A service class in ``core/services`` with one stub per method name."""
    name = to_pascal_case(validate_name(name, "service name"))
    method_names = list(dict.fromkeys(validate_identifier(m, "method name") for m in methods))
    lines = [
        f"/// Service for {to_sentence_case(name)}.",
        f"class {name} {{",
        f"  /// Creates a new [{name}] instance.",
        f"  const {name}();",
    ]
    for method in method_names:
        lines += [
            "",
            f"  /// {to_sentence_case(method).capitalize()}.",
            f"  Future<void> {method}() async {{",
            f"    // TODO: Implement {method}",
            "    throw UnimplementedError();",
            "  }",
        ]
    lines.append("}")
    path = posixpath.join(core_dir, "services", f"{to_snake_case(name)}.dart")
    return FileSet({path: "\n".join(lines) + "\n"})
