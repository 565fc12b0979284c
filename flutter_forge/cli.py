"""Command-line front-end: ``flutter-forge create`` and ``flutter-forge generate``.

The CLI builds a :class:`GenerationRequest` from its arguments, asks the
engine for the complete :class:`FileSet`, and only then writes it.  Invalid
input therefore never leaves a half-written project behind.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
import warnings
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError
from rich.prompt import Confirm

from . import __version__
from .config import ForgeConfig
from .scaffolder import (
    BUILTIN_FEATURES,
    FileSet,
    GenerationRequest,
    ScaffoldError,
    TargetKind,
    UnknownMethodWarning,
    generate,
    project_exists,
    write_fileset,
)
from .scaffolder.project_template import ArchitecturePattern, StateManagement
from .scaffolder.writer import existing_paths
from .utils import (
    create_progress,
    format_duration,
    print_error,
    print_file_tree,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flutter-forge",
        description="FlutterForge -- scaffold layered Flutter projects and features",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  flutter-forge create my_app -a clean -s riverpod -f auth -f settings\n"
            "  flutter-forge generate feature tasks\n"
            "  flutter-forge generate model Task --fields id:String title:String done:bool=false\n"
            "  flutter-forge generate repository Task -m getAll -m getById -m search\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    # -- create ------------------------------------------------------------
    create = commands.add_parser("create", help="Create a new Flutter project")
    create.add_argument("project_name", help="Project name (lowercase with underscores)")
    create.add_argument("-o", "--output", default=None, help="Parent directory (default: .)")
    create.add_argument(
        "-a", "--architecture",
        choices=[a.value for a in ArchitecturePattern], default=None,
        help="Architecture pattern (default: clean)",
    )
    create.add_argument(
        "-s", "--state",
        choices=[s.value for s in StateManagement], default=None,
        help="State management (default: riverpod)",
    )
    create.add_argument("--org", default=None, help="Organization identifier (default: com.example)")
    create.add_argument(
        "-f", "--feature", dest="features", action="append", default=[],
        help=f"Feature to include; repeatable (built in: {', '.join(BUILTIN_FEATURES)})",
    )
    create.add_argument("--no-tests", action="store_true", help="Skip test scaffolding")
    create.add_argument("--no-ci", action="store_true", help="Skip CI/CD workflows")
    create.add_argument("--force", action="store_true", help="Overwrite without asking")
    create.set_defaults(handler=_cmd_create)

    # -- generate ----------------------------------------------------------
    gen = commands.add_parser("generate", aliases=["g"], help="Generate code in the current project")
    targets = gen.add_subparsers(dest="target", metavar="TARGET", required=True)

    feature = _target(targets, "feature", "A complete feature slice")
    feature.add_argument("-p", "--path", default=None, help="Features directory (default: lib/src/features)")
    feature.add_argument("--no-repository", action="store_true", help="Skip the repository layer")
    feature.add_argument("--no-usecase", action="store_true", help="Skip use cases")
    feature.add_argument("--no-tests", action="store_true", help="Skip placeholder tests")
    feature.add_argument(
        "-e", "--entity", dest="entities", action="append", default=[],
        help="Additional entity; repeatable",
    )

    entity = _target(targets, "entity", "An Equatable domain entity")
    entity.add_argument("-f", "--feature", default=None, help="Owning feature")
    entity.add_argument("--fields", nargs="+", default=[], metavar="NAME:TYPE")

    model = _target(targets, "model", "A data model")
    model.add_argument("-f", "--feature", default=None, help="Owning feature")
    model.add_argument("--fields", nargs="+", default=[], metavar="NAME:TYPE")
    model.add_argument("--no-freezed", action="store_true", help="Plain class instead of freezed")
    model.add_argument("--no-json", action="store_true", help="Skip JSON serialization")
    model.add_argument("--equatable", action="store_true", help="Use Equatable for equality")

    repository = _target(targets, "repository", "A repository with data sources")
    repository.add_argument("-f", "--feature", default=None, help="Owning feature")
    repository.add_argument("--no-remote", action="store_true", help="Skip the remote data source")
    repository.add_argument("--no-local", action="store_true", help="Skip the local data source")
    repository.add_argument(
        "--with-entity", action="store_true",
        help="Also generate the entity (always done outside a feature)",
    )
    repository.add_argument(
        "-m", "--method", dest="methods", action="append", default=[],
        help="Repository method; repeatable (default: getAll getById create update delete)",
    )

    usecase = _target(targets, "usecase", "A single use case")
    usecase.add_argument("-f", "--feature", required=True, help="Owning feature")
    usecase.add_argument("-i", "--input", default="void", help="Input type (default: void)")
    usecase.add_argument("-o", "--output", default="void", help="Output type (default: void)")

    widget = _target(targets, "widget", "A widget")
    widget.add_argument("-f", "--feature", default=None, help="Owning feature (default: core)")
    widget.add_argument("--stateful", action="store_true", help="Generate a StatefulWidget")

    page = _target(targets, "page", "A page")
    page.add_argument("-f", "--feature", required=True, help="Owning feature")
    page.add_argument("--no-scaffold", action="store_true", help="Omit the Scaffold wrapper")

    service = _target(targets, "service", "A service class")
    service.add_argument(
        "-m", "--method", dest="methods", action="append", default=[],
        help="Service method; repeatable",
    )

    gen.set_defaults(handler=_cmd_generate)
    return parser


def _target(targets: Any, name: str, help_text: str) -> argparse.ArgumentParser:
    sub = targets.add_parser(name, help=help_text)
    sub.add_argument("name", help=f"{name.capitalize()} name")
    sub.add_argument("--force", action="store_true", help="Overwrite without asking")
    return sub


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_create(args: argparse.Namespace, config: ForgeConfig) -> int:
    updates: dict[str, Any] = {}
    if args.output is not None:
        updates["output_dir"] = args.output
    if args.org is not None:
        updates["org_identifier"] = args.org
    if args.architecture is not None:
        updates["architecture"] = args.architecture
    if args.state is not None:
        updates["state_management"] = args.state
    if args.no_tests:
        updates["include_tests"] = False
    if args.no_ci:
        updates["include_ci"] = False
    config = ForgeConfig.model_validate({**config.model_dump(), **updates})

    print_header(f"Creating {args.project_name}")
    request = GenerationRequest(
        kind=TargetKind.PROJECT,
        name=args.project_name,
        org_identifier=config.org_identifier,
        architecture=config.architecture,
        state_management=config.state_management,
        features=args.features,
        include_tests=config.include_tests,
        include_ci=config.include_ci,
    )
    started = time.perf_counter()
    files = _generate(request, config)

    target = Path(config.output_dir) / args.project_name
    if target.exists() and not target.is_dir():
        print_error(f"Error: {target} exists and is not a directory")
        return 1
    if target.exists() and any(target.iterdir()) and not args.force:
        if not Confirm.ask(f"Directory {target} already exists. Overwrite?", default=False):
            print_warning("Aborted; nothing was written.")
            return 1

    _write(files, target)
    print_summary_table(
        {
            "Project": args.project_name,
            "Location": str(target),
            "Organization": config.org_identifier,
            "Architecture": config.architecture.value,
            "State management": config.state_management.value,
            "Features": ", ".join(request.features) or "none",
            "Files": str(len(files)),
            "Time": format_duration(time.perf_counter() - started),
        },
        title="Project created",
    )
    print_success(f"Created {args.project_name}. Next steps:")
    print_success(f"  cd {target}")
    print_success("  flutter pub get")
    print_success("  dart run build_runner build --delete-conflicting-outputs")
    return 0


def _cmd_generate(args: argparse.Namespace, config: ForgeConfig) -> int:
    root = Path.cwd()
    if not project_exists(root):
        print_error(
            "No pubspec.yaml found. Run this command from the root of a Flutter project."
        )
        return 1

    if args.target == "feature" and args.path:
        config = ForgeConfig.model_validate({**config.model_dump(), "features_dir": args.path})

    print_header(f"Generating {args.target} {args.name}")
    started = time.perf_counter()
    request = _REQUEST_BUILDERS[args.target](args, config)
    files = _generate(request, config)

    clashes = existing_paths(files, root)
    if clashes and not args.force:
        print_warning(f"{len(clashes)} file(s) already exist:")
        for path in clashes:
            print_warning(f"  {path}")
        if not Confirm.ask("Overwrite them?", default=False):
            print_warning("Aborted; nothing was written.")
            return 1

    _write(files, root)
    print_summary_table(
        {
            "Target": args.target,
            "Name": args.name,
            "Files": str(len(files)),
            "Time": format_duration(time.perf_counter() - started),
        },
        title="Generated",
    )
    print_file_tree(files.paths)
    print_success(f"Generated {args.target} {args.name}.")
    return 0


def _feature_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.FEATURE,
        name=args.name,
        include_repository=not args.no_repository,
        include_use_case=not args.no_usecase,
        include_tests=config.include_tests and not args.no_tests,
        entities=args.entities,
    )


def _entity_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.ENTITY, name=args.name, feature=args.feature, fields=args.fields,
    )


def _model_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.MODEL,
        name=args.name,
        feature=args.feature,
        fields=args.fields,
        use_freezed=config.use_freezed and not args.no_freezed,
        include_json=not args.no_json,
        include_equatable=args.equatable,
    )


def _repository_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.REPOSITORY,
        name=args.name,
        feature=args.feature,
        methods=args.methods,
        include_remote=not args.no_remote,
        include_local=not args.no_local,
        include_entity=True if args.with_entity else None,
    )


def _usecase_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.USECASE,
        name=args.name,
        feature=args.feature,
        input_type=args.input,
        output_type=args.output,
    )


def _widget_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.WIDGET, name=args.name, feature=args.feature, stateful=args.stateful,
    )


def _page_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(
        kind=TargetKind.PAGE,
        name=args.name,
        feature=args.feature,
        include_scaffold=not args.no_scaffold,
    )


def _service_request(args: argparse.Namespace, config: ForgeConfig) -> GenerationRequest:
    return GenerationRequest(kind=TargetKind.SERVICE, name=args.name, methods=args.methods)


_REQUEST_BUILDERS: dict[str, Callable[[argparse.Namespace, ForgeConfig], GenerationRequest]] = {
    "feature": _feature_request,
    "entity": _entity_request,
    "model": _model_request,
    "repository": _repository_request,
    "usecase": _usecase_request,
    "widget": _widget_request,
    "page": _page_request,
    "service": _service_request,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _generate(request: GenerationRequest, config: ForgeConfig) -> FileSet:
    """Run the engine and report any unknown-method warnings."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", UnknownMethodWarning)
        files = generate(request, config)
    for warning in caught:
        if issubclass(warning.category, UnknownMethodWarning):
            print_warning(f"Warning: {warning.message}")
    return files


def _write(files: FileSet, root: Path) -> None:
    with create_progress() as progress:
        task = progress.add_task(f"Writing {len(files)} files...", total=None)
        asyncio.run(write_fileset(files, root))
        progress.update(task, description=f"Wrote {len(files)} files")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``flutter-forge`` and ``python -m flutter_forge.cli``.

    Returns:
        The process exit status: 0 on success, 1 on a generation error or a
        declined overwrite.  Usage errors exit with status 2 via argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    try:
        config = ForgeConfig.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid FORGE_* environment setting: {exc}")
        return 1

    try:
        return args.handler(args, config)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1
    except ValidationError as exc:
        print_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
