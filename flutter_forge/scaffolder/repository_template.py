"""Repository generation.

Renders four cooperating Dart modules for one repository:

1. the abstract repository interface, one documented signature per method;
2. the implementation, which coordinates a remote and/or a local data source
   for every method according to that method's coordination strategy;
3. the remote data source interface plus a stub implementation;
4. the local data source interface plus an in-memory implementation backed by
   a map the instance owns.

Method names come from a closed catalog (:data:`METHOD_CATALOG`).  Names
outside the catalog are still accepted; they are rendered as stubs that throw
``UnimplementedError`` and an :class:`UnknownMethodWarning` is issued.
"""

from __future__ import annotations

import posixpath
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .entity_template import EntityTemplate, entity_class_name
from .errors import UnknownMethodWarning
from .fileset import FileSet
from .naming import to_pascal_case, to_snake_case, validate_identifier, validate_name


# ---------------------------------------------------------------------------
# Method catalog
# ---------------------------------------------------------------------------


class CoordinationStrategy(str, Enum):
    """How a repository method combines its remote and local data sources."""
    READ_THROUGH = "read_through"       # remote, cache result, fall back to local
    CACHE_FIRST = "cache_first"         # local hit, else remote and cache
    WRITE_THROUGH = "write_through"     # remote, then cache what it returned
    REMOVE = "remove"                   # remote delete, then evict locally
    DELEGATE = "delegate"               # remote if present, else local
    EXISTS = "exists"                   # getById(id) != null
    BATCH_GET = "batch_get"             # sequential getById per id
    CLEAR = "clear"                     # remote deleteAll, then local clearAll
    BATCH_CREATE = "batch_create"       # sequential create per entity


@dataclass(frozen=True)
class MethodCatalogEntry:
    """Static description of one catalog method.

    ``return_type``, ``params`` and ``doc`` may contain the ``{entity}`` and
    ``{subject}`` placeholders, filled in per repository.
    """

    name: str
    return_type: str
    params: str
    doc: tuple[str, ...]
    remote: bool
    strategy: CoordinationStrategy
    call_args: str = ""
    named_params: tuple[str, ...] = ()

    def signature(self, entity: str, subject: str) -> list[str]:
        """Signature lines without indentation or a trailing ``;``."""
        return_type = _fill(self.return_type, entity, subject)
        if self.named_params:
            lines = [f"{return_type} {self.name}({{"]
            lines += [f"  {p}," for p in self.named_params]
            lines.append("})")
            return lines
        return [f"{return_type} {self.name}({_fill(self.params, entity, subject)})"]

    def doc_lines(self, entity: str, subject: str) -> list[str]:
        return [f"/// {_fill(line, entity, subject)}".rstrip() for line in self.doc]


_PAGINATION_PARAMS = (
    "required int page",
    "required int pageSize",
    "String? sortBy",
    "bool ascending = true",
)

METHOD_CATALOG: dict[str, MethodCatalogEntry] = {
    entry.name: entry
    for entry in (
        MethodCatalogEntry(
            "getAll", "Future<List<{entity}>>", "",
            ("Retrieves all {subject} entities.", "", "Returns a list of all available entities."),
            remote=True, strategy=CoordinationStrategy.READ_THROUGH,
        ),
        MethodCatalogEntry(
            "getById", "Future<{entity}?>", "String id",
            ("Retrieves a single {subject} entity by [id].", "",
             "Returns the entity if found, null otherwise."),
            remote=True, strategy=CoordinationStrategy.CACHE_FIRST, call_args="id",
        ),
        MethodCatalogEntry(
            "create", "Future<{entity}>", "{entity} entity",
            ("Creates a new {subject} entity.", "",
             "Returns the created entity with server-generated fields."),
            remote=True, strategy=CoordinationStrategy.WRITE_THROUGH, call_args="entity",
        ),
        MethodCatalogEntry(
            "update", "Future<{entity}>", "{entity} entity",
            ("Updates an existing {subject} entity.", "", "Returns the updated entity."),
            remote=True, strategy=CoordinationStrategy.WRITE_THROUGH, call_args="entity",
        ),
        MethodCatalogEntry(
            "delete", "Future<void>", "String id",
            ("Deletes a {subject} entity by [id].", "",
             "Throws an exception if the entity doesn't exist."),
            remote=True, strategy=CoordinationStrategy.REMOVE, call_args="id",
        ),
        MethodCatalogEntry(
            "search", "Future<List<{entity}>>", "String query",
            ("Searches for entities matching the [query].", "",
             "Returns a list of matching entities."),
            remote=True, strategy=CoordinationStrategy.DELEGATE, call_args="query",
        ),
        MethodCatalogEntry(
            "count", "Future<int>", "",
            ("Returns the total count of entities.",),
            remote=True, strategy=CoordinationStrategy.DELEGATE,
        ),
        MethodCatalogEntry(
            "exists", "Future<bool>", "String id",
            ("Checks if an entity with the given [id] exists.",),
            remote=False, strategy=CoordinationStrategy.EXISTS, call_args="id",
        ),
        MethodCatalogEntry(
            "getPaginated", "Future<List<{entity}>>", "",
            ("Retrieves entities with pagination.", "", "Returns a paginated list of entities."),
            remote=True, strategy=CoordinationStrategy.DELEGATE,
            call_args="page: page, pageSize: pageSize, sortBy: sortBy, ascending: ascending",
            named_params=_PAGINATION_PARAMS,
        ),
        MethodCatalogEntry(
            "getByIds", "Future<List<{entity}>>", "List<String> ids",
            ("Retrieves multiple entities by their [ids].", "",
             "Returns a list of found entities (may be fewer than requested)."),
            remote=False, strategy=CoordinationStrategy.BATCH_GET, call_args="ids",
        ),
        MethodCatalogEntry(
            "deleteAll", "Future<void>", "",
            ("Deletes all entities.", "", "Use with caution."),
            remote=True, strategy=CoordinationStrategy.CLEAR,
        ),
        MethodCatalogEntry(
            "createMany", "Future<List<{entity}>>", "List<{entity}> entities",
            ("Creates multiple entities in batch.", "", "Returns the list of created entities."),
            remote=False, strategy=CoordinationStrategy.BATCH_CREATE, call_args="entities",
        ),
    )
}

CANONICAL_METHODS: tuple[str, ...] = ("getAll", "getById", "create", "update", "delete")


def _fill(text: str, entity: str, subject: str) -> str:
    return text.replace("{entity}", entity).replace("{subject}", subject)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RepositoryLayout:
    """Directories (relative to one base) holding each repository artifact."""

    entities_dir: str
    interface_dir: str
    impl_dir: str
    datasources_dir: str

    @classmethod
    def standalone(cls) -> "RepositoryLayout":
        return cls("entities", "repositories", "repositories", "datasources")

    @classmethod
    def feature(cls) -> "RepositoryLayout":
        """Clean-architecture layout used inside a feature slice."""
        return cls("domain/entities", "domain/repositories", "data/repositories", "data/datasources")


def relative_import(from_file: str, to_file: str) -> str:
    """Relative import URI from *from_file* to *to_file* (both POSIX paths)."""
    return posixpath.relpath(to_file, posixpath.dirname(from_file) or ".")


# ---------------------------------------------------------------------------
# RepositoryTemplate
# ---------------------------------------------------------------------------


class RepositoryTemplate:
    """Renders the repository interface, implementation and data sources.

    Args:
        repository_name: PascalCase name without the ``Repository`` suffix.
        methods: Ordered method names.  Empty means the canonical five.
        include_remote: Generate and wire a remote data source.
        include_local: Generate and wire a local data source.
        entity_name: Entity class, defaults to ``<Name>Entity``.
        layout: Where each artifact lives; imports follow from it.
        include_entity: Also render the entity module.
    """

    def __init__(
        self,
        repository_name: str,
        methods: Iterable[str] | None = None,
        *,
        include_remote: bool = True,
        include_local: bool = True,
        entity_name: str | None = None,
        layout: RepositoryLayout | None = None,
        include_entity: bool = False,
    ) -> None:
        self.repository_name = to_pascal_case(validate_name(repository_name, "repository name"))
        requested = [validate_identifier(m, "method name") for m in (methods or [])]
        # Repeated names would render duplicate members.
        self.methods: list[str] = list(dict.fromkeys(requested)) or list(CANONICAL_METHODS)
        self.include_remote = include_remote
        self.include_local = include_local
        if include_entity:
            # The rendered entity class is always suffixed with ``Entity``.
            self.entity = entity_class_name(entity_name or self.repository_name)
        elif entity_name:
            self.entity = validate_identifier(entity_name, "entity name")
        else:
            self.entity = f"{self.repository_name}Entity"
        self.layout = layout or RepositoryLayout.standalone()
        self.include_entity = include_entity

        for method in self.unknown_methods:
            warnings.warn(
                f"Repository method {method!r} is not in the catalog; "
                "generating a stub that throws UnimplementedError",
                UnknownMethodWarning,
                stacklevel=2,
            )

    # -- Names and paths ---------------------------------------------------

    @property
    def snake(self) -> str:
        return to_snake_case(self.repository_name)

    @property
    def interface_name(self) -> str:
        return f"{self.repository_name}Repository"

    @property
    def impl_name(self) -> str:
        return f"{self.interface_name}Impl"

    @property
    def remote_name(self) -> str:
        return f"{self.repository_name}RemoteDataSource"

    @property
    def local_name(self) -> str:
        return f"{self.repository_name}LocalDataSource"

    @property
    def unknown_methods(self) -> list[str]:
        return [m for m in self.methods if m not in METHOD_CATALOG]

    @property
    def entity_path(self) -> str:
        return posixpath.join(self.layout.entities_dir, f"{to_snake_case(self.entity)}.dart")

    @property
    def interface_path(self) -> str:
        return posixpath.join(self.layout.interface_dir, f"{self.snake}_repository.dart")

    @property
    def impl_path(self) -> str:
        return posixpath.join(self.layout.impl_dir, f"{self.snake}_repository_impl.dart")

    @property
    def remote_path(self) -> str:
        return posixpath.join(self.layout.datasources_dir, f"{self.snake}_remote_datasource.dart")

    @property
    def local_path(self) -> str:
        return posixpath.join(self.layout.datasources_dir, f"{self.snake}_local_datasource.dart")

    # -- Generation --------------------------------------------------------

    def generate(self) -> FileSet:
        files = FileSet()
        if self.include_entity:
            files.add(self.entity_path, EntityTemplate(self.entity).generate())
        files.add(self.interface_path, self.generate_interface())
        files.add(self.impl_path, self.generate_impl())
        if self.include_remote:
            files.add(self.remote_path, self.generate_remote_datasource())
        if self.include_local:
            files.add(self.local_path, self.generate_local_datasource())
        return files

    def generate_interface(self) -> str:
        entity = self.entity
        lines = [
            f"import '{relative_import(self.interface_path, self.entity_path)}';",
            "",
            f"/// Repository interface for {self.repository_name} operations.",
            "///",
            f"/// Defines the contract for data operations on {entity}.",
            f"abstract class {self.interface_name} {{",
        ]
        for method in self.methods:
            lines.append("")
            entry = METHOD_CATALOG.get(method)
            if entry is None:
                lines += [f"  /// Custom method: {method}", f"  Future<void> {method}();"]
                continue
            lines += [f"  {d}" for d in entry.doc_lines(entity, self.repository_name)]
            lines += _close_signature(entry.signature(entity, self.repository_name), ";")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def generate_impl(self) -> str:
        imports = [self.entity_path, self.interface_path]
        if self.include_remote:
            imports.append(self.remote_path)
        if self.include_local:
            imports.append(self.local_path)
        lines = [f"import '{relative_import(self.impl_path, p)}';" for p in imports]
        lines += [
            "",
            f"/// Implementation of [{self.interface_name}].",
            "///",
            "/// Coordinates between remote and local data sources,",
            "/// implementing caching and offline-first strategies.",
            f"class {self.impl_name} implements {self.interface_name} {{",
            f"  /// Creates a new [{self.impl_name}].",
        ]
        if self.include_remote or self.include_local:
            lines.append(f"  const {self.impl_name}({{")
            if self.include_remote:
                lines.append("    required this.remoteDataSource,")
            if self.include_local:
                lines.append("    required this.localDataSource,")
            lines.append("  });")
        else:
            lines.append(f"  const {self.impl_name}();")
        lines.append("")
        if self.include_remote:
            lines += [
                "  /// The remote data source for API operations.",
                f"  final {self.remote_name} remoteDataSource;",
                "",
            ]
        if self.include_local:
            lines += [
                "  /// The local data source for caching.",
                f"  final {self.local_name} localDataSource;",
                "",
            ]

        ctx = _ImplContext(self)
        for method in self.methods:
            entry = METHOD_CATALOG.get(method)
            if entry is None:
                lines += [
                    "  @override",
                    f"  Future<void> {method}() async {{",
                    f"    throw UnimplementedError('{method} is not implemented');",
                    "  }",
                    "",
                ]
                continue
            body = _STRATEGIES[entry.strategy](entry, ctx)
            lines.append("  @override")
            lines += _close_signature(entry.signature(self.entity, self.repository_name), " async {")
            lines += [f"    {line}" if line else "" for line in body]
            lines += ["  }", ""]
        lines += ctx.helper_methods()

        while lines[-1] == "":
            lines.pop()
        lines.append("}")
        return "\n".join(lines) + "\n"

    def remote_methods(self) -> list[str]:
        """Methods on the remote data source, in request order.

        Catalog methods flagged as remote are included, plus ``getById`` and
        ``create`` when a batch method needs them but they were not requested.
        """
        names = [m for m in self.methods if m in METHOD_CATALOG and METHOD_CATALOG[m].remote]
        if any(m in self.methods for m in ("exists", "getByIds")) and "getById" not in names:
            names.append("getById")
        if "createMany" in self.methods and "create" not in names:
            names.append("create")
        return names

    def generate_remote_datasource(self) -> str:
        entity = self.entity
        name = self.remote_name
        lines = [
            f"import '{relative_import(self.remote_path, self.entity_path)}';",
            "",
            f"/// Remote data source for {self.repository_name} operations.",
            "///",
            f"/// Handles all network requests for {self.repository_name} data.",
            f"abstract class {name} {{",
        ]
        methods = [METHOD_CATALOG[m] for m in self.remote_methods()]
        for entry in methods:
            lines += [f"  {d}" for d in entry.doc_lines(entity, self.repository_name)[:1]]
            lines += _close_signature(entry.signature(entity, self.repository_name), ";")
            lines.append("")
        if methods:
            lines.pop()
        lines += [
            "}",
            "",
            f"/// Implementation of [{name}].",
            f"class {name}Impl implements {name} {{",
            f"  /// Creates a new [{name}Impl].",
            f"  const {name}Impl({{required this.apiClient}});",
            "",
            "  /// The API client for making network requests.",
            "  final dynamic apiClient; // Replace with your API client type",
        ]
        for entry in methods:
            lines += ["", "  @override"]
            lines += _close_signature(entry.signature(entity, self.repository_name), " async {")
            lines += [
                "    // TODO: Implement API call",
                "    throw UnimplementedError();",
                "  }",
            ]
        lines.append("}")
        return "\n".join(lines) + "\n"

    def generate_local_datasource(self) -> str:
        entity = self.entity
        name = self.local_name
        lines = [
            f"import '{relative_import(self.local_path, self.entity_path)}';",
            "",
            f"/// Local data source for {self.repository_name} caching.",
            "///",
            "/// Handles local storage operations for offline support.",
            f"abstract class {name} {{",
            "  /// Retrieves all cached items.",
            f"  Future<List<{entity}>> getAll();",
            "",
            "  /// Retrieves a cached item by [id].",
            f"  Future<{entity}?> getById(String id);",
            "",
            "  /// Caches all items.",
            f"  Future<void> cacheAll(List<{entity}> entities);",
            "",
            "  /// Caches a single item.",
            f"  Future<void> cache({entity} entity);",
            "",
            "  /// Removes an item from cache.",
            "  Future<void> remove(String id);",
            "",
            "  /// Clears all cached items.",
            "  Future<void> clearAll();",
            "",
            "  /// Searches cached items.",
            f"  Future<List<{entity}>> search(String query);",
            "",
            "  /// Returns the count of cached items.",
            "  Future<int> count();",
            "",
            "  /// Returns one page of cached items. Pages start at 1.",
            f"  Future<List<{entity}>> getPaginated({{",
            *[f"    {p}," for p in _PAGINATION_PARAMS],
            "  });",
            "}",
            "",
            f"/// In-memory implementation of [{name}].",
            "///",
            "/// Each instance owns its store; pass one in to share it.",
            f"class {name}Impl implements {name} {{",
            f"  /// Creates a new [{name}Impl].",
            f"  {name}Impl({{Map<String, {entity}>? store}})",
            f"      : _cache = store ?? <String, {entity}>{{}};",
            "",
            f"  final Map<String, {entity}> _cache;",
            "",
            "  @override",
            f"  Future<List<{entity}>> getAll() async {{",
            "    return _cache.values.toList();",
            "  }",
            "",
            "  @override",
            f"  Future<{entity}?> getById(String id) async {{",
            "    return _cache[id];",
            "  }",
            "",
            "  @override",
            f"  Future<void> cacheAll(List<{entity}> entities) async {{",
            "    for (final entity in entities) {",
            "      _cache[entity.id] = entity;",
            "    }",
            "  }",
            "",
            "  @override",
            f"  Future<void> cache({entity} entity) async {{",
            "    _cache[entity.id] = entity;",
            "  }",
            "",
            "  @override",
            "  Future<void> remove(String id) async {",
            "    _cache.remove(id);",
            "  }",
            "",
            "  @override",
            "  Future<void> clearAll() async {",
            "    _cache.clear();",
            "  }",
            "",
            "  @override",
            f"  Future<List<{entity}>> search(String query) async {{",
            "    final lowerQuery = query.toLowerCase();",
            "    return _cache.values",
            "        .where((e) => e.toString().toLowerCase().contains(lowerQuery))",
            "        .toList();",
            "  }",
            "",
            "  @override",
            "  Future<int> count() async {",
            "    return _cache.length;",
            "  }",
            "",
            "  @override",
            f"  Future<List<{entity}>> getPaginated({{",
            *[f"    {p}," for p in _PAGINATION_PARAMS],
            "  }) async {",
            "    // Insertion order; sortBy needs a field accessor on the entity.",
            "    final items = _cache.values.toList();",
            "    final ordered = ascending ? items : items.reversed.toList();",
            "    final start = (page - 1) * pageSize;",
            "    if (start < 0 || start >= ordered.length) return [];",
            "    return ordered.skip(start).take(pageSize).toList();",
            "  }",
            "}",
        ]
        return "\n".join(lines) + "\n"


def _close_signature(signature: list[str], suffix: str) -> list[str]:
    lines = [f"  {line}" for line in signature]
    lines[-1] += suffix
    return lines


# ---------------------------------------------------------------------------
# Coordination strategies
# ---------------------------------------------------------------------------


class _ImplContext:
    """What a strategy needs to know about the repository being rendered.

    Also collects private helpers for batch methods whose single-item
    counterpart was not requested.
    """

    def __init__(self, template: RepositoryTemplate) -> None:
        self.template = template
        self.remote = template.include_remote
        self.local = template.include_local
        self.entity = template.entity
        self._helpers: dict[str, list[str]] = {}

    def single(self, name: str) -> str:
        """Name to call for ``getById`` / ``create`` from a batch method."""
        if name in self.template.methods:
            return name
        helper = f"_{name}"
        if helper not in self._helpers:
            entry = METHOD_CATALOG[name]
            body = _STRATEGIES[entry.strategy](entry, self)
            signature = entry.signature(self.entity, self.template.repository_name)
            signature[0] = signature[0].replace(f" {name}(", f" {helper}(", 1)
            lines = _close_signature(signature, " async {")
            lines += [f"    {line}" if line else "" for line in body]
            lines += ["  }", ""]
            self._helpers[helper] = lines
        return helper

    def helper_methods(self) -> list[str]:
        lines: list[str] = []
        for helper in self._helpers.values():
            lines += helper
        return lines

    def unimplemented(self, entry: MethodCatalogEntry) -> list[str]:
        return [f"throw UnimplementedError('{entry.name} has no data source configured');"]


def _read_through(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    if ctx.remote and ctx.local:
        return [
            "try {",
            "  final entities = await remoteDataSource.getAll();",
            "  await localDataSource.cacheAll(entities);",
            "  return entities;",
            "} catch (_) {",
            "  // Fall back to the cached list when the remote call fails.",
            "  return localDataSource.getAll();",
            "}",
        ]
    if ctx.remote:
        return ["return remoteDataSource.getAll();"]
    if ctx.local:
        return ["return localDataSource.getAll();"]
    return ctx.unimplemented(entry)


def _cache_first(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    if ctx.remote and ctx.local:
        return [
            "final cached = await localDataSource.getById(id);",
            "if (cached != null) return cached;",
            "",
            "final entity = await remoteDataSource.getById(id);",
            "if (entity != null) await localDataSource.cache(entity);",
            "return entity;",
        ]
    if ctx.remote:
        return ["return remoteDataSource.getById(id);"]
    if ctx.local:
        return ["return localDataSource.getById(id);"]
    return ctx.unimplemented(entry)


def _write_through(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    result = "created" if entry.name == "create" else "updated"
    if ctx.remote and ctx.local:
        return [
            f"final {result} = await remoteDataSource.{entry.name}(entity);",
            f"await localDataSource.cache({result});",
            f"return {result};",
        ]
    if ctx.remote:
        return [f"return remoteDataSource.{entry.name}(entity);"]
    if ctx.local:
        return ["await localDataSource.cache(entity);", "return entity;"]
    return ctx.unimplemented(entry)


def _remove(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    if not (ctx.remote or ctx.local):
        return ctx.unimplemented(entry)
    lines = []
    if ctx.remote:
        lines.append("await remoteDataSource.delete(id);")
    if ctx.local:
        lines.append("await localDataSource.remove(id);")
    return lines


def _delegate(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    if ctx.remote:
        return [f"return remoteDataSource.{entry.name}({entry.call_args});"]
    if ctx.local:
        return [f"return localDataSource.{entry.name}({entry.call_args});"]
    return ctx.unimplemented(entry)


def _exists(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    return [
        f"final entity = await {ctx.single('getById')}(id);",
        "return entity != null;",
    ]


def _batch_get(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    return [
        f"final results = <{ctx.entity}>[];",
        "for (final id in ids) {",
        f"  final entity = await {ctx.single('getById')}(id);",
        "  if (entity != null) results.add(entity);",
        "}",
        "return results;",
    ]


def _clear(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    if not (ctx.remote or ctx.local):
        return ctx.unimplemented(entry)
    lines = []
    if ctx.remote:
        lines.append("await remoteDataSource.deleteAll();")
    if ctx.local:
        lines.append("await localDataSource.clearAll();")
    return lines


def _batch_create(entry: MethodCatalogEntry, ctx: _ImplContext) -> list[str]:
    return [
        f"final results = <{ctx.entity}>[];",
        "for (final entity in entities) {",
        f"  final created = await {ctx.single('create')}(entity);",
        "  results.add(created);",
        "}",
        "return results;",
    ]


_STRATEGIES: dict[CoordinationStrategy, Callable[[MethodCatalogEntry, _ImplContext], list[str]]] = {
    CoordinationStrategy.READ_THROUGH: _read_through,
    CoordinationStrategy.CACHE_FIRST: _cache_first,
    CoordinationStrategy.WRITE_THROUGH: _write_through,
    CoordinationStrategy.REMOVE: _remove,
    CoordinationStrategy.DELEGATE: _delegate,
    CoordinationStrategy.EXISTS: _exists,
    CoordinationStrategy.BATCH_GET: _batch_get,
    CoordinationStrategy.CLEAR: _clear,
    CoordinationStrategy.BATCH_CREATE: _batch_create,
}
