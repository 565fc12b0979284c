"""FlutterForge -- scaffolding generator for layered Flutter applications.

Renders Dart source trees (entities, models, repositories, feature slices and
whole projects) from a handful of typed parameters.  The generation engine
lives in :mod:`flutter_forge.scaffolder` and is a pure function from a
``GenerationRequest`` to a ``FileSet``; the CLI in :mod:`flutter_forge.cli`
writes that ``FileSet`` to disk.
"""

__version__ = "0.3.0"
