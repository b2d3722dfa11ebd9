"""Extract the ECMAScript grammar and normalize it for code generation.

This package exposes the CLI entry points used by ``grammar-notation`` to
fetch the specification, select its core language grammar, and write the
normalized JSON document consumed by the parse-node generator.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from grammar_notation import main
>>> main()  # doctest: +SKIP
>>> from grammar_notation import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
