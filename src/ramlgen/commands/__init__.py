"""Built-in CLI sub-commands for ramlgen.

This package groups the Typer sub-command modules that form the CLI's
command tree:

* :mod:`~ramlgen.commands.generate` -- write interfaces for a RAML document.
* :mod:`~ramlgen.commands.inspect` -- examine a RAML document and the
  interfaces it would produce.
* :mod:`~ramlgen.commands.init` -- write a project-local configuration.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect``) or a plain callback function
registered directly on the root app (for single commands like ``init``).
"""
