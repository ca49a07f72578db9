"""Diagnostics sinks injected into the generator.

The generator never writes to a process-wide log stream. Every component
that can report a recoverable condition (an unsupported parameter type, a
non-empty output directory, a parameter name that normalises to nothing)
receives a :class:`Diagnostics` object instead:

* :class:`OutputDiagnostics` -- forwards to :mod:`ramlgen.output`, used by
  the CLI.
* :class:`CollectingDiagnostics` -- keeps every message in a list, used by
  tests and by callers embedding the generator.
"""

from __future__ import annotations

from typing import Protocol


class Diagnostics(Protocol):
    """Capability for reporting non-fatal conditions during a run."""

    def warning(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...


class OutputDiagnostics:
    """Forward diagnostics to the global :class:`~ramlgen.output.OutputManager`."""

    def warning(self, message: str) -> None:
        from ramlgen.output import warning

        warning(message)

    def debug(self, message: str) -> None:
        from ramlgen.output import debug

        debug(message)


class CollectingDiagnostics:
    """Record diagnostics as ``(level, message)`` tuples.

    Example::

        diagnostics = CollectingDiagnostics()
        infer_type(param, "sort", context, diagnostics)
        assert diagnostics.warnings == ["Unsupported RAML type: uuid"]
    """

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def warning(self, message: str) -> None:
        self.records.append(("warning", message))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message))

    @property
    def warnings(self) -> list[str]:
        """Messages reported at warning level, in order."""
        return [message for level, message in self.records if level == "warning"]
