"""Build the render context from a manifest's declared variables.

Two sources implement the same capability: ``DefaultsSource`` fills every
variable from its declared default, ``InteractiveSource`` prompts on the
console and reads one line per variable.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Protocol, TextIO

from rich.console import Console
from rich.markup import escape

from .engine import RenderContext
from .manifest import Manifest, VariableSpec

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"name", "year"})


class VariableSource(Protocol):
    def begin(self, manifest: Manifest) -> None: ...

    def value_for(self, spec: VariableSpec) -> str | None: ...


class DefaultsSource:
    def begin(self, manifest: Manifest) -> None:
        pass

    def value_for(self, spec: VariableSpec) -> str | None:
        return spec.default if spec.default is not None else ""


class InteractiveSource:
    def __init__(self, stdin: TextIO | None = None, console: Console | None = None) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.console = console or Console()

    def begin(self, manifest: Manifest) -> None:
        if manifest.variables:
            self.console.print("Please provide the following details for your project:")

    def value_for(self, spec: VariableSpec) -> str | None:
        default = spec.default if spec.default is not None else ""
        self.console.print(f"[bold cyan]?[/] {escape(spec.prompt)} [dim](default: {escape(default)})[/]")
        # EOF reads as "" and falls back like an empty line
        value = self.stdin.readline().strip()
        if not value:
            return spec.default
        return value


def source_for(use_defaults: bool) -> VariableSource:
    return DefaultsSource() if use_defaults else InteractiveSource()


def current_year() -> str:
    return datetime.now(timezone.utc).strftime("%Y")


def collect(manifest: Manifest, project_name: str, source: VariableSource) -> RenderContext:
    context: RenderContext = {"name": project_name, "year": current_year()}
    source.begin(manifest)
    for spec in manifest.variables:
        if spec.key in RESERVED_KEYS:
            logger.debug("Ignoring reserved variable '%s' declared by manifest", spec.key)
            continue
        context[spec.key] = source.value_for(spec)
    return context
