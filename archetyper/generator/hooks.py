from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from .engine import RenderContext, TemplateEngine
from .errors import HookEmptyError, HookFailedError, RenderError

logger = logging.getLogger(__name__)


def hook_environment(
    env: Mapping[str, str] | None = None,
    extra_path: Sequence[Path] = (),
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Environment handed to hook processes; never written back to os.environ."""
    merged = dict(os.environ if base is None else base)
    merged.update(env or {})
    if extra_path:
        parts = [str(p) for p in extra_path]
        if merged.get("PATH"):
            parts.append(merged["PATH"])
        merged["PATH"] = os.pathsep.join(parts)
    return merged


class HookRunner:
    def __init__(self, engine: TemplateEngine | None = None, env: Mapping[str, str] | None = None) -> None:
        self.engine = engine or TemplateEngine()
        self.env = dict(env) if env is not None else None

    def run(self, hooks: Iterable[str], working_dir: Path, context: RenderContext) -> None:
        for index, template in enumerate(hooks, start=1):
            command = self.engine.render(template, context, origin=f"hook #{index}")
            try:
                argv = shlex.split(command)
            except ValueError as exc:
                raise RenderError(f"hook #{index}", f"cannot split {command!r}: {exc}") from exc
            if not argv:
                raise HookEmptyError(template)

            logger.info("-> Executing: `%s`", command)
            try:
                proc = subprocess.run(argv, cwd=str(working_dir), env=self.env)
            except OSError as exc:
                raise HookFailedError(command, None, str(exc)) from exc
            if proc.returncode != 0:
                raise HookFailedError(command, proc.returncode)
