from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from .engine import RenderContext, TemplateEngine, has_markup
from .errors import ScaffoldIOError
from .manifest import MANIFEST_FILE

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"


class TemplateRenderer:
    def __init__(self, engine: TemplateEngine | None = None) -> None:
        self.engine = engine or TemplateEngine()

    def render(self, template_root: Path, destination: Path, context: RenderContext) -> List[Path]:
        src_root = Path(template_root)
        out_dir = Path(destination)
        manifest = src_root / MANIFEST_FILE
        written: List[Path] = []

        # sorted() puts every directory ahead of its contents
        for src_path in sorted(src_root.rglob("*")):
            if src_path == manifest:
                continue
            rel = src_path.relative_to(src_root).as_posix()

            # Render the relative path so folder/file names can use variables
            rendered_rel = self.engine.render(rel, context, origin=f"path '{rel}'")
            dst_path = out_dir / rendered_rel

            if src_path.is_dir():
                self._mkdir(dst_path)
                continue

            dst_path = self._render_file(src_path, dst_path, rel, context)
            logger.debug("Wrote %s", dst_path)
            written.append(dst_path)
        return written

    def _render_file(self, src_path: Path, dst_path: Path, rel: str, context: RenderContext) -> Path:
        try:
            raw = src_path.read_bytes()
        except OSError as exc:
            raise ScaffoldIOError(src_path, str(exc)) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            # Binary: copied verbatim under its original name
            dst_path = dst_path.parent / src_path.name
            self._mkdir(dst_path.parent)
            try:
                shutil.copyfile(src_path, dst_path)
            except OSError as exc:
                raise ScaffoldIOError(dst_path, str(exc)) from exc
            return dst_path

        if has_markup(text):
            data = self.engine.render(text, context, origin=f"file '{rel}'").encode("utf-8")
        else:
            # nothing to substitute; keep the exact bytes (mixed or bare-CR newlines included)
            data = raw

        # Strip the template marker from the output filename
        if src_path.name.endswith(TEMPLATE_SUFFIX) and dst_path.name.endswith(TEMPLATE_SUFFIX):
            dst_path = dst_path.with_name(dst_path.name[: -len(TEMPLATE_SUFFIX)])

        self._mkdir(dst_path.parent)
        try:
            dst_path.write_bytes(data)
        except OSError as exc:
            raise ScaffoldIOError(dst_path, str(exc)) from exc
        return dst_path

    @staticmethod
    def _mkdir(path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldIOError(path, str(exc)) from exc
