from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import RenderError

RenderContext = dict[str, "str | None"]


def _finalize(value: Any) -> Any:
    # "no value" marker from interactive prompts renders as empty text
    return "" if value is None else value


def has_markup(text: str) -> bool:
    return "{{" in text or "{%" in text


class TemplateEngine:
    """Thin wrapper around a Jinja environment shared by paths, files and hooks."""

    def __init__(self) -> None:
        self.env = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
            finalize=_finalize,
            # "{#" stays literal (e.g. shell ${#arr[@]})
            comment_start_string="{{#",
            comment_end_string="#}}",
        )
        self._crlf_env = self.env.overlay(newline_sequence="\r\n")

    def render(self, source: str, context: Mapping[str, Any], origin: str = "<string>") -> str:
        env = self._crlf_env if "\r\n" in source else self.env
        try:
            return env.from_string(source).render(**context)
        except TemplateError as exc:
            raise RenderError(origin, str(exc)) from exc
