"""Syntax highlighting of generated Rust source with Pygments."""

from __future__ import annotations

from pygments import highlight as _pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from conversion_gen.core.exceptions import HighlightError

CSS_CLASS = "highlight"


class Highlighter:
    """Colorizes source text as HTML using a Pygments style."""

    def __init__(
        self,
        language: str = "rust",
        style: str = "default",
        background: str = "#f3f6fa",
    ) -> None:
        try:
            self._lexer = get_lexer_by_name(language)
            self._formatter = HtmlFormatter(style=style, cssclass=CSS_CLASS)
        except ClassNotFound as e:
            raise HighlightError(
                f"cannot highlight {language!r} with style {style!r}: {e}"
            ) from e
        self.background = background

    def highlight(self, code: str) -> str:
        """Return `code` as a highlighted HTML fragment.

        Raises:
            HighlightError: If the lexer or formatter fails on `code`.
        """
        try:
            return _pygments_highlight(code, self._lexer, self._formatter)
        except Exception as e:
            raise HighlightError(f"highlighting failed: {e}") from e

    def stylesheet(self) -> str:
        """CSS rules for the highlighted fragments."""
        rules = self._formatter.get_style_defs(f".{CSS_CLASS}")
        return f"{rules}\n.{CSS_CLASS} {{ background: {self.background}; }}\n"
