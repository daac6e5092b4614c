"""Syntax highlighting plugin for lucydocs.

This module wraps Pygments for highlighting fenced code blocks. The plugin
takes an ``init`` hook that receives the lexer registry, so a site can add
grammars Pygments does not ship (the Lucy language, for one) before any page
is rendered.

Key pieces:
- LexerRegistry: Language name lookup with custom lexers taking precedence.
- Highlighter: Renders code blocks to HTML.
- syntax_highlight: Plugin installing a Highlighter on a SiteConfig.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .html_utils import escape_html

if TYPE_CHECKING:
    from .config import SiteConfig


class LexerRegistry:
    """Maps language names to Pygments lexer classes.

    Registered lexers are looked up by their aliases first; anything else
    falls back to the lexers bundled with Pygments.
    """

    def __init__(self):
        self._lexers: dict[str, type[Lexer]] = {}

    def register(self, lexer_cls: type[Lexer], *names: str) -> None:
        """Register a lexer under its aliases and any extra names."""
        for name in (*lexer_cls.aliases, *names):
            self._lexers[name.lower()] = lexer_cls

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._lexers

    def get(self, name: str) -> Lexer | None:
        """Return a lexer instance for a language, or None if unknown."""
        key = name.lower()
        if key in self._lexers:
            return self._lexers[key](stripall=True)
        try:
            return get_lexer_by_name(key, stripall=True)
        except ClassNotFound:
            return None


class Highlighter:
    """Renders code blocks with Pygments.

    Attributes:
        registry: Lexer lookup.
        css_class: Class of the wrapping element, also used for the CSS rules.
    """

    def __init__(self, registry: LexerRegistry, css_class: str = "highlight"):
        self.registry = registry
        self.css_class = css_class
        self.formatter = HtmlFormatter(nowrap=False, cssclass=css_class)

    def highlight(self, code: str, lang: str | None = None) -> str:
        """Highlight a code block.

        Args:
            code: The code content.
            lang: Language identifier from the fence info string.

        Returns:
            HTML string. Unknown languages get an escaped ``<pre>`` block
            tagged with a ``language-*`` class.
        """
        lexer = self.registry.get(lang) if lang else None
        if lexer is not None:
            return highlight(code, lexer, self.formatter)
        lang_class = f' class="language-{escape_html(lang)}"' if lang else ""
        return f"<pre{lang_class}><code{lang_class}>{escape_html(code)}</code></pre>\n"

    def css(self) -> str:
        """Return Pygments CSS styles for the highlight class."""
        return self.formatter.get_style_defs(f".{self.css_class}")


def syntax_highlight(
    config: SiteConfig,
    init: Callable[[LexerRegistry], None] | None = None,
    css_class: str = "highlight",
) -> None:
    """Plugin installing a syntax highlighter on the site configuration.

    Args:
        config: Site configuration to install into.
        init: Hook called with the lexer registry before first use.
        css_class: Class name for highlighted blocks.
    """
    registry = LexerRegistry()
    if init is not None:
        init(registry)
    config.highlighter = Highlighter(registry, css_class=css_class)
