"""Markdown rendering for lucydocs.

This module configures mistune to render documentation pages: raw HTML is
allowed through, every heading gets an id and a clickable anchor, and an
``@[toc]`` paragraph is replaced by a table of contents built from the
page's headings.

Key classes:
- Heading: A heading collected during rendering.
- RenderedMarkdown: Rendered HTML plus collected headings.
- MarkdownLibrary: The configured renderer, registered as the ``md`` library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import mistune

from .html_utils import escape_html, generate_heading_id, strip_tags

if TYPE_CHECKING:
    from .highlight import Highlighter

TOC_MARKER = "@[toc]"
# Stands in for the TOC until every heading on the page has been seen.
_TOC_PLACEHOLDER = "\x02lucydocs-toc\x03"


@dataclass
class Heading:
    """Represents a heading extracted from markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The plain text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass
class RenderedMarkdown:
    """Result of rendering a Markdown document."""

    html: str
    toc: list[Heading] = field(default_factory=list)

    def __str__(self) -> str:
        return self.html


def render_toc(headings: list[Heading], class_name: str = "toc") -> str:
    """Render headings as nested HTML lists.

    Args:
        headings: Headings in document order.
        class_name: Class for the outermost list.

    Returns:
        HTML string of the nested TOC, or an empty string if no headings.
    """
    if not headings:
        return ""

    top_level = min(heading.level for heading in headings)
    html_parts: list[str] = [f'<ul class="{escape_html(class_name)}">']
    level_stack: list[int] = [top_level]
    item_open = False

    for heading in headings:
        level = heading.level

        # Close nested lists when going back to a shallower level
        while level_stack[-1] > level:
            level_stack.pop()
            html_parts.append("</li></ul>")

        if level == level_stack[-1]:
            if item_open:
                html_parts.append("</li>")
        else:
            # A list nests inside an item, so open an empty one if needed
            if not item_open:
                html_parts.append("<li>")
            html_parts.append("<ul>")
            level_stack.append(level)

        html_parts.append(
            f'<li><a href="#{escape_html(heading.id)}">{escape_html(heading.text)}</a>'
        )
        item_open = True

    while len(level_stack) > 1:
        level_stack.pop()
        html_parts.append("</li></ul>")
    html_parts.append("</li></ul>")

    return "".join(html_parts)


class _AnchorRenderer(mistune.HTMLRenderer):
    """HTML renderer adding heading anchors, TOC markers and highlighting.

    A new renderer is created for each document so heading ids and counts
    never leak between pages.
    """

    def __init__(
        self,
        library: MarkdownLibrary,
        highlighter: Highlighter | None = None,
    ):
        super().__init__(escape=not library.html)
        self.library = library
        self.highlighter = highlighter
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}
        self._used_ids: set[str] = set()

    def heading(self, text: str, level: int, **attrs) -> str:
        plain = strip_tags(text)
        base_id = generate_heading_id(plain) or "section"

        heading_id = base_id
        count = self._heading_id_counts.get(base_id, 0)
        while heading_id in self._used_ids:
            count += 1
            heading_id = f"{base_id}-{count}"
        self._heading_id_counts[base_id] = count
        self._used_ids.add(heading_id)

        self.headings.append(Heading(id=heading_id, text=plain, level=level))

        anchor = (
            f'<a class="{self.library.anchor_class_name}" href="#{heading_id}">'
            f"{self.library.anchor_symbol}</a> "
        )
        return f'<h{level} id="{heading_id}">{anchor}{text}</h{level}>\n'

    def paragraph(self, text: str) -> str:
        if text.strip() == self.library.toc_marker:
            return _TOC_PLACEHOLDER
        return super().paragraph(text)

    def block_code(self, code: str, info: str | None = None) -> str:
        lang = info.split()[0] if info and info.strip() else None
        if self.highlighter is not None:
            return self.highlighter.highlight(code, lang)
        return super().block_code(code, info)


class MarkdownLibrary:
    """Markdown renderer with the heading anchor and TOC extension.

    Attributes:
        html: Whether raw HTML in the source is passed through.
        anchor_class_name: Class of the anchor link inside each heading.
        anchor_symbol: Text of the anchor link.
        toc_class_name: Class of the outermost TOC list.
        toc_first_level: Shallowest heading level listed in the TOC.
        toc_last_level: Deepest heading level listed in the TOC.
        toc_marker: Paragraph text replaced by the TOC.
        plugins: mistune plugins enabled for parsing.
    """

    def __init__(
        self,
        html: bool = True,
        anchor_class_name: str = "heading-anchor",
        anchor_symbol: str = "#",
        toc_class_name: str = "toc",
        toc_first_level: int = 1,
        toc_last_level: int = 6,
        toc_marker: str = TOC_MARKER,
        plugins: list[str] | None = None,
    ):
        self.html = html
        self.anchor_class_name = escape_html(anchor_class_name)
        self.anchor_symbol = anchor_symbol
        self.toc_class_name = toc_class_name
        self.toc_first_level = toc_first_level
        self.toc_last_level = toc_last_level
        self.toc_marker = toc_marker
        self.plugins = (
            plugins
            if plugins is not None
            else ["strikethrough", "footnotes", "table", "url"]
        )

    def __call__(
        self, text: str, highlighter: Highlighter | None = None
    ) -> RenderedMarkdown:
        """Render Markdown to HTML.

        Args:
            text: Markdown source.
            highlighter: Highlighter for fenced code blocks, if any.

        Returns:
            RenderedMarkdown with the HTML and the headings found.
        """
        renderer = _AnchorRenderer(self, highlighter)
        markdown = mistune.create_markdown(renderer=renderer, plugins=self.plugins)
        html = markdown(text)
        toc = [
            h
            for h in renderer.headings
            if self.toc_first_level <= h.level <= self.toc_last_level
        ]
        if _TOC_PLACEHOLDER in html:
            html = html.replace(
                _TOC_PLACEHOLDER, render_toc(toc, self.toc_class_name) + "\n"
            )
        return RenderedMarkdown(html=html, toc=toc)


def create_markdown(html: bool = True, **options) -> MarkdownLibrary:
    """Create the Markdown library used for ``md`` pages.

    Args:
        html: Whether raw HTML is allowed in the source.
        **options: Anchor and TOC options, see MarkdownLibrary.

    Returns:
        Configured MarkdownLibrary.
    """
    return MarkdownLibrary(html=html, **options)
