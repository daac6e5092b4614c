"""Template rendering engine for lucydocs.

This module uses Jinja2 to render pages. A page body is first rendered as a
Jinja template, so registered filters work inside Markdown, then turned into
HTML by the Markdown library and finally wrapped in its layout.

Key class:
- TemplateEngine: Handles template rendering and provides context to templates.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from .config import SiteConfig
from .content import Page
from .markdown import create_markdown

__all__ = ["TemplateEngine"]

LAYOUT_SUFFIXES = ("", ".html", ".njk", ".jinja", ".html.jinja")


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        config: Site configuration providing filters and libraries.
        data: Global site data.
        env: Jinja2 environment.
        pages: List of all pages.
    """

    def __init__(
        self,
        config: SiteConfig,
        data: dict[str, Any] | None = None,
    ):
        """Initialize the template engine.

        Args:
            config: Site configuration.
            data: Global site data.
        """
        self.config = config
        self.data = data or {}
        self.env = Environment(
            loader=FileSystemLoader([config.layouts_dir, config.input_dir]),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            enable_async=False,
        )
        self.markdown = config.markdown_library or create_markdown()
        self.pages: list[Page] = []

        self._install_filters()
        self._install_globals()

    def _install_filters(self) -> None:
        """Install every registered filter under its registered name."""
        for name, fn in self.config.filters.items():
            self.env.filters[name] = fn

    def _install_globals(self) -> None:
        """Install global variables and functions in the Jinja environment."""
        self.env.globals["data"] = self.data
        self.env.globals["pages"] = self.pages
        self.env.globals["collections"] = {"all": self.pages}
        self.env.globals["pygments_css"] = self._pygments_css

    def _pygments_css(self) -> str:
        """Return Pygments CSS styles for syntax highlighting."""
        if self.config.highlighter is None:
            return ""
        return self.config.highlighter.css()

    def update_collections(self, pages: Iterable[Page]) -> None:
        """Update the page collection.

        Args:
            pages: Iterable of all pages.
        """
        self.pages = list(pages)
        self.env.globals["pages"] = self.pages
        self.env.globals["collections"] = {"all": self.pages}

    def _context(self, page: Page) -> dict[str, Any]:
        context = dict(self.data)
        context.update(page.frontmatter)
        context.update(
            {
                "data": self.data,
                "page": page,
                "title": page.title,
                "pages": self.pages,
            }
        )
        return context

    def render_page(self, page: Page) -> str:
        """Render a page with its layout.

        The rendered body and its headings are stored on the page.

        Args:
            page: Page object to render.

        Returns:
            Rendered HTML string.
        """
        context = self._context(page)
        body = self.render_string(page.body, context)
        if page.source_type == "md":
            rendered = self.markdown(body, highlighter=self.config.highlighter)
            page.content = rendered.html
            page.toc = rendered.toc
        else:
            page.content = body

        if not page.layout:
            return page.content

        layout_template = self._resolve_layout_template(page.layout)
        if layout_template is None:
            print(f"Layout not found: {page.layout} ({page.path}); rendering body only.")
            return page.content
        layout_context = {
            **context,
            "content": Markup(page.content),
            "toc": page.toc,
        }
        return layout_template.render(**layout_context)

    def _resolve_layout_template(self, layout: str):
        """Resolve and return the layout template, or None if missing."""
        for suffix in LAYOUT_SUFFIXES:
            try:
                return self.env.get_template(f"{layout}{suffix}")
            except TemplateNotFound:
                continue
        return None

    def render_string(self, template: str, context: dict[str, Any]) -> str:
        """Render a template string.

        Args:
            template: Template string to render.
            context: Variables to make available in the template.

        Returns:
            Rendered string.
        """
        tmpl = self.env.from_string(template)
        return tmpl.render(**context)

