"""Lucydocs static site builder.

This package builds the Lucy documentation site from Markdown sources and
Jinja2 layouts. The whole site setup lives in one configuration function
(``lucydocs.site.configure``) that registers template formats, passthrough
copies, a syntax highlighting plugin, the Markdown library and a handful of
URL formatting template filters.

The main entry point is the CLI module, which provides the ``build`` command.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
