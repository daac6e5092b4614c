"""Site setup for the Lucy documentation.

``configure`` is the single place where the documentation site is wired up:
it is called on a fresh SiteConfig before every build.
"""

from __future__ import annotations

from typing import Any

from .config import SiteConfig
from .highlight import syntax_highlight
from .lucy import register_lucy
from .markdown import create_markdown
from .sections import cleanup_language_sections
from .urls import bare_url, hash_link, make_base_url


def debugger(value: Any) -> str:
    """Template filter dropping into the debugger with the piped value.

    Honors ``PYTHONBREAKPOINT``, so ``PYTHONBREAKPOINT=0`` turns it off.
    Renders as nothing.
    """
    breakpoint()  # noqa: T100
    return ""


def configure(config: SiteConfig) -> SiteConfig:
    """Register formats, copies, plugins, the Markdown library and filters.

    Args:
        config: Fresh site configuration.

    Returns:
        The same configuration, filled in.
    """
    config.set_template_formats(["md"])
    config.add_passthrough_copy("styles")
    config.add_passthrough_copy("images")

    config.add_plugin(syntax_highlight, init=register_lucy)

    config.set_library(
        "md",
        create_markdown(
            html=True,
            anchor_class_name="heading-anchor",
            toc_class_name="toc",
        ),
    )

    config.add_filter("bareUrl", bare_url)
    config.add_filter("baseUrl", make_base_url(config.prod_site))
    config.add_filter("cleanupLanguageSections", cleanup_language_sections)
    config.add_filter("debugger", debugger)
    config.add_filter("hashLink", hash_link)
    return config
