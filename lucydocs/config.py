"""Site configuration for lucydocs.

This module holds the object that a site configuration function receives and
fills in: which template formats to render, which paths to copy through
untouched, which template filters and plugins to install and which Markdown
library to use. Plain settings come from an optional ``lucydocs.yaml`` in the
project root.

Key pieces:
- DEFAULT_CONFIG: Settings used when ``lucydocs.yaml`` is absent.
- load_config: Loads and merges ``lucydocs.yaml``.
- SiteConfig: Registration API used by ``lucydocs.site.configure``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .errors import ConfigError
from .urls import DEFAULT_BASE_HREF

if TYPE_CHECKING:
    from .highlight import Highlighter
    from .markdown import MarkdownLibrary

DEFAULT_CONFIG: dict[str, Any] = {
    "input_dir": ".",
    "output_dir": "_site",
    "layouts_dir": "_includes",
    "data_dir": "_data",
    "prod_site": DEFAULT_BASE_HREF,
}

CONFIG_FILENAME = "lucydocs.yaml"


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from lucydocs.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not valid YAML.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid {CONFIG_FILENAME}: {exc}") from exc
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


class SiteConfig:
    """Collects everything a site build needs to know.

    Registration methods return the config itself so calls can be chained.

    Attributes:
        project_root: Root directory of the project.
        template_formats: File extensions (without dot) rendered as pages.
        passthrough_copies: Project-relative paths copied unchanged.
        filters: Template filters by name.
        plugins: Plugins applied so far, in order.
        markdown_library: Callable turning Markdown into rendered HTML.
        highlighter: Syntax highlighter installed by a plugin, if any.
        prod_site: Absolute URL of the production site.
    """

    def __init__(self, project_root: Path, settings: dict[str, Any] | None = None):
        """Initialize the configuration.

        Args:
            project_root: Root directory of the project.
            settings: Plain settings, usually from ``load_config``.
        """
        values = DEFAULT_CONFIG.copy()
        values.update(settings or {})
        self.project_root = project_root
        self.input_dir = project_root / str(values["input_dir"])
        self.output_dir = project_root / str(values["output_dir"])
        self.layouts_dir = self.input_dir / str(values["layouts_dir"])
        self.data_dir = self.input_dir / str(values["data_dir"])
        self.prod_site = str(values["prod_site"])
        self.template_formats: list[str] = []
        self.passthrough_copies: list[str] = []
        self.filters: dict[str, Callable[..., Any]] = {}
        self.plugins: list[Callable[..., Any]] = []
        self.markdown_library: MarkdownLibrary | None = None
        self.highlighter: Highlighter | None = None

    @classmethod
    def from_project(cls, project_root: Path) -> SiteConfig:
        """Build the configuration for a project with the site setup applied.

        Args:
            project_root: Root directory of the project.

        Returns:
            A fully configured SiteConfig.
        """
        from .site import configure

        config = cls(project_root, load_config(project_root))
        configure(config)
        return config

    def set_template_formats(self, formats: Iterable[str]) -> SiteConfig:
        """Replace the set of template formats rendered as pages."""
        self.template_formats = [fmt.lstrip(".").lower() for fmt in formats]
        return self

    def add_passthrough_copy(self, path: str) -> SiteConfig:
        """Copy a file or directory to the output unchanged.

        Args:
            path: Path relative to the project root.
        """
        normalized = Path(path).as_posix().strip("/")
        if normalized not in self.passthrough_copies:
            self.passthrough_copies.append(normalized)
        return self

    def add_filter(self, name: str, fn: Callable[..., Any]) -> SiteConfig:
        """Register a template filter, replacing any filter of the same name."""
        if not callable(fn):
            raise ConfigError(f"Filter {name!r} is not callable")
        self.filters[name] = fn
        return self

    def add_plugin(self, plugin: Callable[..., Any], **options: Any) -> SiteConfig:
        """Apply a plugin.

        Plugins are plain callables receiving the config and their options.
        """
        plugin(self, **options)
        self.plugins.append(plugin)
        return self

    def set_library(self, fmt: str, library: MarkdownLibrary) -> SiteConfig:
        """Set the library used to render a template format.

        Raises:
            ConfigError: If the format is not ``md``.
        """
        if fmt != "md":
            raise ConfigError(f"No library slot for template format {fmt!r}")
        self.markdown_library = library
        return self

    def excluded_paths(self) -> list[Path]:
        """Return paths that never contain pages."""
        excluded = [self.output_dir, self.layouts_dir, self.data_dir]
        excluded.extend(self.project_root / p for p in self.passthrough_copies)
        return excluded
