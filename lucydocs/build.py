"""Site building functionality for lucydocs.

This module contains the core logic for building the static site from source
files. It loads data, discovers pages, renders them through the template
engine and writes the output, then runs the passthrough copies.

Key functions:
- build_site: Main function to build the entire site.
- load_data: Loads site data from YAML files in the data directory.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jinja2 import TemplateSyntaxError

from .config import SiteConfig
from .content import ContentProcessor, FileContentLoader, Page
from .errors import LucyDocsError
from .passthrough import PassthroughCopier
from .templates import TemplateEngine


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: List of all pages in the site.
        output_dir: Directory where the site was built.
        data: Global site data dictionary.
        copied: Destinations written by passthrough copies.
    """

    pages: list[Page]
    output_dir: Path
    data: dict[str, Any]
    copied: list[Path] = field(default_factory=list)


def load_data(data_dir: Path) -> dict[str, Any]:
    """Load site data from YAML files in the data directory.

    ``site.yaml`` is merged into the top level; every other file is stored
    under its stem.

    Args:
        data_dir: Directory holding the data files.

    Returns:
        Dictionary containing merged data from all YAML files.
    """
    data: dict[str, Any] = {}
    if not data_dir.exists():
        return data
    for path in sorted([*data_dir.glob("*.yaml"), *data_dir.glob("*.yml")]):
        with open(path, encoding="utf-8") as f:
            payload = yaml.safe_load(f)
        if payload is None:
            continue
        if path.stem == "site":
            if isinstance(payload, dict):
                data.update(payload)
            continue
        data[path.stem] = payload
    return data


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def build_site(
    project_root: Path,
    config: SiteConfig | None = None,
    output_dir_override: Path | None = None,
    clean_output: bool = True,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        config: Site configuration; built from the project when omitted.
        output_dir_override: Optional path to write the build output to.
        clean_output: Whether to wipe the output directory before building.

    Returns:
        BuildResult containing all pages, output directory, and site data.

    Raises:
        BuildError: If a page fails to render.
        FileNotFoundError: If the input directory does not exist.
    """
    config = config or SiteConfig.from_project(project_root)
    if output_dir_override is not None:
        config.output_dir = output_dir_override
    output_dir = config.output_dir
    if not config.input_dir.exists():
        raise FileNotFoundError(f"Expected input directory at {config.input_dir}")
    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    data = load_data(config.data_dir)
    loader = FileContentLoader(
        config.input_dir, config.template_formats, config.excluded_paths()
    )
    pages = ContentProcessor(config.input_dir, loader).load()

    engine = TemplateEngine(config, data)
    engine.update_collections(pages)
    for page in pages:
        try:
            rendered = engine.render_page(page)
        except TemplateSyntaxError as exc:
            raise BuildError(
                page.path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc
        except Exception as exc:
            raise BuildError(
                page.path,
                _format_error_message(exc),
                exc,
            ) from exc
        _write_page(output_dir, page, rendered)

    copied = PassthroughCopier(project_root, output_dir).run(
        config.passthrough_copies
    )
    return BuildResult(pages=pages, output_dir=output_dir, data=data, copied=copied)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    if isinstance(exc, LucyDocsError):
        return str(exc)
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TemplateNotFound":
        return f"Template not found: {error_msg}"

    return f"{error_type}: {error_msg}"


def _write_page(output_dir: Path, page: Page, rendered: str) -> None:
    """Write a rendered page to ``{url}/index.html`` under the output directory."""
    target_dir = output_dir / page.url.strip("/")
    target_dir.mkdir(parents=True, exist_ok=True)
    with open(target_dir / "index.html", "w", encoding="utf-8") as f:
        f.write(rendered)
