"""Content discovery for lucydocs.

This module finds page sources in the input directory, splits off their YAML
front matter and works out each page's URL and title. Rendering happens later
in the template engine, once every page is known.

Key classes:
- Page: Dataclass representing a site page.
- FileContentLoader: Discovers page sources for the registered formats.
- UrlDeriver: Maps source paths to output URLs.
- ContentProcessor: Builds Page instances for every discovered source.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .markdown import Heading

__all__ = [
    "ContentProcessor",
    "FileContentLoader",
    "Heading",
    "Page",
    "UrlDeriver",
    "extract_frontmatter",
    "titleize",
]

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
        if not isinstance(data, dict):
            return {}, text
        return data, text[match.end() :]
    except yaml.YAMLError:
        return {}, text


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    words = re.split(r"[\s\-_]+", Path(filename).stem)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def _title_from(frontmatter: dict[str, Any], body: str, path: Path) -> str:
    if frontmatter.get("title"):
        return str(frontmatter["title"])
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()
    if path.stem == "index" and path.parent.name:
        return titleize(path.parent.name)
    return titleize(path.name)


@dataclass
class Page:
    """Represents a site page.

    Attributes:
        title: Human-readable title of the page.
        body: Source text with the front matter removed.
        url: URL path for the page, always starting and ending with ``/``.
        path: Path to the source file.
        source_type: Template format of the source (e.g. ``md``).
        layout: Layout template named in the front matter, if any.
        frontmatter: Parsed front matter.
        content: Rendered HTML body, filled in by the template engine.
        toc: Headings collected while rendering.
    """

    title: str
    body: str
    url: str
    path: Path
    source_type: str
    layout: str | None = None
    frontmatter: dict[str, Any] = field(default_factory=dict)
    content: str = ""
    toc: list[Heading] = field(default_factory=list)

    @property
    def file_slug(self) -> str:
        return self.path.stem


class FileContentLoader:
    """Discovers page sources in a directory.

    Directories starting with ``_`` (layouts, data) and any excluded path
    (output directory, passthrough copies) never contain pages.

    Attributes:
        input_dir: Directory containing site content.
        template_formats: Extensions rendered as pages.
        excluded: Paths skipped entirely.
    """

    def __init__(
        self,
        input_dir: Path,
        template_formats: Iterable[str],
        excluded: Iterable[Path] = (),
    ):
        self.input_dir = input_dir
        self.template_formats = {f".{fmt}" for fmt in template_formats}
        self.excluded = [p.resolve() for p in excluded]

    def _is_excluded(self, path: Path) -> bool:
        resolved = path.resolve()
        return any(
            resolved == excluded or excluded in resolved.parents
            for excluded in self.excluded
        )

    def iter_files(self) -> list[Path]:
        """Return all page sources, sorted by path."""
        files: list[Path] = []
        for path in sorted(self.input_dir.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(self.input_dir)
            if any(part.startswith(("_", ".")) for part in rel.parts[:-1]):
                continue
            if path.suffix.lower() not in self.template_formats:
                continue
            if self._is_excluded(path):
                continue
            files.append(path)
        return files


class UrlDeriver:
    """Derives URLs for pages from their location under the input directory."""

    def derive(self, rel: Path, frontmatter: dict[str, Any] | None = None) -> str:
        """Derive the URL for a page.

        A ``permalink`` in the front matter wins over the file location.

        Args:
            rel: Path relative to the input directory.
            frontmatter: Parsed front matter.

        Returns:
            URL path for the page.
        """
        permalink = (frontmatter or {}).get("permalink")
        if isinstance(permalink, str) and permalink.strip():
            path = permalink.strip().strip("/")
            return f"/{path}/" if path else "/"
        segments = [p for p in rel.parent.parts if p]
        if rel.stem != "index":
            segments.append(rel.stem)
        path = "/".join(segments)
        return f"/{path}/" if path else "/"


class ContentProcessor:
    """Builds Page objects for every page source.

    Attributes:
        input_dir: Directory containing site content.
    """

    def __init__(
        self,
        input_dir: Path,
        content_loader: FileContentLoader,
        url_deriver: UrlDeriver | None = None,
    ):
        self.input_dir = input_dir
        self._content_loader = content_loader
        self._url_deriver = url_deriver or UrlDeriver()

    def load(self) -> list[Page]:
        """Load all page sources.

        Returns:
            List of Page objects, in path order.
        """
        return [self.build(path) for path in self._content_loader.iter_files()]

    def build(self, path: Path) -> Page:
        """Build a Page object from a source file."""
        rel = path.relative_to(self.input_dir)
        raw = path.read_text(encoding="utf-8")
        frontmatter, body = extract_frontmatter(raw)
        layout = frontmatter.get("layout")
        return Page(
            title=_title_from(frontmatter, body, rel),
            body=body,
            url=self._url_deriver.derive(rel, frontmatter),
            path=path,
            source_type=path.suffix.lstrip(".").lower(),
            layout=str(layout) if layout else None,
            frontmatter=frontmatter,
        )
