"""URL formatting template filters.

The built site must work both from the production domain and from a plain
directory on disk, so links are written relative to the current page rather
than to the domain root.

Functions:
    bare_url: Drop the leading slash of a site path.
    base_url: Compute the ``../`` prefix leading from a page back to the root.
    make_base_url: Bind ``base_url`` to the production site URL.
    hash_link: Build a ``page#heading`` link for a heading title.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Callable
from urllib.parse import urljoin, urlsplit

from .errors import InvalidPathError

DEFAULT_BASE_HREF = "https://example.com"

# Schemes whose paths treat a backslash as a segment separator.
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*):")


def bare_url(url: str) -> str:
    """Remove the first character of a site path.

    No validation is done: callers pass paths beginning with ``/``, and
    anything else simply loses its first character.

    Examples:
        >>> bare_url("/foo/bar")
        'foo/bar'
    """
    return url[1:]


def base_url(pathname: str, base_href: str) -> str:
    """Return the relative prefix leading from ``pathname`` to the site root.

    The path is resolved against ``base_href`` with standard URL rules, then
    the number of ``..`` segments needed to climb back to ``/`` is counted.

    Args:
        pathname: Site-relative or absolute URL of the current page.
        base_href: Absolute URL of the production site.

    Returns:
        ``./`` for the root, otherwise ``../`` repeated once per path segment.

    Raises:
        InvalidPathError: If the URL cannot be parsed.

    Examples:
        >>> base_url("/", "https://example.com")
        './'

        >>> base_url("/a/b/c/", "https://example.com")
        '../../../'
    """
    if not isinstance(pathname, str) or not isinstance(base_href, str):
        raise InvalidPathError(
            f"Cannot resolve {pathname!r} against {base_href!r}: expected text"
        )
    try:
        joined = urljoin(base_href, _slash_separators(pathname, base_href))
        resolved = urlsplit(joined)
    except ValueError as exc:
        raise InvalidPathError(f"Cannot resolve {pathname!r}: {exc}") from exc

    path = resolved.path or "/"
    rel = posixpath.relpath("/", start=path)
    if rel == ".":
        rel = ""
    return (rel or ".") + "/"


def make_base_url(base_href: str = DEFAULT_BASE_HREF) -> Callable[[str], str]:
    """Bind ``base_url`` to a production site URL.

    Args:
        base_href: Absolute URL of the production site.

    Returns:
        A one-argument filter computing the root prefix for a page path.
    """

    def base_url_filter(pathname: str) -> str:
        return base_url(pathname, base_href)

    return base_url_filter


def hash_link(title: str, page_url: str) -> str:
    """Build a link to a heading on another page.

    Examples:
        >>> hash_link("Final States", "/docs/states/")
        'docs/states/#final-states'
    """
    return bare_url(page_url) + "#" + title.lower().replace(" ", "-")


def _slash_separators(pathname: str, base_href: str) -> str:
    """Turn backslashes before any query or fragment into slashes.

    Only applies when the URL resolves under a special scheme such as
    http(s), where browsers read ``\\`` as ``/``.
    """
    match = _SCHEME_RE.match(pathname) or _SCHEME_RE.match(base_href)
    if match is None or match.group(1).lower() not in SPECIAL_SCHEMES:
        return pathname
    cut = min(
        (i for i in (pathname.find("?"), pathname.find("#")) if i != -1),
        default=len(pathname),
    )
    return pathname[:cut].replace("\\", "/") + pathname[cut:]
