"""Custom exceptions for lucydocs."""


class LucyDocsError(Exception):
    """Base exception for lucydocs operations."""


class InvalidInputError(LucyDocsError, ValueError):
    """A template filter received a value it cannot normalize."""


class InvalidPathError(LucyDocsError, ValueError):
    """A page path could not be resolved against the site base URL."""


class ConfigError(LucyDocsError):
    """The site configuration is invalid."""
