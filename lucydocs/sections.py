"""Language section normalization.

Navigation data for the language reference is written in YAML as a list
that mixes plain labels with single-key mappings::

    - Introduction
    - Machines:
        - States
        - Events

Templates are easier to write against one shape, so this module turns each
entry into a tagged record: ``Plain`` for a label, ``Group`` for a titled
list of child labels.

Key functions:
- normalize: Lazily convert section entries into tagged records.
- cleanup_language_sections: Template filter returning the records as a list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .errors import InvalidInputError

__all__ = [
    "Group",
    "NormalizedSection",
    "Plain",
    "cleanup_language_sections",
    "normalize",
]


@dataclass(frozen=True)
class Plain:
    """A section that is just a label.

    Attributes:
        text: The label, unchanged from the input.
    """

    text: str
    kind = "plain"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Group:
    """A titled group of child labels.

    Attributes:
        title: The mapping key from the input.
        items: The child sequence from the input, passed through as is.
    """

    title: str
    items: Sequence[Any]
    kind = "group"


NormalizedSection = Union[Plain, Group]


def _to_group(index: int, section: Mapping[Any, Any]) -> Group:
    if len(section) != 1:
        raise InvalidInputError(
            f"Section {index} must have exactly one title, got {len(section)}: "
            f"{sorted(map(str, section))}"
        )
    ((title, items),) = section.items()
    if not isinstance(title, str):
        raise InvalidInputError(
            f"Section {index} title must be text, got {type(title).__name__}"
        )
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InvalidInputError(
            f"Section {index} ({title!r}) must map to a list of items, "
            f"got {type(items).__name__}"
        )
    return Group(title=title, items=items)


def normalize(sections: Iterable[Any]) -> Iterator[NormalizedSection]:
    """Convert section entries into tagged records, one per entry.

    Entries that are already ``Plain`` or ``Group`` pass through unchanged.
    Group items are taken as they are and never normalized themselves.

    Args:
        sections: Iterable of labels and single-key mappings.

    Yields:
        A ``Plain`` or ``Group`` for each entry, in input order.

    Raises:
        InvalidInputError: If an entry is neither a label nor a mapping with
            exactly one text key whose value is a list.
    """
    for index, section in enumerate(sections):
        if isinstance(section, str):
            yield Plain(section)
        elif isinstance(section, (Plain, Group)):
            yield section
        elif isinstance(section, Mapping):
            yield _to_group(index, section)
        else:
            raise InvalidInputError(
                f"Section {index} must be text or a mapping, "
                f"got {type(section).__name__}"
            )


def cleanup_language_sections(sections: Iterable[Any]) -> list[NormalizedSection]:
    """Template filter form of ``normalize``.

    Returns:
        The normalized sections as a list.
    """
    return list(normalize(sections))
