"""Nesting a flat list of headings into a table of contents."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Heading:
    """A heading found in a document, with the headings nested below it."""

    level: int
    id: str = ""
    permalink: str = ""
    title: str = ""
    children: list[Heading] = field(default_factory=list)


def _insert_into_parent(parent: Heading | None, heading: Heading) -> bool:
    """Try to place ``heading`` somewhere below ``parent``; report success."""
    if parent is None or heading.level <= parent.level:
        return False
    last_child = parent.children[-1] if parent.children else None
    if not _insert_into_parent(last_child, heading):
        parent.children.append(heading)
    return True


def make_table_of_contents(headings) -> list[Heading]:
    """Turn headings in document order into a nested hierarchy."""
    toc: list[Heading] = []
    for heading in headings:
        if not toc or not _insert_into_parent(toc[-1], heading):
            toc.append(heading)
    return toc