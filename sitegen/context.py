"""Everything needed to turn a page's markdown into HTML."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import jinja2


class InsertAnchor(enum.Enum):
    """Where an anchor link is placed inside a heading."""

    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


def _empty_environment() -> jinja2.Environment:
    return jinja2.Environment(loader=jinja2.DictLoader({}))


@dataclass
class RenderContext:
    """Templates, configuration and links used while rendering content."""

    templates: jinja2.Environment
    config: Any
    current_page_permalink: str = ""
    permalinks: dict[str, str] = field(default_factory=dict)
    insert_anchor: InsertAnchor = InsertAnchor.NONE
    tera_context: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.tera_context is None:
            self.tera_context = {"config": self.config}

    @classmethod
    def from_config(cls, config) -> RenderContext:
        """A context with no templates, links or page, as the markdown filter uses."""
        return cls(
            templates=_empty_environment(),
            config=config,
            current_page_permalink="",
            permalinks={},
            insert_anchor=InsertAnchor.NONE,
            tera_context={},
        )