"""Preparing page data for a search index."""

from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser


@dataclass
class SearchConfig:
    """Which parts of a page go into the search index."""

    include_title: bool = True
    include_description: bool = False
    include_content: bool = True
    truncate_content_length: int | None = None


_DROPPED_CONTENT_TAGS = frozenset({"script", "style"})


def _escape_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("\xa0", "&nbsp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []
        self._dropping = 0

    def handle_starttag(self, tag, attrs):
        if tag in _DROPPED_CONTENT_TAGS:
            self._dropping += 1

    def handle_endtag(self, tag):
        if tag in _DROPPED_CONTENT_TAGS and self._dropping:
            self._dropping -= 1

    def handle_data(self, data):
        if not self._dropping:
            self.parts.append(data)


def clean_html(content: str) -> str:
    """Strip all markup, dropping script and style contents entirely."""
    parser = _TextExtractor()
    parser.feed(content)
    parser.close()
    return _escape_text("".join(parser.parts))


def build_fields(config: SearchConfig) -> list[str]:
    """Names of the indexed fields, in index order."""
    fields = []
    if config.include_title:
        fields.append("title")
    if config.include_description:
        fields.append("description")
    if config.include_content:
        fields.append("body")
    return fields


def fill_index(
    config: SearchConfig, title: str | None, description: str | None, content: str
) -> list[str]:
    """The values for one document, matching ``build_fields``."""
    row = []
    if config.include_title:
        row.append(title or "")
    if config.include_description:
        row.append(description or "")
    if config.include_content:
        body = clean_html(content)
        if config.truncate_content_length is not None:
            body = body[: config.truncate_content_length]
        row.append(body)
    return row