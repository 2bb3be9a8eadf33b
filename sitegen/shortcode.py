"""Finding shortcode calls in page content and rendering them with templates.

A page may hold inline shortcodes, ``{{ name(key=value, ...) }}``, and
shortcodes with a body, ``{% name(...) %}body{% end %}``. Writing ``/*`` and
``*/`` inside the delimiters, as in ``{{/* name() */}}``, keeps a shortcode
from being rendered: the markers are removed and the call is left as text.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Union

import jinja2

from sitegen.context import RenderContext

_WHITESPACE = " \t\r\n"
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_BOOL_RE = re.compile(r"true|false")
_STRING_RE = re.compile(r'"[^"]*"|\'[^\']*\'|`[^`]*`')
_FLOAT_RE = re.compile(r"[+-]?[0-9]+\.[0-9]*(?:[eE][+-]?[0-9]+)?")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_BODY_END_RE = re.compile(r"\{%[ \t\r\n]*end[ \t\r\n]*%\}")
_IGNORED_BODY_END_RE = re.compile(r"\{%/\*[ \t\r\n]*end[ \t\r\n]*\*/%\}")
_OUTER_NEWLINE_RE = re.compile(r"\A\s*\n|\n\s*\Z")


class ShortcodeError(Exception):
    """A shortcode could not be parsed or rendered."""


@dataclass
class Shortcode:
    """A shortcode call found in content; ``body`` is None for inline calls."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)
    body: str | None = None


Segment = Union[str, Shortcode]


class _NoMatch(Exception):
    """The text at a position does not match the rule being tried."""


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text

    def skip_ws(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in _WHITESPACE:
            pos += 1
        return pos

    def expect(self, token: str, pos: int) -> int:
        if not self.text.startswith(token, pos):
            raise _NoMatch
        return pos + len(token)

    def match(self, pattern: re.Pattern, pos: int) -> re.Match:
        found = pattern.match(self.text, pos)
        if found is None:
            raise _NoMatch
        return found

    def literal(self, pos: int) -> tuple[Any, int]:
        found = _BOOL_RE.match(self.text, pos)
        if found:
            return found.group() == "true", found.end()
        found = _STRING_RE.match(self.text, pos)
        if found:
            return found.group()[1:-1], found.end()
        found = _FLOAT_RE.match(self.text, pos)
        if found:
            return float(found.group()), found.end()
        found = self.match(_INT_RE, pos)
        return int(found.group()), found.end()

    def array(self, pos: int) -> tuple[list[Any], int]:
        pos = self.skip_ws(self.expect("[", pos))
        values: list[Any] = []
        while True:
            try:
                value, after = self.literal(pos)
            except _NoMatch:
                break
            values.append(value)
            after = self.skip_ws(after)
            if not self.text.startswith(",", after):
                pos = after
                break
            pos = self.skip_ws(after + 1)
        return values, self.expect("]", self.skip_ws(pos))

    def kwarg(self, pos: int) -> tuple[str, Any, int]:
        name = self.match(_IDENT_RE, pos)
        pos = self.skip_ws(self.expect("=", self.skip_ws(name.end())))
        try:
            value, pos = self.literal(pos)
        except _NoMatch:
            value, pos = self.array(pos)
        return name.group(), value, pos

    def call(self, pos: int) -> tuple[str, dict[str, Any], int]:
        name = self.match(_IDENT_RE, pos)
        pos = self.skip_ws(self.expect("(", self.skip_ws(name.end())))
        args: dict[str, Any] = {}
        try:
            key, value, pos = self.kwarg(pos)
        except _NoMatch:
            pass
        else:
            args[key] = value
            while True:
                candidate = self.skip_ws(pos)
                if self.text.startswith(",", candidate):
                    candidate = self.skip_ws(candidate + 1)
                try:
                    key, value, candidate = self.kwarg(candidate)
                except _NoMatch:
                    break
                args[key] = value
                pos = candidate
        pos = self.expect(")", self.skip_ws(pos))
        return name.group(), args, pos

    def _delimited_call(self, opening: str, closing: str, pos: int):
        pos = self.skip_ws(self.expect(opening, pos))
        name, args, pos = self.call(pos)
        return name, args, self.expect(closing, self.skip_ws(pos))

    def ignored_inline(self, pos: int) -> tuple[str, int]:
        _, _, end = self._delimited_call("{{/*", "*/}}", pos)
        span = self.text[pos:end].replace("{{/*", "{{", 1).replace("*/}}", "}}", 1)
        return span, end

    def inline(self, pos: int) -> tuple[Shortcode, int]:
        name, args, end = self._delimited_call("{{", "}}", pos)
        return Shortcode(name, args), end

    def ignored_with_body(self, pos: int) -> tuple[str, int]:
        _, _, body_start = self._delimited_call("{%/*", "*/%}", pos)
        closing = _IGNORED_BODY_END_RE.search(self.text, body_start)
        if closing is None or closing.start() == body_start:
            raise _NoMatch
        opening = self.text[pos:body_start].replace("{%/*", "{%", 1).replace("*/%}", "%}", 1)
        ending = closing.group().replace("{%/*", "{%", 1).replace("*/%}", "%}", 1)
        return opening + self.text[body_start:closing.start()] + ending, closing.end()

    def with_body(self, pos: int) -> tuple[Shortcode, int]:
        name, args, body_start = self._delimited_call("{%", "%}", pos)
        body_start = self.skip_ws(body_start)
        closing = _BODY_END_RE.search(self.text, body_start)
        if closing is None or closing.start() == body_start:
            raise _NoMatch
        return Shortcode(name, args, self.text[body_start:closing.start()]), closing.end()

    def segment_at(self, pos: int) -> tuple[Segment, int] | None:
        if self.text.startswith("{{", pos):
            rules = (self.ignored_inline, self.inline)
        elif self.text.startswith("{%", pos):
            rules = (self.ignored_with_body, self.with_body)
        else:
            return None
        for rule in rules:
            try:
                return rule(pos)
            except _NoMatch:
                continue
        return None

    def page(self) -> list[Segment]:
        segments: list[Segment] = []

        def add(segment: Segment) -> None:
            if isinstance(segment, str) and segments and isinstance(segments[-1], str):
                segments[-1] += segment
            elif segment != "":
                segments.append(segment)

        text_start = pos = 0
        length = len(self.text)
        while pos < length:
            found = self.segment_at(pos)
            if found is None:
                following = self.text.find("{", pos + 1)
                pos = length if following == -1 else following
                continue
            add(self.text[text_start:pos])
            segment, pos = found
            add(segment)
            text_start = pos
        add(self.text[text_start:])
        return segments


def parse_shortcode_call(source: str) -> tuple[str, dict[str, Any]]:
    """Name and keyword arguments of a single inline shortcode such as ``{{ f(a=1) }}``."""
    parser = _Parser(source)
    try:
        shortcode, end = parser.inline(0)
    except _NoMatch:
        raise ShortcodeError(f"Not a shortcode call: {source!r}") from None
    if end != len(source):
        raise ShortcodeError(f"Unexpected text after shortcode call: {source[end:]!r}")
    return shortcode.name, shortcode.args


def parse_page(content: str) -> list[Segment]:
    """Split content into plain text and shortcode calls, in order.

    Ignored shortcodes come back as text with their markers removed.
    """
    return _Parser(content).page()


def _load_template(templates: jinja2.Environment, name: str) -> tuple[str, jinja2.Template]:
    markdown_name = f"shortcodes/{name}.md"
    html_name = f"shortcodes/{name}.html"
    try:
        return markdown_name, templates.get_template(markdown_name)
    except jinja2.TemplateNotFound:
        return html_name, templates.get_template(html_name)


def render_shortcode(
    name: str,
    args: dict[str, Any],
    context: RenderContext,
    invocation_count: int,
    body: str | None,
) -> str:
    """Render one shortcode with its template.

    A ``shortcodes/<name>.md`` template is used in preference to
    ``shortcodes/<name>.html``; the output of the latter is wrapped so that
    the markdown renderer leaves it untouched.
    """
    variables = dict(args)
    if body is not None:
        variables["body"] = body.rstrip()
    variables["nth"] = invocation_count
    variables.update(context.tera_context or {})

    try:
        template_name, template = _load_template(context.templates, name)
        rendered = template.render(variables)
    except jinja2.TemplateError as error:
        raise ShortcodeError(f"Failed to render {name} shortcode: {error}") from error

    rendered = _OUTER_NEWLINE_RE.sub("", rendered)
    if template_name.endswith(".html"):
        return f"<pre data-shortcode>{rendered}</pre>"
    return rendered


def render_shortcodes(content: str, context: RenderContext) -> str:
    """Replace every shortcode in the content with its rendered output."""
    invocations: Counter[str] = Counter()
    parts = []
    for segment in parse_page(content):
        if isinstance(segment, str):
            parts.append(segment)
            continue
        invocations[segment.name] += 1
        parts.append(
            render_shortcode(
                segment.name, segment.args, context, invocations[segment.name], segment.body
            )
        )
    return "".join(parts)