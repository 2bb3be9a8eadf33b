# sitegen

Building blocks for a static site generator. This is a library; it installs
no commands.

## What it provides

### Render context (`sitegen.context`)

`RenderContext` is a dataclass that holds the data used while rendering
content:

- `templates`: a `jinja2.Environment`.
- `config`: the site configuration object.
- `current_page_permalink`: the permalink of the page being rendered.
- `permalinks`: a dict of the known permalinks.
- `insert_anchor`: an `InsertAnchor` value, one of `LEFT`, `RIGHT` or `NONE`.
- `tera_context`: the variables given to every template. When you leave it
  out, it is `{"config": config}`.

`RenderContext.from_config(config)` builds a context with an empty template
environment, no permalinks and no template variables.

### Shortcodes (`sitegen.shortcode`)

The shortcode module recognises two kinds of call:

- Inline shortcodes: `{{ name(key=value, ...) }}`.
- Shortcodes with a body: `{% name(...) %}body{% end %}`.

An argument value can be one of these:

- a string in `"`, `'` or backquotes
- an integer
- a float
- `true` or `false`
- an array of such literals

Functions:

- `parse_page(content)` splits content into plain-text strings and
  `Shortcode` objects, each with `name`, `args` and `body`.
  - Escaped calls such as `{{/* name() */}}` and
    `{%/* name() */%}...{%/* end */%}` come back as text, without the
    `/*` `*/` markers.
- `parse_shortcode_call(source)` returns `(name, args)` for one inline call.
- `render_shortcode(name, args, context, invocation_count, body)` renders one
  call through its template.
- `render_shortcodes(content, context)` replaces every call in the content
  with its rendered output.

How a call is rendered:

- The template `shortcodes/<name>.md` is used if it exists, and
  `shortcodes/<name>.html` otherwise.
- The template receives:
  - the call's keyword arguments;
  - `body`, for a call with a body, with trailing whitespace removed;
  - `nth`, how many times this shortcode name has been called so far,
    counting from 1;
  - the context's `tera_context`.
- Leading and trailing blank lines of the output are removed.
- Output from an `.html` template is wrapped in `<pre data-shortcode>...</pre>`.
- Parse and template failures raise `ShortcodeError`.

### Tables of contents (`sitegen.table_of_contents`)

`make_table_of_contents(headings)` nests a flat list of `Heading` objects,
given in document order, into a tree. A `Heading` has the fields `level`,
`id`, `permalink`, `title` and `children`.

### Code-block line highlighting (`sitegen.codeblock`)

These helpers work on highlighted code given as `(style, text)` pairs. Each
style is a dataclass with a `background` field.

- `find_line_boundaries(styled)` returns the position, as a `StyledIdx`, of
  every newline.
- `perform_split(styled, line_boundaries)` splits the items so that every
  newline ends its item.
- `highlighted_lines(ranges, num_lines)` turns one-based inclusive
  `(start, end)` ranges into a set of zero-based line indexes. Each range is
  clipped to the number of lines.
- `color_highlighted_lines(styled, lines, background)` returns the items with
  the given background applied to the chosen lines.

### Search index rows (`sitegen.search`)

`SearchConfig` chooses which fields are indexed: `include_title`,
`include_description` and `include_content`. Its
`truncate_content_length` setting limits the body length.

- `build_fields(config)` lists the field names, in order.
- `fill_index(config, title, description, content)` builds the matching row
  for one document.
- `clean_html(content)` removes all markup, together with the content of
  `script` and `style` elements. It then escapes `&`, `<`, `>` and
  non-breaking spaces in the text.

### Link checking (`sitegen.link_checker`)

- `check_url(url, config)` fetches a URL with `requests` and returns a
  `CheckResult`.
  - Results are cached per URL; `clear_cache()` empties the cache.
  - If the URL has an anchor, the page must contain an element whose `id`
    or `name` matches it. URLs that start with one of
    `LinkCheckerConfig.skip_anchor_prefixes` skip this check.
  - Fragments starting `#/` or `#!` are not treated as anchors.
- `is_valid(result)` is true for any 2xx status and for 304.
- `message(result)` gives text such as `200 OK`, or the error message.
- `has_anchor(url)` tells whether a URL has an anchor.
- `check_page_for_anchor(url, body)` raises `AnchorNotFound` when the body
  does not contain the URL's anchor.

## Example

```python
import jinja2

from sitegen.context import RenderContext
from sitegen.shortcode import render_shortcodes
from sitegen.table_of_contents import Heading, make_table_of_contents

templates = jinja2.Environment(
    loader=jinja2.DictLoader({"shortcodes/youtube.html": "Video {{ id }}"})
)
context = RenderContext(templates=templates, config=None)
print(render_shortcodes("Hi {{ youtube(id=1) }}", context))
# Hi <pre data-shortcode>Video 1</pre>

toc = make_table_of_contents([Heading(level=1), Heading(level=2), Heading(level=2)])
assert len(toc) == 1 and len(toc[0].children) == 2
```

## What it does not do

This package has none of the following:

- Markdown-to-HTML conversion: shortcodes are rendered, but the text around
  them is left as written.
- Syntax highlighting: the code-block helpers only split and recolour
  fragments that are already highlighted.
- A search index format: `fill_index` produces rows, not an index file.
- Site building, a development server, or a command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```