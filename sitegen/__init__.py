"""Building blocks for a static site generator: shortcodes, render context, tables of contents, code-block line highlighting, search rows and link checks."""

__version__ = "0.13.0"