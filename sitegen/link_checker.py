"""Checking that external links resolve, with anchors where they have one."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from http import HTTPStatus
from urllib.parse import urldefrag

import requests

USER_AGENT = "sitegen/0.13.0"

_ACCEPT = "text/html, */*"
_ANCHOR_ATTRIBUTE_TEMPLATES = (
    " id={}",
    " ID={}",
    " id='{}'",
    " ID='{}'",
    ' id="{}"',
    ' ID="{}"',
    " name={}",
    " NAME={}",
    " name='{}'",
    " NAME='{}'",
    ' name="{}"',
    ' NAME="{}"',
)


@dataclass
class LinkCheckerConfig:
    """Prefixes of URLs to leave unchecked, wholly or for their anchor."""

    skip_prefixes: list[str] = field(default_factory=list)
    skip_anchor_prefixes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of checking one URL: a status code, or an error description."""

    status: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the check produced a status code rather than an error."""
        return self.error is None


class AnchorNotFound(Exception):
    """The page does not contain the anchor the URL points to."""


def _status_text(code: int) -> str:
    try:
        reason = HTTPStatus(code).phrase
    except ValueError:
        reason = "<unknown status code>"
    return f"{code} {reason}"


def _is_success(code: int) -> bool:
    return 200 <= code < 300 or code == HTTPStatus.NOT_MODIFIED


def is_valid(result: CheckResult) -> bool:
    """Whether the link is good: a success status or 304 Not Modified."""
    return result.ok and result.status is not None and _is_success(result.status)


def message(result: CheckResult) -> str:
    """A human-readable description of the result."""
    if result.ok:
        return _status_text(result.status)
    return result.error


def has_anchor(url: str) -> bool:
    """Whether the URL has an anchor, ignoring client-side router fragments."""
    index = url.find("#")
    if index == -1:
        return False
    marker = url[index : index + 2]
    if len(marker) < 2:
        return False
    return marker not in ("#/", "#!")


def check_page_for_anchor(url: str, body: str) -> None:
    """Raise AnchorNotFound unless the body declares the URL's anchor as an id or name."""
    anchor = url[url.index("#") + 1 :]
    if any(template.format(anchor) in body for template in _ANCHOR_ATTRIBUTE_TEMPLATES):
        return
    raise AnchorNotFound(f"Anchor `#{anchor}` not found on page")


_cache: dict[str, CheckResult] = {}
_cache_lock = threading.Lock()


def clear_cache() -> None:
    """Forget every result remembered from earlier checks."""
    with _cache_lock:
        _cache.clear()


def _normalized(url: str) -> str:
    try:
        return requests.Request("GET", url).prepare().url
    except requests.RequestException:
        return url


def _status_error(code: int) -> str:
    text = _status_text(code)
    if 100 <= code < 200:
        return f"Informational status code ({text}) received"
    if 300 <= code < 400:
        return f"Redirection status code ({text}) received"
    if 400 <= code < 500:
        return f"Client error status code ({text}) received"
    if 500 <= code < 600:
        return f"Server error status code ({text}) received"
    return f"Non-success status code ({text}) received"


def check_url(url: str, config: LinkCheckerConfig) -> CheckResult:
    """Fetch the URL and report whether it, and its anchor if any, exists.

    Results are remembered so that a URL is only fetched once.
    """
    with _cache_lock:
        cached = _cache.get(url)
    if cached is not None:
        return cached

    check_anchor = not any(url.startswith(prefix) for prefix in config.skip_anchor_prefixes)
    headers = {"Accept": _ACCEPT, "User-Agent": USER_AGENT}

    try:
        response = requests.get(urldefrag(url).url, headers=headers)
    except requests.RequestException as error:
        result = CheckResult(
            error=f"error sending request for url ({_normalized(url)}): {error}"
        )
    else:
        if check_anchor and has_anchor(url):
            try:
                body = response.content.decode("utf-8")
            except UnicodeDecodeError:
                return CheckResult(error="The page didn't return valid UTF-8")
            try:
                check_page_for_anchor(url, body)
            except AnchorNotFound as error:
                result = CheckResult(error=str(error))
            else:
                result = CheckResult(status=response.status_code)
        elif _is_success(response.status_code):
            result = CheckResult(status=response.status_code)
        else:
            result = CheckResult(error=_status_error(response.status_code))

    with _cache_lock:
        _cache[url] = result
    return result