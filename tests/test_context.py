import jinja2
import pytest

from sitegen.context import InsertAnchor, RenderContext


class FakeConfig:
    base_url = "https://example.com"


def test_new_context_exposes_config_to_templates():
    config = FakeConfig()
    env = jinja2.Environment(loader=jinja2.DictLoader({"a.html": "x"}))
    permalinks = {"pages/about.md": "https://example.com/about"}
    ctx = RenderContext(env, config, "https://example.com/page/", permalinks, InsertAnchor.LEFT)
    assert ctx.tera_context == {"config": config}
    assert ctx.templates is env
    assert ctx.permalinks is permalinks
    assert ctx.current_page_permalink == "https://example.com/page/"
    assert ctx.insert_anchor is InsertAnchor.LEFT


def test_from_config_is_empty():
    config = FakeConfig()
    ctx = RenderContext.from_config(config)
    assert ctx.config is config
    assert ctx.tera_context == {}
    assert ctx.permalinks == {}
    assert ctx.current_page_permalink == ""
    assert ctx.insert_anchor is InsertAnchor.NONE
    assert ctx.templates.list_templates() == []


def test_from_config_contexts_do_not_share_state():
    first = RenderContext.from_config(FakeConfig())
    second = RenderContext.from_config(FakeConfig())
    first.permalinks["a.md"] = "/a"
    assert second.permalinks == {}


@pytest.mark.parametrize("anchor", list(InsertAnchor))
def test_context_keeps_each_insert_anchor(anchor):
    env = jinja2.Environment(loader=jinja2.DictLoader({}))
    ctx = RenderContext(env, FakeConfig(), "", {}, anchor)
    assert ctx.insert_anchor is anchor
    assert {member.name for member in InsertAnchor} == {"LEFT", "RIGHT", "NONE"}