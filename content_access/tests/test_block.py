"""
Unit tests for ContentBlock read helpers.
"""

import pytest

from content_access.domain.block import ContentBlock, lookup, replace_vars
from content_access.domain.options import RequestOptions


@pytest.fixture
def content():
    """Loaded content for two sections."""
    return {
        "main": {"title": "Acme", "greeting": "Hello {{name}}, welcome to {{ place }}"},
        "home": {
            "team": {
                "b": {"name": "Bob"},
                "a": {"name": "Alice"},
            },
            "links": [{"label": "Docs"}, {"label": "Blog"}],
        },
    }


@pytest.fixture
def block(content):
    return ContentBlock("acme", None, content)


def test_lookup_nested_paths(content):
    """Dotted paths walk dicts and list indexes."""
    assert lookup(content, "main.title") == "Acme"
    assert lookup(content, "home.links.1.label") == "Blog"
    assert lookup(content, "home.missing.deeper") is None
    assert lookup(content, "home.links.9") is None


def test_replace_vars_leaves_unknown_placeholders():
    assert replace_vars("Hi {{name}} {{other}}", {"name": "Ann"}) == "Hi Ann {{other}}"
    assert replace_vars("Hi {{name}}") == "Hi {{name}}"


def test_get_and_id(block):
    """get resolves relative to the block path."""
    home = block.block("home")

    assert home.id() == "home"
    assert home.id("team.a") == "home.team.a"
    assert home.get("team.a.name") == "Alice"
    assert block.get() == block.content


def test_text_substitutes_vars(block):
    text = block.text("main.greeting", {"name": "Ann", "place": "Acme"})

    assert text == "Hello Ann, welcome to Acme"


def test_text_missing_published_is_empty(block):
    assert block.text("main.subtitle") == ""


def test_text_missing_draft_shows_placeholder(content):
    draft_block = ContentBlock("acme", None, content, RequestOptions(draft=True))

    assert draft_block.text("main.subtitle") == "[main.subtitle]"


def test_block_with_callback(block):
    assert block.block("main", lambda main: main.text("title")) == "Acme"


def test_map_dict_items_in_key_order(block):
    names = block.map("home.team", lambda item, index: (index, item.id(), item.text("name")))

    assert names == [(0, "home.team.a", "Alice"), (1, "home.team.b", "Bob")]


def test_map_list_items(block):
    labels = block.map("home.links", lambda item, index: item.text("label"))

    assert labels == ["Docs", "Blog"]


def test_map_missing_section_is_empty(block):
    assert block.map("home.nothing", lambda item, index: item) == []


def test_contains_and_to_dict(block, content):
    assert "main" in block
    assert "footer" not in block
    assert block.to_dict() == content
