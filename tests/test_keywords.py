from __future__ import annotations

from bs4 import BeautifulSoup

from src.ingest.keywords import collect_keywords, find_alias, first_word, synthesize_title, tokenize
from src.ingest.sections import ItemType


def _heading(html: str, member_id: str):
    return BeautifulSoup(html, "html.parser").find(id=member_id)


def test_tokenize_keeps_duplicates_and_order():
    assert tokenize("Get(String key), get; get_Value") == ["Get", "String", "key", "get", "get_Value"]


def test_first_word():
    assert first_word("Reset()") == "Reset"
    assert first_word("op_Addition(Widget, Widget)") == "op_Addition"
    assert first_word("") == ""


def test_collect_stops_at_next_member_heading():
    h = _heading("""
    <h4 id="A_One">One()</h4>
    <div class="summary">First one.</div>
    <h5>Returns</h5>
    <h4 id="A_Two">Two()</h4>
    <div class="summary">Second one.</div>
    """, "A_One")
    keywords, alias = collect_keywords(h)
    assert keywords == ["First", "one", "Returns"]
    assert alias is None


def test_collect_runs_to_end_of_siblings():
    h = _heading("<div><h4 id='A_One'>One()</h4><p>x y</p><p>x</p></div>", "A_One")
    keywords, _ = collect_keywords(h)
    assert keywords == ["x", "y", "x"]


def test_alias_is_text_after_marker():
    h = _heading("""
    <h4 id="A_Clear">Clear()</h4>
    <h5 id="A_Clear_aliases">Aliases</h5>
    <p> Reset </p>
    """, "A_Clear")
    keywords, alias = collect_keywords(h)
    assert alias == "Reset"
    assert keywords == ["Aliases", "Reset"]


def test_alias_of_other_member_is_ignored():
    h = _heading("""
    <h4 id="A_One">One()</h4>
    <p>body</p>
    <h4 id="A_Two">Two()</h4>
    <h5 id="A_One_aliases">Aliases</h5>
    <p>Uno</p>
    """, "A_One")
    assert find_alias(h) is None


def test_alias_marker_without_text_sibling():
    h = _heading("<div><h4 id='A_One'>One()</h4><h5 id='A_One_aliases'>Aliases</h5></div>", "A_One")
    assert find_alias(h) is None


def test_title_rules():
    assert synthesize_title(ItemType.METHOD, "Reset()", "Widget") == "Method Reset in Widget"
    assert synthesize_title(ItemType.METHOD, "Reset()", "Widget", "Clear") == "Method Reset in Widget (like Clear)"
    assert synthesize_title(ItemType.CONSTRUCTOR, "Widget(Int32)", "Ignored") == "Constructor Widget(Int32)"
    assert synthesize_title(ItemType.CONSTRUCTOR, "Widget()", "W", "New") == "Constructor Widget() (like New)"
    assert synthesize_title(
        ItemType.EXPLICIT_INTERFACE_IMPLEMENTATION, "IDisposable.Dispose()", "Widget"
    ) == "Explicit Interface Implementation IDisposable in Widget"


def test_title_with_empty_signature():
    assert synthesize_title(ItemType.FIELD, "", "Widget") == "Field  in Widget"


def test_title_is_deterministic():
    args = (ItemType.PROPERTY, "Count", "Bag", None)
    assert synthesize_title(*args) == synthesize_title(*args)
