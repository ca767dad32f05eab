# tests/core/test_engine.py
import pytest

from accessibility_checker.config import Configuration
from accessibility_checker.dom.core import CommentNode, ElementNode, TextNode
from accessibility_checker.dom.engine import AuditEngine
from accessibility_checker.dom.models import HTMLDocument
from accessibility_checker.errors import ConfigurationError
from accessibility_checker.model import SourceRange
from accessibility_checker.stats.aggregator import aggregate

IMG_ALT = "img element missing alt attribute"

SAMPLE_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta http-equiv="refresh" content="30">
</head>
<body onmouseover="track()">
  <h1>Shop</h1>
  <h3>Offers</h3>
  <h2>Products</h2>
  <h1>Second title</h1>
  <img src="banner.png">
  <a><img src="cart.png"></a>
  <center>Welcome</center>
  <div id="box"></div><div id="box"></div>
  <form>
    <label for="q"></label>
    <input id="q" type="text">
    <input type="radio" name="size"><input type="radio" name="size">
    <input type="submit">
  </form>
  <table><tr><th></th></tr></table>
  <marquee>News</marquee>
</body>
</html>
"""


def element(tag, line, children=None, **attrs):
    return ElementNode(
        tag=tag,
        attrs=attrs,
        children=children or [],
        source_range=SourceRange.from_coords(line, 0, line, 5)
    )


def test_traversal_is_pre_order(only_rules):
    """Parents are checked before their children, children before the next sibling."""
    tree = element("div", 0, [
        element("img", 1),
        element("p", 2, [TextNode(data="text"), element("img", 3), CommentNode(data="note")]),
    ])
    doc = HTMLDocument(nodes=[tree, element("img", 4)])

    diagnostics = AuditEngine(only_rules(IMG_ALT)).traverse(doc)

    assert [d.range.start.line for d in diagnostics] == [1, 3, 4]


def test_rules_run_in_declaration_order(only_rules, rules):
    names = [
        "onmousedown event missing onkeydown event",
        "onmouseover event handler missing onfocus event handler",
    ]
    doc = HTMLDocument(nodes=[element("div", 0, onmouseover="a()", onmousedown="b()")])
    diagnostics = AuditEngine(only_rules(*names)).traverse(doc)

    declared = [r.name for r in rules if r.name in names]
    assert [d.rule for d in diagnostics] == declared


def test_traversal_is_deterministic(builder, config):
    doc = builder.parse_doc(SAMPLE_PAGE)
    engine = AuditEngine(config)
    first = engine.traverse(doc)
    second = engine.traverse(doc)
    assert first == second
    assert len(first) > 10


def test_traversal_does_not_mutate_document(builder, config):
    doc = builder.parse_doc(SAMPLE_PAGE)
    snapshot = doc.model_copy(deep=True)
    AuditEngine(config).traverse(doc)
    assert doc.nodes == snapshot.nodes


def test_children_checked_even_when_parent_fails(only_rules):
    tree = element("a", 0, [element("img", 1)])
    diagnostics = AuditEngine(only_rules(IMG_ALT, "Include an href attribute to make text a hyperlink")).traverse(
        HTMLDocument(nodes=[tree])
    )
    assert [d.rule for d in diagnostics] == ["Include an href attribute to make text a hyperlink", IMG_ALT]


def test_missing_positions_degrade_to_no_diagnostic(config):
    tree = ElementNode(tag="html", children=[ElementNode(tag="img"), ElementNode(tag="center")])
    assert AuditEngine(config).traverse(HTMLDocument(nodes=[tree])) == []


def test_empty_document(config):
    assert AuditEngine(config).traverse(HTMLDocument()) == []


def test_engine_rejects_incomplete_configuration(config, rules):
    partial = {category: subs for category, subs in config.rules.items() if category != "robust"}
    with pytest.raises(ConfigurationError) as exc_info:
        AuditEngine(Configuration.from_mapping(partial))
    assert any("id attribute is not unique" in m for m in exc_info.value.missing)


def test_tallies_match_coded_diagnostics(builder, config):
    diagnostics = AuditEngine(config).traverse(builder.parse_doc(SAMPLE_PAGE))
    stats = aggregate(diagnostics)

    coded = [d for d in diagnostics if d.code]
    assert sum(stats.tallies) == len(coded)
    assert stats.uncoded == len(diagnostics) - len(coded)
    assert all(t > 0 for t in stats.tallies)
