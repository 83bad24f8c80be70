"""Unit tests for core/hast.py"""

from mdsite.core.hast import (
    Element, NodeVisitor, Raw, Root, Text, elements, h, to_html, to_string, walk,
)


def test_h_wraps_string_children():
    """h() turns string children into Text nodes."""
    el = h("p", {"class": ["lead"]}, "hi", h("em", None, "there"))
    assert el.children[0] == Text("hi")
    assert el.children[1].tag_name == "em"


def test_to_html_escapes_text_and_attributes():
    """Text and attribute values are HTML-escaped; Raw is written verbatim."""
    tree = Root([h("a", {"title": 'say "hi"'}, "<b>&"), Raw("<math></math>")])
    assert to_html(tree) == '<a title="say &quot;hi&quot;">&lt;b&gt;&amp;</a><math></math>'


def test_to_html_attribute_kinds():
    """True renders as an empty attribute, False/None are omitted, lists are space-joined."""
    el = h("span", {"data-line": True, "hidden": False, "title": None, "class": ["line", "x"]})
    assert to_html(el) == '<span data-line="" class="line x"></span>'


def test_to_html_void_elements():
    """Void elements have no closing tag."""
    assert to_html(h("p", None, "a", Element("br"), "b")) == "<p>a<br>b</p>"


def test_walk_document_order():
    """walk yields descendants depth-first in document order."""
    tree = Root([h("p", None, "a", h("em", None, "b")), h("p", None, "c")])
    texts = [n.value for n in walk(tree) if isinstance(n, Text)]
    assert texts == ["a", "b", "c"]


def test_elements_filters():
    """elements() accepts a tag name, tuple of tags, or predicate."""
    tree = Root([h("h1", None, "A"), h("p", None, h("code", None, "x")), h("h2", None, "B")])
    assert [e.tag_name for e in elements(tree, "code")] == ["code"]
    assert [e.tag_name for e in elements(tree, ("h1", "h2"))] == ["h1", "h2"]
    assert len(list(elements(tree, lambda e: e.tag_name.startswith("h")))) == 2


def test_to_string_strips_raw_markup():
    """to_string concatenates text and drops tags inside Raw nodes."""
    el = h("h2", None, "Energy ", Raw("<math><mi>E</mi></math>"))
    assert to_string(el) == "Energy E"


def test_node_visitor_dispatches_by_kind():
    """NodeVisitor calls visit_<kind> with parent and index."""
    seen = []

    class Collector(NodeVisitor):
        def visit_text(self, node, parent, index):
            seen.append((node.value, parent.tag_name, index))

        def visit_raw(self, node, parent, index):
            seen.append(("raw", parent.tag_name, index))

    Collector().visit(Root([h("p", None, "a", Raw("<i></i>"), "b")]))
    assert seen == [("a", "p", 0), ("raw", "p", 1), ("b", "p", 2)]


def test_element_classes_copy():
    """classes returns a copy; mutating it does not change the element."""
    el = h("span", {"class": ["line"]})
    el.classes.append("other")
    assert el.properties["class"] == ["line"]
    assert el.has_class("line")
