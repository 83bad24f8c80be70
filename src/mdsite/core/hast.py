"""HTML syntax tree: node kinds, a typed visitor, and serialization to HTML

The tree is a tagged union of four node kinds. ``Root`` and ``Element`` hold
children; ``Text`` holds escaped-on-output text; ``Raw`` holds markup that is
already HTML (MathML, passthrough html blocks) and is written verbatim.
"""

import html
import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator, Union


VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
}
HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
_TAG_RE = re.compile(r'<[^>]*>')


@dataclass
class Text:
    value: str
    type: ClassVar[str] = 'text'


@dataclass
class Raw:
    value: str
    type: ClassVar[str] = 'raw'


@dataclass
class Element:
    tag_name: str
    properties: dict[str, Any] = field(default_factory=dict)
    children: list['Node'] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)   # transform-only metadata, never serialized
    type: ClassVar[str] = 'element'

    @property
    def classes(self) -> list[str]:
        """Class list of the element (empty list when unset)."""
        return list(self.properties.get('class') or [])

    def has_class(self, name: str) -> bool:
        return name in self.classes


@dataclass
class Root:
    children: list['Node'] = field(default_factory=list)
    type: ClassVar[str] = 'root'


Node = Union[Element, Text, Raw]
Parent = Union[Root, Element]


def h(tag_name: str, properties: dict[str, Any] = None, *children: Node | str) -> Element:
    """Element shorthand; string children become Text nodes."""
    return Element(
        tag_name,
        dict(properties or {}),
        [Text(c) if isinstance(c, str) else c for c in children],
    )


class NodeVisitor:
    """Depth-first visitor dispatching on node kind.

    Subclasses override ``visit_element``, ``visit_text`` or ``visit_raw``.
    Each receives the node, its parent and its index in the parent. The
    default element handler descends into children; child lists are copied
    before iteration so handlers may replace the node they are visiting.
    """

    def visit(self, node: Root | Node, parent: Parent | None = None, index: int | None = None) -> None:
        method = getattr(self, f"visit_{node.type}")
        method(node, parent, index)

    def visit_root(self, node: Root, parent: None, index: None) -> None:
        self.generic_visit(node)

    def visit_element(self, node: Element, parent: Parent, index: int) -> None:
        self.generic_visit(node)

    def visit_text(self, node: Text, parent: Parent, index: int) -> None:
        pass

    def visit_raw(self, node: Raw, parent: Parent, index: int) -> None:
        pass

    def generic_visit(self, node: Parent) -> None:
        for i, child in enumerate(list(node.children)):
            self.visit(child, node, i)


def walk(node: Root | Node) -> Iterator[Node]:
    """Yield every descendant of node in document order (node itself excluded)."""
    for child in getattr(node, 'children', ()):
        yield child
        yield from walk(child)


def elements(node: Root | Node, test: Callable[[Element], bool] | str | tuple = None) -> Iterator[Element]:
    """Yield descendant elements matching a tag name, tuple of tag names or predicate."""
    for n in walk(node):
        if not isinstance(n, Element):
            continue
        if test is None:
            yield n
        elif isinstance(test, str):
            if n.tag_name == test:
                yield n
        elif isinstance(test, tuple):
            if n.tag_name in test:
                yield n
        elif test(n):
            yield n


def to_string(node: Root | Node) -> str:
    """Concatenated text content of a node (markup in Raw nodes is stripped)."""
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Raw):
        return _TAG_RE.sub('', node.value)
    return ''.join(to_string(c) for c in node.children)


def _attribute(name: str, value: Any) -> str:
    if value is None or value is False:
        return ''
    if value is True:
        return f' {name}=""'
    if isinstance(value, (list, tuple)):
        value = ' '.join(str(v) for v in value)
    return f' {name}="{html.escape(str(value), quote=True)}"'


def to_html(node: Root | Node) -> str:
    """Serialize a tree to an HTML string. Attribute order follows insertion order."""
    if isinstance(node, Text):
        return html.escape(node.value, quote=False)
    if isinstance(node, Raw):
        return node.value
    if isinstance(node, Root):
        return ''.join(to_html(c) for c in node.children)

    attrs = ''.join(_attribute(k, v) for k, v in node.properties.items())
    if node.tag_name in VOID_ELEMENTS:
        return f"<{node.tag_name}{attrs}>"
    inner = ''.join(to_html(c) for c in node.children)
    return f"<{node.tag_name}{attrs}>{inner}</{node.tag_name}>"
