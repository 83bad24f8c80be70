"""Conversion of a markdown-it token stream into the HTML syntax tree"""

from markdown_it.tree import SyntaxTreeNode

from mdsite.core.hast import Element, Node, Raw, Root, Text, to_string


def _properties(node: SyntaxTreeNode) -> dict:
    """Copy token attrs into element properties, splitting class into a list."""
    props = {}
    for key, value in node.attrs.items():
        if key == 'class':
            props['class'] = str(value).split()
        else:
            props[key] = value
    return props


def _fence(node: SyntaxTreeNode) -> Element:
    """Fenced code: pre > code.language-x; the info string tail is kept as meta."""
    info = (node.info or '').strip()
    lang, _, meta = info.partition(' ')
    code = Element('code', {'class': [f"language-{lang}"]} if lang else {}, [Text(node.content)])
    code.data = {'lang': lang or None, 'meta': meta.strip() or None}
    return Element('pre', {}, [code])


def _image(node: SyntaxTreeNode) -> Element:
    props = {'src': node.attrs.get('src', ''), 'alt': to_string(Root(_children(node)))}
    if node.attrs.get('title'):
        props['title'] = node.attrs['title']
    return Element('img', props)


def _math(node: SyntaxTreeNode, display: bool) -> Element:
    """Math nodes keep their TeX source as text until the math render step."""
    if display:
        return Element('div', {'class': ['math', 'math-display']}, [Text(node.content.strip())])
    return Element('span', {'class': ['math', 'math-inline']}, [Text(node.content)])


def _children(node: SyntaxTreeNode) -> list[Node]:
    out: list[Node] = []
    for child in node.children:
        out.extend(_convert(child))
    return out


def _convert(node: SyntaxTreeNode) -> list[Node]:
    t = node.type
    if t == 'inline':
        return _children(node)
    if t == 'text':
        return [Text(node.content)]
    if t == 'softbreak':
        return [Text('\n')]
    if t == 'hardbreak':
        return [Element('br')]
    if t in ('html_inline', 'html_block'):
        return [Raw(node.content)]
    if t == 'code_inline':
        return [Element('code', {}, [Text(node.content)])]
    if t == 'code_block':
        return [Element('pre', {}, [Element('code', {}, [Text(node.content)])])]
    if t == 'fence':
        return [_fence(node)]
    if t == 'image':
        return [_image(node)]
    if t == 'hr':
        return [Element('hr')]
    if t in ('math_inline', 'math_inline_double'):
        return [_math(node, display=t == 'math_inline_double')]
    if t in ('math_block', 'math_block_label'):
        return [_math(node, display=True)]
    if t == 'paragraph' and node.hidden:
        # tight list items render their paragraph content without a <p>
        return _children(node)
    return [Element(node.tag, _properties(node), _children(node))]


def tokens_to_tree(tokens: list) -> Root:
    """Build a Root from a flat markdown-it token list."""
    return Root(_children(SyntaxTreeNode(tokens)))
