"""Code-block syntax highlighting with a fixed Pygments theme

Each fenced block becomes::

    figure[data-rehype-pretty-code-figure]
      figcaption[data-rehype-pretty-code-title]   (only with title="...")
      pre[data-language][data-theme]
        code[data-language][data-theme]
          span[data-line] (one per source line, joined by "\\n" text nodes)

Fence meta ``{1,3-5}`` flags lines for emphasis. After the line spans are
built, ``on_visit_line`` is called for every line and then
``on_visit_highlighted_line`` for each flagged one.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from mdsite.core.hast import Element, NodeVisitor, Root, Text, h


LineVisitor = Callable[[Element], None]

_RANGE_RE = re.compile(r'\{([\d,\s-]+)\}')
_TITLE_RE = re.compile(r'title=(["\'])(.*?)\1')
_PLAIN_ALIASES = {"plaintext", "plain", "txt"}


def parse_line_ranges(meta: str | None) -> set[int]:
    """Return 1-based line numbers from a '{1,3-5}' meta string."""
    if not meta:
        return set()
    m = _RANGE_RE.search(meta)
    if not m:
        return set()
    lines: set[int] = set()
    for part in m.group(1).split(','):
        part = part.strip()
        if not part:
            continue
        start, _, end = part.partition('-')
        first, last = int(start), int(end or start)
        if first < 1 or last < first:
            raise ValueError(f"Invalid line range '{part}'")
        lines.update(range(first, last + 1))
    return lines


def parse_title(meta: str | None) -> str | None:
    if not meta:
        return None
    m = _TITLE_RE.search(meta)
    return m.group(2) if m else None


def make_line_visitors(line_class: str = "line", highlighted_class: str = "line--highlighted") -> tuple[LineVisitor, LineVisitor]:
    """Line callbacks that keep every line non-empty and tag lines with marker classes."""

    def on_visit_line(node: Element) -> None:
        # an empty line would collapse in grid layout and could not be copied
        if not node.children:
            node.children = [Text(" ")]
        node.properties["class"] = [line_class]

    def on_visit_highlighted_line(node: Element) -> None:
        classes = node.classes
        if highlighted_class not in classes:
            classes.append(highlighted_class)
        node.properties["class"] = classes

    return on_visit_line, on_visit_highlighted_line


_default_line, _default_highlighted = make_line_visitors()


@dataclass(frozen=True)
class PrettyCode:
    name: str = "pretty-code"
    theme: str = "github-dark"
    fallback_language: Optional[str] = None
    keep_background: bool = True
    on_visit_line: LineVisitor = field(default=_default_line)
    on_visit_highlighted_line: LineVisitor = field(default=_default_highlighted)

    def __post_init__(self):
        # resolve eagerly so a bad theme name fails at configuration time
        get_style_by_name(self.theme)

    def _lexer(self, lang: str | None):
        options = {"stripnl": False, "ensurenl": False}
        name = "text" if not lang or lang in _PLAIN_ALIASES else lang
        try:
            return get_lexer_by_name(name, **options)
        except ClassNotFound:
            if self.fallback_language:
                return get_lexer_by_name(self.fallback_language, **options)
            raise ValueError(f"Unknown code language '{name}'") from None

    def _token_style(self, style, ttype) -> str:
        s = style.style_for_token(ttype)
        parts = []
        if s["color"]:
            parts.append(f"color:#{s['color']}")
        if s["italic"]:
            parts.append("font-style:italic")
        if s["bold"]:
            parts.append("font-weight:bold")
        if s["underline"]:
            parts.append("text-decoration:underline")
        return ";".join(parts)

    def highlight_lines(self, code: str, lang: str | None) -> list[Element]:
        """Tokenize code and return one span[data-line] per source line."""
        style = get_style_by_name(self.theme)
        if code.endswith("\n"):
            code = code[:-1]
        source_lines = code.split("\n")
        lines = [Element("span", {"data-line": True}) for _ in source_lines]

        row = 0
        for ttype, value in self._lexer(lang).get_tokens(code):
            for i, chunk in enumerate(value.split("\n")):
                if i:
                    row += 1
                if not chunk or row >= len(lines):
                    continue
                css = self._token_style(style, ttype)
                lines[row].children.append(h("span", {"style": css}, chunk) if css else Text(chunk))
        return lines

    def _render(self, code: Element) -> Element:
        lang = code.data.get("lang")
        meta = code.data.get("meta")
        code_text = "".join(c.value for c in code.children if isinstance(c, Text))
        lines = self.highlight_lines(code_text, lang)

        for line in lines:
            self.on_visit_line(line)
        for n in sorted(parse_line_ranges(meta)):
            if n <= len(lines):
                lines[n - 1].properties["data-highlighted-line"] = True
                self.on_visit_highlighted_line(lines[n - 1])

        shared = {"data-language": lang or "plaintext", "data-theme": self.theme}
        body: list = []
        for i, line in enumerate(lines):
            if i:
                body.append(Text("\n"))
            body.append(line)

        style = get_style_by_name(self.theme)
        pre_props = {}
        if self.keep_background:
            pre_props["style"] = f"background-color:{style.background_color}"
        pre_props.update({"tabindex": "0", **shared})
        new_pre = h("pre", pre_props, h("code", {**shared, "style": "display:grid"}, *body))

        figure = h("figure", {"data-rehype-pretty-code-figure": True})
        title = parse_title(meta)
        if title:
            figure.children.append(h("figcaption", {"data-rehype-pretty-code-title": True, **shared}, title))
        figure.children.append(new_pre)
        return figure

    def __call__(self, tree: Root) -> Root:
        _FencedBlocks(self._render).visit(tree)
        return tree


class _FencedBlocks(NodeVisitor):
    """Replaces each fenced pre > code with the output of render(code)."""

    def __init__(self, render: Callable[[Element], Element]):
        self.render = render

    def visit_element(self, node: Element, parent, index: int) -> None:
        code = node.children[0] if node.tag_name == "pre" and node.children else None
        if isinstance(code, Element) and code.tag_name == "code" and "lang" in code.data:
            parent.children[index] = self.render(code)
            return
        self.generic_visit(node)
