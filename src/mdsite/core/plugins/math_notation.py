"""Math notation: $inline$ / $$display$$ recognition, and rendering to MathML"""

from dataclasses import dataclass

from latex2mathml.converter import convert
from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

from mdsite.core.hast import Element, Raw, Root, elements, to_string


@dataclass(frozen=True)
class MathSyntax:
    """Recognize dollar-delimited math; nodes carry their TeX source as text."""
    name: str = "math"
    allow_space: bool = True
    double_inline: bool = True

    def configure(self, md: MarkdownIt) -> None:
        md.use(dollarmath_plugin, allow_space=self.allow_space, double_inline=self.double_inline)


def _is_math(el: Element) -> bool:
    return el.has_class("math-inline") or el.has_class("math-display")


@dataclass(frozen=True)
class MathRender:
    """Replace the TeX source of every math node with presentational MathML."""
    name: str = "katex"

    def __call__(self, tree: Root) -> Root:
        for el in list(elements(tree, _is_math)):
            tex = to_string(el)
            display = "block" if el.has_class("math-display") else "inline"
            el.children = [Raw(convert(tex, display=display))]
        return tree
