"""Transform chain: parser extensions followed by syntax-tree rewriters, in fixed order"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from markdown_it import MarkdownIt

from mdsite.core.convert import tokens_to_tree
from mdsite.core.hast import Root
from mdsite.errors import TransformError


logger = logging.getLogger(__name__)


@runtime_checkable
class ParserTransform(Protocol):
    """Extends the markup grammar; applied once to the shared parser."""
    name: str

    def configure(self, md: MarkdownIt) -> None: ...


@runtime_checkable
class TreeTransform(Protocol):
    """Rewrites a document's syntax tree. Receives the previous step's output."""
    name: str

    def __call__(self, tree: Root) -> Root: ...


Transform = ParserTransform | TreeTransform


@dataclass(frozen=True)
class TransformChain:
    """An ordered, validated list of transforms bound to one parser.

    Parser transforms must all precede tree transforms: grammar extensions run
    while tokenizing, before any tree exists.
    """
    transforms: tuple[Transform, ...]
    parser_config: str = "gfm-like"

    def __post_init__(self):
        seen_tree = False
        for t in self.transforms:
            if isinstance(t, ParserTransform):
                if seen_tree:
                    raise ValueError(f"Parser transform '{t.name}' must come before tree transforms")
            elif isinstance(t, TreeTransform):
                seen_tree = True
            else:
                raise TypeError(f"Not a transform: {t!r}")
        object.__setattr__(self, "_parser", self._make_parser())

    def _make_parser(self) -> MarkdownIt:
        md = MarkdownIt(self.parser_config, options_update={"linkify": False})
        for t in self.parser_transforms:
            t.configure(md)
        return md

    @property
    def parser(self) -> MarkdownIt:
        return self._parser

    @property
    def parser_transforms(self) -> list[ParserTransform]:
        return [t for t in self.transforms if isinstance(t, ParserTransform)]

    @property
    def tree_transforms(self) -> list[TreeTransform]:
        return [t for t in self.transforms if isinstance(t, TreeTransform)]

    @property
    def names(self) -> list[str]:
        return [t.name for t in self.transforms]

    def run(self, body: str, path: str = None) -> Root:
        """Parse body and apply each tree transform in order. Any failure aborts the document."""
        try:
            tree = tokens_to_tree(self.parser.parse(body))
        except Exception as e:
            raise TransformError(path, "parse", str(e)) from e

        for t in self.tree_transforms:
            logger.debug("%s: %s", path, t.name)
            try:
                tree = t(tree)
            except Exception as e:
                raise TransformError(path, t.name, f"{type(e).__name__}: {e}") from e
        return tree
