"""Heading ids and heading self-links"""

from dataclasses import dataclass, field

from mdsite.core.hast import HEADING_TAGS, Element, Root, elements, h, to_string
from mdsite.core.utils.slug import Slugger


HEADING_LINK_ANCHOR = "anchor-heading-link"


@dataclass(frozen=True)
class HeadingIds:
    """Give every heading without an id a slug of its text, unique within the tree."""
    name: str = "slug"
    prefix: str = ""

    def __call__(self, tree: Root) -> Root:
        slugger = Slugger()
        for el in elements(tree, HEADING_TAGS):
            if not el.properties.get("id"):
                el.properties["id"] = self.prefix + slugger.slug(to_string(el))
        return tree


@dataclass(frozen=True)
class HeadingLinks:
    """Insert one self-link per heading that has an id.

    wrap:    the heading's content becomes the link's content
    prepend: an empty icon link is inserted before the content
    append:  an empty icon link is inserted after the content
    """
    name: str = "autolink-headings"
    behavior: str = "wrap"
    properties: dict = field(default_factory=lambda: {"class": [HEADING_LINK_ANCHOR]})

    def __post_init__(self):
        if self.behavior not in ("wrap", "prepend", "append"):
            raise ValueError(f"Unknown heading link behavior: {self.behavior}")

    def _link(self, heading_id: str, *children) -> Element:
        props = {k: list(v) if isinstance(v, list) else v for k, v in self.properties.items()}
        if self.behavior != "wrap":
            props.setdefault("aria-hidden", "true")
            props.setdefault("tabindex", "-1")
        props["href"] = f"#{heading_id}"
        return h("a", props, *children)

    def __call__(self, tree: Root) -> Root:
        for el in elements(tree, HEADING_TAGS):
            heading_id = el.properties.get("id")
            if not heading_id:
                continue
            if self.behavior == "wrap":
                el.children = [self._link(heading_id, *el.children)]
            else:
                icon = self._link(heading_id, h("span", {"class": ["icon", "icon-link"]}))
                if self.behavior == "prepend":
                    el.children.insert(0, icon)
                else:
                    el.children.append(icon)
        return tree
