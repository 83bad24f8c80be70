"""Shared fixtures for core unit tests"""

import pytest

from mdsite.config import Settings
from mdsite.core.chain import TransformChain
from mdsite.core.hast import Element, elements, to_html
from mdsite.core.source import default_transforms


SCENARIO_MD = """\
---
title: T
publishedDate: 2024-01-01
---

# Intro

```js {3}
const a = 1;

const b = 2;
```
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="chain")
def chain_fixture(settings):
    """The default six-step chain."""
    return TransformChain(default_transforms(settings), settings.parser_config)


@pytest.fixture(name="render")
def render_fixture(chain):
    """Render a markdown body to an HTML string through the default chain."""
    def _render(md: str) -> str:
        return to_html(chain.run(md))
    return _render


def code_lines(tree) -> list[Element]:
    """All span[data-line] elements of a tree, in order."""
    return list(elements(tree, lambda e: "data-line" in e.properties))


@pytest.fixture(name="line_nodes")
def line_nodes_fixture():
    return code_lines


@pytest.fixture(name="scenario_md")
def scenario_md_fixture():
    """A post with one heading and a three-line fenced block, line 3 flagged."""
    return SCENARIO_MD


@pytest.fixture(name="content")
def content_fixture(tmp_path, scenario_md):
    """content/ holding posts/hello.mdx and pages/about.md."""
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    (root / "pages").mkdir()
    (root / "posts" / "hello.mdx").write_text(scenario_md)
    (root / "pages" / "about.md").write_text("---\ntitle: About\n---\n\nAbout this site.\n")
    return root
