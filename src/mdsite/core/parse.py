"""File discovery and frontmatter extraction"""

import re
from pathlib import Path
from typing import Any

import yaml

from mdsite.core.models import ParsedDoc
from mdsite.core.utils.hashing import sha256
from mdsite.errors import FrontmatterError


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def parse_file(path: Path, content_dir: Path) -> ParsedDoc:
    """Read a content file and split it into frontmatter and body.

    Undecodable bytes and bad YAML both raise FrontmatterError naming the file.
    """
    try:
        rel_path = path.relative_to(content_dir).as_posix()
    except ValueError:
        rel_path = path.name
    try:
        raw = path.read_text(encoding="utf-8")
        frontmatter, body = _strip_frontmatter(raw)
    except ValueError as e:
        raise FrontmatterError(rel_path, str(e)) from e
    return ParsedDoc(
        path=path,
        rel_path=rel_path,
        raw_markdown=raw,
        markdown=body,
        hash=sha256(raw),
        frontmatter=frontmatter,
    )
