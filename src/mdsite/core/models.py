"""Data models for the parse and build pipeline"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class Heading(BaseModel):
    """A heading of the rendered body, in document order."""
    level: int
    text: str
    id: str


class Document(BaseModel):
    """A validated, rendered content file. Immutable once built."""
    model_config = {"frozen": True}

    type: str                       # document type name, e.g. "Post"
    slug: str
    path: str                       # POSIX path relative to the content dir
    flattened_path: str             # path without extension or trailing /index
    url: str
    hash: str                       # sha256 of the raw file (frontmatter included)
    fields: dict[str, Any]          # validated frontmatter, dumped by alias
    body_raw: str                   # markup without frontmatter
    body_html: str
    headings: list[Heading] = []
    word_count: int = 0
    reading_time: int = 1           # minutes


class BuildIssue(BaseModel):
    """A single file-level error recorded during a build."""
    path: Optional[str] = None
    step: str
    error_type: str
    message: str


class BuildResult(BaseModel):
    """Aggregate of all documents produced by one build invocation."""
    started_at:  datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    documents:   list[Document] = Field(default_factory=list)
    errors:      list[BuildIssue] = Field(default_factory=list)

    @property
    def all_documents(self) -> list[Document]:
        return list(self.documents)

    def by_type(self) -> dict[str, list[Document]]:
        """Documents grouped by type name; groups keep build order."""
        groups: dict[str, list[Document]] = {}
        for doc in self.documents:
            groups.setdefault(doc.type, []).append(doc)
        return groups

    def get(self, slug: str) -> Document | None:
        return next((d for d in self.documents if d.slug == slug), None)


@dataclass
class ParsedDoc:
    """Internal parse result; not persisted."""
    path:         Path          # absolute or cwd-relative file path
    rel_path:     str           # POSIX path relative to the content dir
    raw_markdown: str           # full file content (includes frontmatter)
    markdown:     str           # body only (frontmatter stripped)
    hash:         str
    frontmatter:  dict[str, Any]
