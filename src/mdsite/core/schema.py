"""Document type declarations and frontmatter validation"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import PurePosixPath
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from mdsite.core.utils.slug import slugify
from mdsite.errors import SchemaValidationError


def _date_part(value: Any) -> Any:
    """Accept full timestamps for date fields by keeping only the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return value
    return value


ContentDate = Annotated[date, BeforeValidator(_date_part)]


class PostStatus(str, Enum):
    draft = "draft"
    published = "published"


class Series(BaseModel):
    """Ordering of a post within a multi-part series."""
    model_config = ConfigDict(extra="forbid")
    title: str
    order: int = Field(..., ge=1)


class PostFields(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    title:             str
    published_date:    ContentDate = Field(..., alias="publishedDate")
    last_updated_date: Optional[ContentDate] = Field(default=None, alias="lastUpdatedDate")
    description:       Optional[str] = None
    tags:              list[str] = Field(default_factory=list)
    status:            PostStatus = PostStatus.published
    series:            Optional[Series] = None
    slug:              Optional[str] = None


class PageFields(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    title:             str
    description:       Optional[str] = None
    last_updated_date: Optional[ContentDate] = Field(default=None, alias="lastUpdatedDate")
    slug:              Optional[str] = None


@dataclass(frozen=True)
class DocumentType:
    """A recognized document shape and the directory its files live under.

    directory "." matches every file in the content dir.
    """
    name:         str
    directory:    str
    fields_model: type[BaseModel]
    url_prefix:   str = ""

    def matches(self, rel_path: str) -> bool:
        if self.directory in ("", "."):
            return True
        return PurePosixPath(rel_path).parts[:len(self._root)] == self._root

    @property
    def _root(self) -> tuple[str, ...]:
        return PurePosixPath(self.directory).parts

    def flattened_path(self, rel_path: str) -> str:
        """Path without extension; a trailing 'index' segment is dropped."""
        p = PurePosixPath(rel_path).with_suffix("")
        if p.name == "index" and p.parent != PurePosixPath("."):
            p = p.parent
        return p.as_posix()

    def slug_for(self, rel_path: str) -> str:
        """Slugify each path segment below the type directory, joined by '/'."""
        parts = PurePosixPath(self.flattened_path(rel_path)).parts
        if self.directory not in ("", "."):
            parts = parts[len(self._root):]
        segments = [s for s in (slugify(p) for p in parts) if s]
        if not segments:
            return slugify(PurePosixPath(self.directory).name or self.name)
        return "/".join(segments)

    def url_for(self, slug: str) -> str:
        return f"{self.url_prefix.rstrip('/')}/{slug}"


Post = DocumentType(name="Post", directory="posts", fields_model=PostFields, url_prefix="/posts")
Page = DocumentType(name="Page", directory="pages", fields_model=PageFields)

DEFAULT_DOCUMENT_TYPES = (Post, Page)


def select_type(document_types: tuple[DocumentType, ...], rel_path: str) -> DocumentType | None:
    """Return the first declared type whose directory contains rel_path."""
    return next((t for t in document_types if t.matches(rel_path)), None)


def validate_fields(doc_type: DocumentType, frontmatter: dict[str, Any], path: str) -> BaseModel:
    """Validate frontmatter against the type's schema; raise naming the first offending field."""
    try:
        return doc_type.fields_model.model_validate(frontmatter)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "<root>"
        raise SchemaValidationError(path, field, first["msg"]) from e
