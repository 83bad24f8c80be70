"""Build error taxonomy: every error names the file and the step or field at fault"""

from pathlib import Path


class ContentError(Exception):
    """Base class for errors raised while building a content source."""

    step = "build"

    def __init__(self, path: Path | str | None, message: str):
        self.path = str(path) if path is not None else None
        self.message = message
        prefix = f"{self.path}: " if self.path else ""
        super().__init__(f"{prefix}[{self.step}] {message}")


class FrontmatterError(ContentError):
    """The YAML header of a content file could not be parsed."""

    step = "frontmatter"


class SchemaValidationError(ContentError):
    """Frontmatter does not satisfy the declared document schema."""

    step = "schema"

    def __init__(self, path: Path | str | None, field: str, message: str):
        self.field = field
        super().__init__(path, f"field '{field}': {message}")


class TransformError(ContentError):
    """A transform step failed on a document body."""

    def __init__(self, path: Path | str | None, step: str, message: str):
        self.step = step
        super().__init__(path, message)


class DuplicateSlugError(ContentError):
    """Two documents resolved to the same slug."""

    step = "slug"

    def __init__(self, path: Path | str, slug: str, other: str):
        self.slug = slug
        self.other = other
        super().__init__(path, f"slug '{slug}' already used by {other}")


class HookError(ContentError):
    """The build-completion hook raised."""

    step = "on_success"

    def __init__(self, message: str):
        super().__init__(None, message)


class BuildError(ContentError):
    """Fatal build failure; wraps the first error that aborted the build."""

    def __init__(self, cause: ContentError):
        self.cause = cause
        self.step = cause.step
        super().__init__(cause.path, cause.message)
