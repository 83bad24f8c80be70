"""Content source: the immutable configuration value a build runs against"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from mdsite.config import Settings
from mdsite.core.chain import TransformChain
from mdsite.core.hooks import Hook, load_hook, log_document_count
from mdsite.core.plugins.gfm import Gfm
from mdsite.core.plugins.headings import HeadingIds, HeadingLinks
from mdsite.core.plugins.math_notation import MathRender, MathSyntax
from mdsite.core.plugins.pretty_code import PrettyCode, make_line_visitors
from mdsite.core.schema import DEFAULT_DOCUMENT_TYPES, DocumentType


class ErrorPolicy(str, Enum):
    fail = "fail"       # first file error aborts the whole build
    skip = "skip"       # failed files are recorded and left out


@dataclass(frozen=True)
class SourceConfig:
    content_dir:    Path
    chain:          TransformChain
    document_types: tuple[DocumentType, ...] = DEFAULT_DOCUMENT_TYPES
    on_success:     Hook | None = log_document_count
    on_error:       ErrorPolicy = ErrorPolicy.fail
    output_dir:     Path | None = None


def default_transforms(settings: Settings) -> tuple:
    """The fixed transform order: gfm, math, katex, slug, autolink-headings, pretty-code."""
    on_line, on_highlighted = make_line_visitors(settings.line_class, settings.highlighted_line_class)
    return (
        Gfm(),
        MathSyntax(),
        MathRender(),
        HeadingIds(),
        HeadingLinks(behavior=settings.link_behavior, properties={"class": [settings.heading_link_class]}),
        PrettyCode(
            theme=settings.theme,
            fallback_language=settings.fallback_language,
            on_visit_line=on_line,
            on_visit_highlighted_line=on_highlighted,
        ),
    )


def make_source(settings: Settings, content_dir: str | Path = None, write_output: bool = True) -> SourceConfig:
    """Build a SourceConfig from settings. Raises ValueError on a bad hook or theme."""
    hook = load_hook(settings.on_success) if settings.on_success else log_document_count
    try:
        chain = TransformChain(default_transforms(settings), settings.parser_config)
    except (ValueError, TypeError, KeyError) as e:
        raise ValueError(f"Invalid transform configuration: {e}") from e
    return SourceConfig(
        content_dir=Path(content_dir or settings.content_dir),
        chain=chain,
        on_success=hook,
        on_error=ErrorPolicy(settings.on_error),
        output_dir=Path(settings.output_dir) if write_output else None,
    )
