"""Build orchestration: load, validate, transform, collect, and commit documents"""

import logging
import math
from datetime import datetime
from pathlib import Path

from sqlmodel import Session

from mdsite.core.chain import TransformChain
from mdsite.core.export import write_generated
from mdsite.core.hast import HEADING_TAGS, Root, elements, to_html, to_string
from mdsite.core.hooks import run_hook
from mdsite.core.models import BuildIssue, BuildResult, Document, Heading, ParsedDoc
from mdsite.core.parse import discover_files, parse_file
from mdsite.core.schema import DocumentType, select_type, validate_fields
from mdsite.core.source import ErrorPolicy, SourceConfig
from mdsite.core.utils.slug import slugify
from mdsite.crud.documents import commit_doc, park_changed_slugs, prune_missing
from mdsite.errors import BuildError, ContentError, DuplicateSlugError


logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


def _headings(tree: Root) -> list[Heading]:
    return [
        Heading(level=int(el.tag_name[1]), text=to_string(el).strip(), id=str(el.properties.get("id", "")))
        for el in elements(tree, HEADING_TAGS)
    ]


def render_document(
    parsed: ParsedDoc,
    doc_type: DocumentType,
    chain: TransformChain,
    ) -> Document:
    """Validate one parsed file against its type and run its body through the chain."""
    fields = validate_fields(doc_type, parsed.frontmatter, parsed.rel_path)
    tree = chain.run(parsed.markdown, parsed.rel_path)

    words = len(to_string(tree).split())
    override = getattr(fields, "slug", None)
    slug = slugify(override) if override else doc_type.slug_for(parsed.rel_path)
    return Document(
        type=doc_type.name,
        slug=slug,
        path=parsed.rel_path,
        flattened_path=doc_type.flattened_path(parsed.rel_path),
        url=doc_type.url_for(slug),
        hash=parsed.hash,
        fields=fields.model_dump(mode="json", by_alias=True, exclude_none=True),
        body_raw=parsed.markdown,
        body_html=to_html(tree),
        headings=_headings(tree),
        word_count=words,
        reading_time=max(1, math.ceil(words / WORDS_PER_MINUTE)),
    )


def process_file(path: Path, source: SourceConfig) -> Document | None:
    """Parse and render one file. Returns None when no document type claims it."""
    parsed = parse_file(path, source.content_dir)
    doc_type = select_type(source.document_types, parsed.rel_path)
    if doc_type is None:
        logger.warning("%s: no document type matches, skipping", parsed.rel_path)
        return None
    return render_document(parsed, doc_type, source.chain)


def _issue(e: ContentError) -> BuildIssue:
    return BuildIssue(path=e.path, step=e.step, error_type=type(e).__name__, message=e.message)


def build(source: SourceConfig) -> BuildResult:
    """Run one build over source.content_dir and invoke the completion hook once.

    Generated JSON is written before the hook when source.output_dir is set.
    Under ErrorPolicy.fail the first file error raises BuildError and no hook
    runs. Under ErrorPolicy.skip failed files are logged, recorded in
    result.errors and omitted. Duplicate slugs are fatal under both policies.
    """
    result = BuildResult()
    if not source.content_dir.exists():
        raise BuildError(ContentError(source.content_dir, "content directory does not exist"))

    slugs: dict[str, str] = {}
    for path in discover_files(source.content_dir):
        try:
            doc = process_file(path, source)
        except ContentError as e:
            if source.on_error == ErrorPolicy.fail:
                raise BuildError(e) from e
            logger.error("skipping %s", e)
            result.errors.append(_issue(e))
            continue
        if doc is None:
            continue
        if doc.slug in slugs:
            raise BuildError(DuplicateSlugError(doc.path, doc.slug, slugs[doc.slug]))
        slugs[doc.slug] = doc.path
        logger.debug("built %s -> %s", doc.path, doc.url)
        result.documents.append(doc)

    result.finished_at = datetime.now()
    if source.output_dir is not None:
        written = write_generated(result, source.output_dir, [t.name for t in source.document_types])
        logger.info("wrote %d generated file(s) to %s", len(written), source.output_dir)
    run_hook(source.on_success, result)
    return result


def commit_result(engine, result: BuildResult) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Upsert every built document and drop records for files no longer present.

    Returns (counts, changes) where changes is a list of (status, slug) for
    created/updated docs.
    """
    committed_at = result.finished_at or datetime.now()
    counts = {"created": 0, "updated": 0, "unchanged": 0, "removed": 0}
    changes = []
    with Session(engine) as session:
        counts["removed"] = prune_missing(session, [d.path for d in result.documents])
        park_changed_slugs(session, result.documents)
        for doc in result.documents:
            record, status = commit_doc(session, doc, committed_at)
            counts[status] += 1
            if status != "unchanged":
                changes.append((status, record.slug))
        session.commit()
    return counts, changes
