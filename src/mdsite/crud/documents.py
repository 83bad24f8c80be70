"""Document persistence: upsert by path, stale-record pruning, and lookups"""

from datetime import datetime

from sqlmodel import Session, select

from mdsite.core.models import Document
from mdsite.crud.models import DocumentRecord


def get_by_path(session: Session, path: str) -> DocumentRecord | None:
    """Return the record with the given source path, or None if not found."""
    return session.exec(select(DocumentRecord).where(DocumentRecord.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str) -> DocumentRecord | None:
    """Return the record with the given slug, or None if not found."""
    return session.exec(select(DocumentRecord).where(DocumentRecord.slug == slug)).one_or_none()


def get_by_type(session: Session, type_name: str) -> list[DocumentRecord]:
    """Return records of one document type ordered by path."""
    return list(session.exec(
        select(DocumentRecord).where(DocumentRecord.type == type_name).order_by(DocumentRecord.path)
    ).all())


def get_all_documents(session: Session) -> list[DocumentRecord]:
    """Return all records ordered by path."""
    return list(session.exec(select(DocumentRecord).order_by(DocumentRecord.path)).all())


def list_types(session: Session) -> list[str]:
    """Return sorted distinct document type names across all records."""
    return sorted(set(session.exec(select(DocumentRecord.type)).all()))


def _apply(record: DocumentRecord, doc: Document) -> None:
    record.slug = doc.slug
    record.type = doc.type
    record.url = doc.url
    record.hash = doc.hash
    record.fields = doc.fields or None
    record.headings = [h.model_dump() for h in doc.headings] or None
    record.body_html = doc.body_html
    record.reading_time = doc.reading_time


def commit_doc(
    session: Session,
    doc: Document,
    committed_at: datetime | None = None,
    ) -> tuple[DocumentRecord, str]:
    """Upsert a built Document by path.

    Returns (record, status) where status is 'created', 'updated', or 'unchanged'.
    Flushes but does not commit; the caller controls the transaction.
    committed_at is set on created/updated records only.
    """
    record = get_by_path(session, doc.path)

    if record:
        if record.hash == doc.hash and record.body_html == doc.body_html and record.slug == doc.slug:
            return record, 'unchanged'
        _apply(record, doc)
        record.updated_at = datetime.now()
        record.committed_at = committed_at
        session.add(record)
        session.flush()
        return record, 'updated'

    record = DocumentRecord(
        path=doc.path,
        slug=doc.slug,
        type=doc.type,
        url=doc.url,
        hash=doc.hash,
        body_html=doc.body_html,
        committed_at=committed_at,
    )
    _apply(record, doc)
    session.add(record)
    session.flush()
    return record, 'created'


def park_changed_slugs(session: Session, docs: list[Document]) -> int:
    """Move slugs that are about to change to a unique placeholder. Returns count parked.

    Run before commit_doc so that documents swapping slugs between builds
    never hold the same slug at flush time.
    """
    parked = 0
    for doc in docs:
        record = get_by_path(session, doc.path)
        if record and record.slug != doc.slug:
            record.slug = f"~{record.id}"
            session.add(record)
            parked += 1
    session.flush()
    return parked


def prune_missing(session: Session, keep_paths: list[str]) -> int:
    """Delete records whose path is not in keep_paths. Returns count deleted."""
    keep = set(keep_paths)
    stale = [r for r in session.exec(select(DocumentRecord)).all() if r.path not in keep]
    for r in stale:
        session.delete(r)
    session.flush()
    return len(stale)
