"""Generated output: one JSON file per document plus per-type and global indexes

Layout under output_dir::

    <Type>/<slug>.json      full document
    <Type>/_index.json      all documents of that type
    index.json              {"all<Type>s": [...], "allDocuments": [...]} as "<Type>/<slug>" refs

Files are written with sorted keys and documents in build (path) order, so an
unchanged content tree produces byte-identical output.
"""

import json
from pathlib import Path
from typing import Iterable

from mdsite.core.models import BuildResult, Document


def _dumps(data) -> str:
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def document_json(doc: Document) -> dict:
    return doc.model_dump(mode="json")


def build_index(result: BuildResult) -> dict[str, list[str]]:
    index: dict[str, list[str]] = {}
    for type_name, docs in result.by_type().items():
        index[f"all{type_name}s"] = [f"{type_name}/{d.slug}" for d in docs]
    index["allDocuments"] = [f"{d.type}/{d.slug}" for d in result.documents]
    return index


def _remove_stale(output_dir: Path, type_names: set[str], keep: list[Path]) -> None:
    """Delete JSON left over from documents that no longer exist.

    Only <Type>/ directories of known document types are swept; anything else
    under output_dir is left alone.
    """
    keep_set = set(keep)
    for type_name in sorted(type_names):
        type_dir = output_dir / type_name
        if not type_dir.is_dir():
            continue
        for p in type_dir.rglob("*.json"):
            if p not in keep_set:
                p.unlink()


def write_generated(result: BuildResult, output_dir: Path, type_names: Iterable[str] = ()) -> list[Path]:
    """Write document, type-index and global-index JSON files. Returns written paths.

    type_names lists every declared document type, so a type with no documents
    left still has its old files removed.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for type_name, docs in result.by_type().items():
        type_dir = output_dir / type_name
        for doc in docs:
            dest = type_dir / f"{doc.slug}.json"
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(_dumps(document_json(doc)), encoding="utf-8")
            written.append(dest)
        index_path = type_dir / "_index.json"
        index_path.write_text(_dumps([document_json(d) for d in docs]), encoding="utf-8")
        written.append(index_path)

    index_path = output_dir / "index.json"
    index_path.write_text(_dumps(build_index(result)), encoding="utf-8")
    written.append(index_path)
    _remove_stale(output_dir, set(type_names) | set(result.by_type()), written)
    return written
