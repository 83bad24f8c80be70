"""Unit tests for core/hooks.py"""

import logging

import pytest

from mdsite.core.hooks import load_hook, log_document_count, run_hook
from mdsite.core.models import BuildResult, Document
from mdsite.errors import HookError


def _doc(slug: str) -> Document:
    return Document(
        type="Post", slug=slug, path=f"posts/{slug}.mdx", flattened_path=f"posts/{slug}",
        url=f"/posts/{slug}", hash="0" * 64, fields={"title": slug}, body_raw="", body_html="",
    )


def test_log_document_count(caplog):
    result = BuildResult(documents=[_doc("a"), _doc("b")])
    with caplog.at_level(logging.INFO, logger="mdsite.core.hooks"):
        log_document_count(result)
    assert [r.getMessage() for r in caplog.records] == ["allDocuments 2"]


def test_log_document_count_empty(caplog):
    with caplog.at_level(logging.INFO, logger="mdsite.core.hooks"):
        log_document_count(BuildResult())
    assert "allDocuments 0" in caplog.text


def test_load_hook_resolves_callable():
    assert load_hook("mdsite.core.hooks:log_document_count") is log_document_count


@pytest.mark.parametrize("spec", [
    "mdsite.core.hooks",
    ":log_document_count",
    "no_such_module_xyz:hook",
    "mdsite.core.hooks:missing",
    "mdsite.core.hooks:logger",
])
def test_load_hook_rejects_bad_spec(spec):
    with pytest.raises(ValueError, match="Invalid hook"):
        load_hook(spec)


def test_run_hook_calls_once_with_result():
    calls = []
    result = BuildResult()
    run_hook(calls.append, result)
    assert calls == [result]


def test_run_hook_none_is_noop():
    run_hook(None, BuildResult())


def test_run_hook_wraps_failure():
    def bad(result):
        raise RuntimeError("disk full")

    with pytest.raises(HookError) as exc:
        run_hook(bad, BuildResult())
    assert exc.value.step == "on_success"
    assert exc.value.path is None
    assert "RuntimeError: disk full" in str(exc.value)
