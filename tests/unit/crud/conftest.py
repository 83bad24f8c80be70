"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdsite.core.models import Document, Heading
from mdsite.core.utils.hashing import sha256
from mdsite.crud import models  # noqa: F401


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory for a built Document; only slug, type and body vary."""
    def _make(slug: str = "hello", type_name: str = "Post", body: str = "Hello world\n") -> Document:
        folder = "posts" if type_name == "Post" else "pages"
        return Document(
            type=type_name,
            slug=slug,
            path=f"{folder}/{slug}.mdx",
            flattened_path=f"{folder}/{slug}",
            url=f"/{folder}/{slug}" if type_name == "Post" else f"/{slug}",
            hash=sha256(body),
            fields={"title": slug.title()},
            body_raw=body,
            body_html=f"<p>{body.strip()}</p>",
            headings=[Heading(level=1, text="Hello", id="hello")],
        )
    return _make
