"""Engine construction and schema setup"""

from sqlmodel import SQLModel, create_engine

from mdsite.crud import models  # noqa: F401  registers tables on SQLModel.metadata


def make_engine(db_url: str):
    return create_engine(db_url, echo=False)


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
