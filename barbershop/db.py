# barbershop/db.py

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# registers the tables on SQLModel.metadata
from barbershop import models  # noqa: F401


def make_engine(database_url: str):
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every checkout sees an empty database
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=False, connect_args=connect_args)


def init_db(engine):
    SQLModel.metadata.create_all(engine)


def session_scope(engine):
    """One session per request."""
    with Session(engine) as session:
        yield session
