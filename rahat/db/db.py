import os
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from fastapi import Depends


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./rahat.db")


def build_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}

        # in-memory databases only live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

        return create_engine(url, **kwargs)

    return create_engine(url, pool_pre_ping=True)


engine = build_engine(DATABASE_URL)


def create_db_and_tables(db_engine=None):
    # table models must be imported before create_all sees them
    from rahat.models import damage_report, missing_person, sos_alert, supply_request, user  # noqa: F401

    SQLModel.metadata.create_all(db_engine or engine)


def get_engine():
    return engine


def get_session(db_engine=Depends(get_engine)):
    with Session(db_engine) as session:
        yield session
