# roombook/database.py

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roombook.models import Base


IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    connect_args = {}
    options = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # a single shared connection keeps the in-memory database alive
        if database_url in IN_MEMORY_URLS:
            options["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, **options)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
