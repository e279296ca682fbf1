from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .env_settings import get_env


class Base(DeclarativeBase):
    pass


def _db_url() -> str:
    sqlite_path = (get_env().sqlite_path or "").strip() or "data/dirauth.db"
    p = Path(sqlite_path)
    if not p.is_absolute():
        p = (Path.cwd() / p).resolve()
    os.makedirs(p.parent, exist_ok=True)
    return f"sqlite:///{p.as_posix()}"


def make_engine(url: str | None = None) -> Engine:
    url = url or _db_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, future=True, connect_args=connect_args)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return make_engine()


def make_sessionmaker(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or get_engine(), autocommit=False, autoflush=False, future=True)
