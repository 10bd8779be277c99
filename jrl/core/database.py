from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from jrl.core.config import LOCAL_DATABASE_URL, REMOTE_DATABASE_URL

# The local key/value surface and the remote document store are separate
# databases, so each gets its own metadata.
LocalBase = declarative_base()
RemoteBase = declarative_base()


def make_engine(url: str):
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


local_engine = make_engine(LOCAL_DATABASE_URL)
remote_engine = make_engine(REMOTE_DATABASE_URL)
LocalSession = make_session_factory(local_engine)
RemoteSession = make_session_factory(remote_engine)

import jrl.storage.models  # noqa: F401
import jrl.remote.models  # noqa: F401


def create_tables(local=local_engine, remote=remote_engine):
    LocalBase.metadata.create_all(bind=local)
    RemoteBase.metadata.create_all(bind=remote)

