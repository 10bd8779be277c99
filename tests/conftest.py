import time
from typing import Any, Callable, Dict, List, Set

import pytest

from jrl.auth.schemas import User
from jrl.auth.service import IdentityProvider
from jrl.core.database import LocalBase, RemoteBase, make_engine, make_session_factory
from jrl.drafts.service import DraftStore
from jrl.journals.fallback import FallbackStore
from jrl.journals.service import ReconciliationEngine
from jrl.preferences.service import PreferencesStore
from jrl.remote.service import RemoteStore
from jrl.storage.service import LocalStorage
from jrl.system.network import NetworkMonitor
from jrl.translation.translator import PlaceholderTranslator

ALICE = User(uid="alice", display_name="Alice")
BOB = User(uid="bob", display_name="Bob")


class ControllableRemoteStore(RemoteStore):
    """Remote store whose worker calls can be made to fail or stall."""

    def __init__(self, session_factory, **kwargs):
        kwargs.setdefault("create_timeout", 0.3)
        kwargs.setdefault("write_timeout", 0.3)
        kwargs.setdefault("read_timeout", 0.3)
        super().__init__(session_factory, **kwargs)
        self.offline = False
        self.delay = 0.0
        self.delays: Dict[str, float] = {}
        self.failing: Set[str] = set()
        self.calls: List[str] = []

    def _execute(self, fn: Callable[..., Any], *args: Any) -> Any:
        self.calls.append(fn.__name__)
        delay = self.delays.get(fn.__name__, self.delay)
        if delay:
            time.sleep(delay)
        if self.offline or fn.__name__ in self.failing:
            raise ConnectionError("remote store unavailable")
        return super()._execute(fn, *args)


class CountingTranslator(PlaceholderTranslator):
    def __init__(self):
        self.calls = 0

    def translate_fields(self, title, content, tags, source, target):
        self.calls += 1
        return super().translate_fields(title, content, tags, source, target)


@pytest.fixture
def local_sessions(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'local.db'}")
    LocalBase.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def remote_sessions(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'remote.db'}")
    RemoteBase.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def storage(local_sessions):
    return LocalStorage(local_sessions)


@pytest.fixture
def remote(remote_sessions):
    return ControllableRemoteStore(remote_sessions)


@pytest.fixture
def fallback(storage):
    return FallbackStore(storage)


@pytest.fixture
def identity():
    return IdentityProvider()


@pytest.fixture
def network():
    return NetworkMonitor()


@pytest.fixture
def drafts(storage):
    return DraftStore(storage)


@pytest.fixture
def preferences(storage):
    return PreferencesStore(storage)


@pytest.fixture
def translator():
    return CountingTranslator()


@pytest.fixture
def engine(identity, remote, fallback, translator, network, drafts, preferences):
    engine = ReconciliationEngine(
        identity=identity,
        remote=remote,
        fallback=fallback,
        translator=translator,
        network=network,
        drafts=drafts,
        preferences=preferences,
    )
    engine.start()
    yield engine
    engine.close()
