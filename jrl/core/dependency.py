# jrl/core/dependency.py
from functools import lru_cache

from jrl.auth.service import IdentityProvider
from jrl.core.config import TRANSLATOR
from jrl.core.database import LocalSession, RemoteSession
from jrl.drafts.service import DraftStore
from jrl.journals.fallback import FallbackStore
from jrl.journals.service import ReconciliationEngine
from jrl.preferences.service import PreferencesStore
from jrl.remote.service import RemoteStore
from jrl.storage.service import LocalStorage
from jrl.system.network import NetworkMonitor
from jrl.system.tracker import TimeTracker
from jrl.translation.translator import PlaceholderTranslator, Translator


@lru_cache(maxsize=None)
def get_local_storage() -> LocalStorage:
    return LocalStorage(LocalSession)


@lru_cache(maxsize=None)
def get_remote_store() -> RemoteStore:
    return RemoteStore(RemoteSession)


@lru_cache(maxsize=None)
def get_identity() -> IdentityProvider:
    return IdentityProvider()


@lru_cache(maxsize=None)
def get_fallback_store() -> FallbackStore:
    return FallbackStore(get_local_storage())


@lru_cache(maxsize=None)
def get_translator() -> Translator:
    if TRANSLATOR == "openai":
        from jrl.translation.openai_translator import OpenAITranslator
        return OpenAITranslator()
    return PlaceholderTranslator()


@lru_cache(maxsize=None)
def get_network_monitor() -> NetworkMonitor:
    return NetworkMonitor()


@lru_cache(maxsize=None)
def get_drafts() -> DraftStore:
    return DraftStore(get_local_storage())


@lru_cache(maxsize=None)
def get_preferences() -> PreferencesStore:
    return PreferencesStore(get_local_storage())


@lru_cache(maxsize=None)
def get_engine() -> ReconciliationEngine:
    engine = ReconciliationEngine(
        identity=get_identity(),
        remote=get_remote_store(),
        fallback=get_fallback_store(),
        translator=get_translator(),
        network=get_network_monitor(),
        drafts=get_drafts(),
        preferences=get_preferences(),
    )
    engine.start()
    return engine


@lru_cache(maxsize=None)
def get_tracker() -> TimeTracker:
    tracker = TimeTracker(get_remote_store(), get_local_storage())
    tracker.attach(get_identity())
    return tracker
