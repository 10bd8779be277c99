import logging
import time
from datetime import date, timedelta
from typing import Callable, Dict, Optional

from jrl.auth.schemas import User
from jrl.auth.service import IdentityProvider
from jrl.core.errors import RemoteStoreError
from jrl.remote.service import RemoteStore
from jrl.storage.service import LocalStorage
from jrl.system.schemas import TimeStats

logger = logging.getLogger(__name__)

TIME_COLLECTION = "timeSpent"
LOCAL_STATS_PREFIX = "tracker_time_stats_"
MIN_FLUSH_SECONDS = 5


def local_stats_key(uid: str) -> str:
    return f"{LOCAL_STATS_PREFIX}{uid}"


def aggregate(per_day: Dict[str, int], today: date) -> TimeStats:
    """Roll per-day seconds up into daily, weekly (last 7 days), monthly, yearly and total."""
    stats = TimeStats()
    week_start = today - timedelta(days=6)
    for day_text, seconds in per_day.items():
        try:
            day = date.fromisoformat(day_text)
        except ValueError:
            logger.error(f"Skipping time entry with bad date '{day_text}'")
            continue
        seconds = int(seconds or 0)
        stats.total += seconds
        if day.year == today.year:
            stats.yearly += seconds
            if day.month == today.month:
                stats.monthly += seconds
        if week_start <= day <= today:
            stats.weekly += seconds
        if day == today:
            stats.daily += seconds
    return stats


class TimeTracker:
    """
    Counts the time a signed-in user spends in the app.

    Each flush saves only the seconds elapsed since the previous save, so
    repeated flushes never count the same interval twice.
    """

    def __init__(
        self,
        remote: RemoteStore,
        storage: LocalStorage,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = date.today,
    ):
        self.remote = remote
        self.storage = storage
        self.clock = clock
        self.today = today
        self._uid: Optional[str] = None
        self._last_saved: Optional[float] = None

    @property
    def uid(self) -> Optional[str]:
        return self._uid

    def attach(self, identity: IdentityProvider) -> Callable[[], None]:
        return identity.subscribe(self._on_auth_change)

    async def _on_auth_change(self, user: Optional[User]) -> None:
        if user is not None:
            self.start(user.uid)
        else:
            await self.flush()
            self.stop()

    def start(self, uid: str) -> None:
        self._uid = uid
        self._last_saved = self.clock()
        logger.info("Time tracking started for %s", uid)

    def stop(self) -> None:
        if self._uid is not None:
            logger.info("Time tracking stopped for %s", self._uid)
        self._uid = None
        self._last_saved = None

    async def flush(self) -> int:
        """
        Save the time since the last save.

        Returns:
            int: Seconds recorded, 0 when not tracking or under the minimum interval.
        """
        uid = self._uid
        if uid is None or self._last_saved is None:
            return 0
        now = self.clock()
        seconds = int(now - self._last_saved)
        if seconds < MIN_FLUSH_SECONDS:
            return 0
        self._last_saved = now

        day = self.today().isoformat()
        doc_id = f"{uid}_{day}"

        def landed_late(record: dict) -> None:
            # The local copy below is now duplicated remotely
            logger.info("Late time save for %s landed, dropping the local copy", uid)
            self._save_local(uid, day, -seconds)

        try:
            existing = await self.remote.get(TIME_COLLECTION, doc_id)
            total = int((existing or {}).get("seconds", 0)) + seconds
            await self.remote.put(
                TIME_COLLECTION, doc_id, {"user_id": uid, "date": day, "seconds": total}, on_late=landed_late
            )
        except RemoteStoreError as e:
            logger.warning(f"Saving time locally for {uid}: {e}")
            self._save_local(uid, day, seconds)
        return seconds

    def _save_local(self, uid: str, day: str, seconds: int) -> None:
        key = local_stats_key(uid)
        per_day = self.storage.read_json(key, {})
        if not isinstance(per_day, dict):
            per_day = {}
        total = int(per_day.get(day, 0)) + seconds
        if total > 0:
            per_day[day] = total
        else:
            per_day.pop(day, None)
        self.storage.write_json(key, per_day)

    async def load_stats(self, uid: Optional[str] = None) -> TimeStats:
        uid = uid or self._uid
        if uid is None:
            return TimeStats()
        try:
            records = await self.remote.query_ordered(TIME_COLLECTION, "date", "desc", where={"user_id": uid})
            per_day = {r["date"]: r.get("seconds", 0) for r in records if r.get("date")}
        except RemoteStoreError as e:
            logger.warning(f"Loading local time stats for {uid}: {e}")
            per_day = self.storage.read_json(local_stats_key(uid), {})
            if not isinstance(per_day, dict):
                per_day = {}
        return aggregate(per_day, self.today())
