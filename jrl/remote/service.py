import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from jrl.core.config import CREATE_TIMEOUT_SECONDS, READ_TIMEOUT_SECONDS, WRITE_TIMEOUT_SECONDS
from jrl.core.errors import RemoteStoreError
from jrl.remote import db as remote_db

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RemoteStore:
    """
    Async adapter over the hosted document store.

    Every call runs the blocking database operation in a worker thread and
    races it against a deadline. Whichever settles first wins: a missed
    deadline raises ``RemoteStoreError`` exactly like a failed call, while
    the worker keeps going in the background because a thread cannot be
    cancelled. The adapter holds no journal state.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        create_timeout: float = CREATE_TIMEOUT_SECONDS,
        write_timeout: float = WRITE_TIMEOUT_SECONDS,
        read_timeout: float = READ_TIMEOUT_SECONDS,
    ):
        self.session_factory = session_factory
        self.create_timeout = create_timeout
        self.write_timeout = write_timeout
        self.read_timeout = read_timeout

    def _execute(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run one store operation in its own session. Called from a worker thread."""
        with self.session_factory() as db:
            return fn(db, *args)

    async def _race(
        self,
        label: str,
        timeout: float,
        fn: Callable[..., Any],
        *args: Any,
        on_late: Optional[Callable[[Any], None]] = None,
    ) -> Any:
        task = asyncio.ensure_future(asyncio.to_thread(self._execute, fn, *args))
        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout)
        except asyncio.TimeoutError:
            logger.warning("Remote %s timed out after %.1fs", label, timeout)
            if on_late is not None:
                task.add_done_callback(lambda t: _deliver_late(label, t, on_late))
            else:
                task.add_done_callback(_consume)
            raise RemoteStoreError(f"{label} timeout")
        except Exception as e:
            logger.warning(f"Remote {label} failed: {e}")
            raise RemoteStoreError(str(e)) from e

    async def create(
        self,
        collection: str,
        record: Record,
        on_late: Optional[Callable[[Record], None]] = None,
    ) -> Record:
        """
        Create a document and return it with its store-assigned id and timestamps.

        Args:
            collection (str): Collection key.
            record (dict): Document fields.
            on_late (callable): Receives the document if it lands after the deadline.
        """
        return await self._race(
            "create", self.create_timeout, remote_db.create_document, collection, record, on_late=on_late
        )

    async def update(self, doc_id: str, patch: Record, user_id: str) -> Record:
        """Merge ``patch`` into a document owned by ``user_id``. Other owners' documents are not found."""
        return await self._race("update", self.write_timeout, remote_db.update_document, doc_id, patch, user_id)

    async def delete(self, doc_id: str, user_id: str) -> None:
        await self._race("delete", self.write_timeout, remote_db.delete_document, doc_id, user_id)

    async def get(self, collection: str, doc_id: str) -> Optional[Record]:
        return await self._race("get", self.read_timeout, _get_record, collection, doc_id)

    async def put(
        self,
        collection: str,
        doc_id: str,
        record: Record,
        on_late: Optional[Callable[[Record], None]] = None,
    ) -> Record:
        return await self._race(
            "put", self.write_timeout, remote_db.put_document, collection, doc_id, record, on_late=on_late
        )

    async def query_ordered(
        self,
        collection: str,
        order_by: str = "created_at",
        direction: str = "desc",
        where: Optional[Record] = None,
    ) -> List[Record]:
        return await self._race(
            "query", self.read_timeout, remote_db.query_documents, collection, order_by, direction, where
        )


def _get_record(db: Session, collection: str, doc_id: str) -> Optional[Record]:
    document = remote_db.get_document(db, collection, doc_id)
    return remote_db.to_record(document) if document else None


def _consume(task: "asyncio.Future") -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.warning(f"Late remote call failed: {task.exception()}")


def _deliver_late(label: str, task: "asyncio.Future", on_late: Callable[[Any], None]) -> None:
    if task.cancelled() or task.exception() is not None:
        _consume(task)
        return
    logger.info("Remote %s settled after its deadline", label)
    on_late(task.result())
