"""
Autosave service: debounced catalog persistence.

Every catalog edit schedules a save. The save runs once the user has been
quiet for the debounce period, and only the newest snapshot per user is
written. Writes are serialized, and each user has a sync status of
saving, saved or error.
"""

from threading import Lock, Timer
from typing import Optional
import structlog

from models.catalog import CatalogData, SyncStatus
from services.repositories import CatalogRepository

logger = structlog.get_logger(__name__)


class AutosaveService:
    """
    Debounces and serializes catalog saves.

    Usage:
        autosave = AutosaveService(repository, debounce_seconds=1.5)
        autosave.schedule("alice", catalog)   # status -> saving
        ...                                    # 1.5s of quiet
                                               # status -> saved
    """

    def __init__(self, repository: CatalogRepository, debounce_seconds: float = 1.5):
        self.repository = repository
        self.debounce_seconds = debounce_seconds

        self._pending: dict[str, tuple[CatalogData, Timer]] = {}
        self._status: dict[str, SyncStatus] = {}
        self._lock = Lock()
        self._save_lock = Lock()

    def schedule(self, username: str, data: CatalogData) -> None:
        """
        Schedule a save of ``data``, restarting the debounce timer.

        Args:
            username: Catalog owner
            data: Snapshot to persist (not copied; pass a private copy)
        """
        timer = Timer(self.debounce_seconds, self._fire, args=(username,))
        timer.daemon = True

        with self._lock:
            previous = self._pending.get(username)
            if previous is not None:
                previous[1].cancel()
            self._pending[username] = (data, timer)
            self._status[username] = SyncStatus.SAVING

        timer.start()

    def flush(self, username: Optional[str] = None) -> None:
        """
        Save pending snapshots now instead of waiting for the timer.

        Args:
            username: Flush only this user; all users if None
        """
        with self._lock:
            if username is None:
                usernames = list(self._pending)
            else:
                usernames = [username] if username in self._pending else []
            entries = []
            for name in usernames:
                data, timer = self._pending.pop(name)
                timer.cancel()
                entries.append((name, data))

        for name, data in entries:
            self._save(name, data)

    def status(self, username: str) -> SyncStatus:
        """Current sync status. Users with nothing to save are SAVED."""
        with self._lock:
            return self._status.get(username, SyncStatus.SAVED)

    def has_pending(self, username: str) -> bool:
        with self._lock:
            return username in self._pending

    def _fire(self, username: str) -> None:
        with self._lock:
            entry = self._pending.pop(username, None)
        if entry is None:
            # Flushed or superseded
            return
        self._save(username, entry[0])

    def _save(self, username: str, data: CatalogData) -> None:
        with self._save_lock:
            try:
                self.repository.save(username, data)
            except Exception as e:
                # Runs on a timer thread; status is how the failure surfaces
                logger.error(
                    "autosave_failed",
                    username=username,
                    error=str(e),
                    error_type=type(e).__name__
                )
                with self._lock:
                    self._status[username] = SyncStatus.ERROR
                return

            with self._lock:
                if username not in self._pending:
                    self._status[username] = SyncStatus.SAVED

        logger.info(
            "catalog_saved",
            username=username,
            products=len(data.products)
        )
