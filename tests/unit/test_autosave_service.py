"""
Unit tests for AutosaveService.
"""

import time
from unittest.mock import MagicMock

from models.catalog import SyncStatus
from services.autosave_service import AutosaveService
from tests.factories import CatalogFactory

USER = "alice"


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestSchedule:
    """Tests for debounced saves."""

    def test_status_defaults_to_saved(self, autosave):
        assert autosave.status(USER) == SyncStatus.SAVED

    def test_schedule_marks_saving(self, autosave):
        autosave.schedule(USER, CatalogFactory.create())

        assert autosave.status(USER) == SyncStatus.SAVING
        assert autosave.has_pending(USER)

    def test_timer_saves_after_quiet_period(self, catalog_repository):
        # Arrange
        service = AutosaveService(catalog_repository, debounce_seconds=0.05)
        data = CatalogFactory.create(sea_freight_days=17)

        # Act
        service.schedule(USER, data)

        # Assert
        assert wait_for(lambda: service.status(USER) == SyncStatus.SAVED)
        assert catalog_repository.get(USER).sea_freight_days == 17

    def test_only_latest_snapshot_is_written(self):
        repository = MagicMock()
        service = AutosaveService(repository, debounce_seconds=0.1)

        for days in (5, 6, 7):
            service.schedule(USER, CatalogFactory.create(sea_freight_days=days))

        assert wait_for(lambda: service.status(USER) == SyncStatus.SAVED)
        assert repository.save.call_count == 1
        assert repository.save.call_args[0][1].sea_freight_days == 7


class TestFlush:
    """Tests for flush."""

    def test_flush_saves_now(self, catalog_repository, autosave):
        autosave.schedule(USER, CatalogFactory.create(sea_freight_days=9))

        autosave.flush(USER)

        assert catalog_repository.get(USER).sea_freight_days == 9
        assert autosave.status(USER) == SyncStatus.SAVED
        assert not autosave.has_pending(USER)

    def test_flush_other_user_leaves_pending(self, autosave):
        autosave.schedule(USER, CatalogFactory.create())

        autosave.flush("bob")

        assert autosave.has_pending(USER)

    def test_flush_all(self, catalog_repository, autosave):
        autosave.schedule(USER, CatalogFactory.create())
        autosave.schedule("bob", CatalogFactory.create())

        autosave.flush()

        assert catalog_repository.get(USER) is not None
        assert catalog_repository.get("bob") is not None

    def test_flush_with_nothing_pending(self, autosave):
        autosave.flush(USER)
        assert autosave.status(USER) == SyncStatus.SAVED


class TestErrors:
    """Tests for failed saves."""

    def test_failure_sets_error_status(self):
        repository = MagicMock()
        repository.save.side_effect = ConnectionError("down")
        service = AutosaveService(repository, debounce_seconds=60)

        service.schedule(USER, CatalogFactory.create())
        service.flush(USER)

        assert service.status(USER) == SyncStatus.ERROR

    def test_next_success_clears_error(self):
        repository = MagicMock()
        repository.save.side_effect = [ConnectionError("down"), None]
        service = AutosaveService(repository, debounce_seconds=60)

        service.schedule(USER, CatalogFactory.create())
        service.flush(USER)
        service.schedule(USER, CatalogFactory.create())
        service.flush(USER)

        assert service.status(USER) == SyncStatus.SAVED
