from datetime import datetime, timedelta, timezone

from jrl.drafts.schemas import DraftBase
from jrl.drafts.service import DRAFT_KEY, DraftStore


class Clock:
    def __init__(self):
        self.now = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


class TestDraftStore:
    def test_save_and_recover(self, storage):
        drafts = DraftStore(storage)

        saved = drafts.save(DraftBase(title="Half", content="written", tags="a, b"))
        recovered = drafts.recover()

        assert recovered.title == "Half"
        assert recovered.tags == "a, b"
        assert recovered.saved_at == saved.saved_at
        assert drafts.has_draft()

    def test_empty_form_is_not_saved(self, storage):
        drafts = DraftStore(storage)

        assert drafts.save(DraftBase(tags="only tags")) is None
        assert drafts.recover() is None
        assert not drafts.has_draft()

    def test_expired_draft_is_cleared(self, storage):
        clock = Clock()
        drafts = DraftStore(storage, clock=clock)
        drafts.save(DraftBase(title="Old"))

        clock.now += timedelta(days=8)

        assert drafts.recover() is None
        assert storage.get_item(DRAFT_KEY) is None

    def test_draft_within_max_age_survives(self, storage):
        clock = Clock()
        drafts = DraftStore(storage, clock=clock)
        drafts.save(DraftBase(content="Still fresh"))

        clock.now += timedelta(days=6)

        assert drafts.recover().content == "Still fresh"

    def test_corrupt_draft_is_discarded(self, storage):
        storage.write_json(DRAFT_KEY, {"title": "no timestamp"})

        assert DraftStore(storage).recover() is None
        assert storage.get_item(DRAFT_KEY) is None

    def test_clear(self, storage):
        drafts = DraftStore(storage)
        drafts.save(DraftBase(title="T"))

        drafts.clear()

        assert drafts.recover() is None
