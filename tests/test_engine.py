import asyncio

import pytest

from conftest import ALICE, BOB
from jrl.core.errors import (
    DeleteFailed,
    JournalNotFound,
    NotAuthenticated,
    NotAuthorized,
    ValidationFailed,
)
from jrl.drafts.schemas import DraftBase
from jrl.journals.display import ORDER_OLDEST
from jrl.journals.samples import SAMPLE_JOURNALS
from jrl.journals.schemas import JournalForm, Tier
from jrl.journals.service import (
    COLLECTION,
    FALLBACK_PREFIX,
    MSG_CREATED,
    MSG_CREATED_LOCALLY,
    MSG_DOWNGRADED,
    MSG_UPDATED,
    MSG_UPDATED_LOCALLY,
)
from jrl.remote.models import Document


def remote_documents(remote_sessions, collection=COLLECTION):
    with remote_sessions() as db:
        documents = db.query(Document).filter(Document.collection == collection).order_by(Document.id).all()
        return {d.id: dict(d.data) for d in documents}


def snapshot(fallback, remote_sessions):
    return (
        remote_documents(remote_sessions),
        [j.model_dump() for j in fallback.list_all()],
    )


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_while_reachable_lands_in_remote_tier(self, engine, identity, remote_sessions):
        await identity.sign_in(ALICE)

        result = await engine.create("First", "Hello", "a, b")

        assert result.stored_in == Tier.REMOTE
        assert result.message == MSG_CREATED
        assert result.journal.tier == Tier.REMOTE
        assert not result.journal.id.startswith(FALLBACK_PREFIX)
        assert [j.id for j in engine.owned_journals] == [result.journal.id]
        assert [j.id for j in engine.all_journals] == [result.journal.id]
        assert remote_documents(remote_sessions)[result.journal.id]["tags"] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_create_offline_lands_in_fallback_tier(self, engine, identity, remote, fallback):
        remote.offline = True
        await identity.sign_in(ALICE)

        result = await engine.create("T1", "C1", "x,y")

        owned = engine.owned_journals
        assert len(owned) == 1
        assert owned[0].id.startswith(FALLBACK_PREFIX)
        assert owned[0].tags == ["x", "y"]
        assert result.stored_in == Tier.FALLBACK
        assert result.message == MSG_CREATED_LOCALLY
        assert engine.all_journals == []

        stored = fallback.list_by_owner(ALICE.uid)
        assert [(j.title, j.content, j.tags) for j in stored] == [("T1", "C1", ["x", "y"])]

    @pytest.mark.asyncio
    async def test_create_timeout_falls_back_and_cleans_late_copy(self, engine, identity, remote, fallback, remote_sessions):
        await identity.sign_in(ALICE)
        remote.delay = 0.6

        result = await engine.create("Slow", "Network", "")
        remote.delay = 0

        assert result.stored_in == Tier.FALLBACK
        assert engine.owned_journals[0].id == result.journal.id

        # Let the late create land, then its clean-up delete
        await asyncio.sleep(1.0)
        await engine.drain()

        assert remote_documents(remote_sessions) == {}
        assert len(fallback.tombstones()) == 1
        assert [j.id for j in engine.owned_journals] == [result.journal.id]

    @pytest.mark.asyncio
    async def test_create_skips_remote_when_network_offline(self, engine, identity, remote, network):
        await identity.sign_in(ALICE)
        network.set_online(False)

        result = await engine.create("Offline", "Entry", "")

        assert result.stored_in == Tier.FALLBACK
        assert "create_document" not in remote.calls

    @pytest.mark.asyncio
    async def test_create_requires_signed_in_user(self, engine):
        with pytest.raises(NotAuthenticated, match="Please log in to create a journal"):
            await engine.create("T", "C", "")

    @pytest.mark.asyncio
    async def test_create_requires_title_and_content(self, engine, identity, fallback):
        await identity.sign_in(ALICE)

        with pytest.raises(ValidationFailed, match="Please fill in both title and content"):
            await engine.create("  ", "C", "")
        with pytest.raises(ValidationFailed):
            await engine.create("T", "", "")
        assert engine.owned_journals == []
        assert fallback.list_all() == []

    @pytest.mark.asyncio
    async def test_submit_clears_draft(self, engine, identity, drafts):
        await identity.sign_in(ALICE)
        drafts.save(DraftBase(title="T", content="C"))

        result = await engine.submit(JournalForm(title="T", content="C", tags="x"))

        assert result.message == MSG_CREATED
        assert drafts.recover() is None


class TestLoadOnAuth:
    @pytest.mark.asyncio
    async def test_sign_in_loads_owned_and_all(self, engine, identity, remote, fallback):
        mine = await remote.create(COLLECTION, {"user_id": ALICE.uid, "title": "Mine", "content": "c", "tags": []})
        theirs = await remote.create(COLLECTION, {"user_id": BOB.uid, "title": "Theirs", "content": "c", "tags": []})
        remote.offline = True
        await identity.sign_in(ALICE)
        local = (await engine.create("Local", "c", "")).journal
        await identity.sign_out()
        remote.offline = False

        await identity.sign_in(ALICE)

        assert {j.id for j in engine.owned_journals} == {mine["id"], local.id}
        assert engine.owned_journals[0].id == local.id
        assert {j.id for j in engine.all_journals} == {mine["id"], theirs["id"]}

    @pytest.mark.asyncio
    async def test_sign_in_offline_uses_fallback_only(self, engine, identity, remote):
        await remote.create(COLLECTION, {"user_id": ALICE.uid, "title": "Mine", "content": "c", "tags": []})
        remote.offline = True

        await identity.sign_in(ALICE)

        assert engine.owned_journals == []
        assert engine.all_journals == []

    @pytest.mark.asyncio
    async def test_sign_out_leaves_only_samples(self, engine, identity):
        await identity.sign_in(ALICE)
        await engine.create("T", "C", "")

        await identity.sign_out()

        assert engine.current_user is None
        assert engine.owned_journals == []
        assert engine.all_journals == []
        assert [j.id for j in engine.merged_journals()] == [s.id for s in SAMPLE_JOURNALS]

    @pytest.mark.asyncio
    async def test_load_for_previous_session_is_discarded(self, engine, identity, remote):
        await remote.create(COLLECTION, {"user_id": ALICE.uid, "title": "Mine", "content": "c", "tags": []})
        remote.delay = 0.15

        sign_in = asyncio.create_task(identity.sign_in(ALICE))
        await asyncio.sleep(0.05)
        await identity.sign_out()
        await sign_in

        assert engine.current_user is None
        assert engine.owned_journals == []
        assert engine.all_journals == []

    @pytest.mark.asyncio
    async def test_engine_holds_one_subscription(self, engine, identity, remote):
        engine.start()
        await identity.sign_in(ALICE)

        assert remote.calls.count("query_documents") == 2

        engine.close()
        await identity.sign_out()
        assert engine.current_user == ALICE


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_remote_journal(self, engine, identity, remote_sessions):
        await identity.sign_in(ALICE)
        created = (await engine.create("Old", "Body", "")).journal

        result = await engine.update(created.id, "New", "Body", "t")

        assert result.stored_in == Tier.REMOTE
        assert result.message == MSG_UPDATED
        assert engine.owned_journals[0].title == "New"
        assert engine.all_journals[0].title == "New"
        assert remote_documents(remote_sessions)[created.id]["title"] == "New"

    @pytest.mark.asyncio
    async def test_update_twice_with_same_fields_is_idempotent(self, engine, identity):
        await identity.sign_in(ALICE)
        created = (await engine.create("Title", "Body", "a")).journal

        first = await engine.update(created.id, "Title 2", "Body", "a")
        second = await engine.update(created.id, "Title 2", "Body", "a")

        assert first.journal.model_dump(exclude={"updated_at"}) == second.journal.model_dump(exclude={"updated_at"})

    @pytest.mark.asyncio
    async def test_update_fallback_journal_stays_local(self, engine, identity, remote, fallback):
        remote.offline = True
        await identity.sign_in(ALICE)
        created = (await engine.create("Old", "Body", "")).journal
        remote.offline = False

        result = await engine.update(created.id, "New", "Body", "")

        assert result.message == MSG_UPDATED_LOCALLY
        assert result.stored_in == Tier.FALLBACK
        assert fallback.get(created.id).title == "New"
        assert "update_document" not in remote.calls

    @pytest.mark.asyncio
    async def test_update_timeout_downgrades_journal(self, engine, identity, remote, fallback):
        await identity.sign_in(ALICE)
        created = (await engine.create("Old", "Body", "")).journal
        remote.delay = 0.6

        result = await engine.update(created.id, "New", "Body", "")
        remote.delay = 0

        assert result.stored_in == Tier.FALLBACK
        assert result.message == MSG_DOWNGRADED
        assert created.id not in {j.id for j in engine.all_journals}
        merged = [j for j in engine.merged_journals() if j.id == created.id]
        assert len(merged) == 1
        assert merged[0].tier == Tier.FALLBACK
        stored = fallback.get(created.id)
        assert stored.ref.origin == Tier.REMOTE
        assert stored.title == "New"

        await asyncio.sleep(0.5)

    @pytest.mark.asyncio
    async def test_changed_text_invalidates_translations(self, engine, identity, remote_sessions):
        await identity.sign_in(ALICE)
        created = (await engine.create("Title", "Body", "")).journal
        await engine.translations.get_or_build(engine.owned_journals[0], "es")
        assert "es" in remote_documents(remote_sessions)[created.id]["translations"]

        await engine.update(created.id, "Other", "Body", "")

        assert engine.owned_journals[0].translations == {}
        assert remote_documents(remote_sessions)[created.id]["translations"] == {}

    @pytest.mark.asyncio
    async def test_open_for_edit_prefills_form(self, engine, identity):
        await identity.sign_in(ALICE)
        created = (await engine.create("Title", "Body", "a, b")).journal

        form = engine.open_for_edit(created.id)

        assert form == JournalForm(id=created.id, title="Title", content="Body", tags="a, b")

    @pytest.mark.asyncio
    async def test_samples_are_read_only(self, engine, identity):
        await identity.sign_in(ALICE)

        with pytest.raises(NotAuthorized):
            engine.open_for_edit("sample-1")
        with pytest.raises(NotAuthorized):
            await engine.update("sample-1", "T", "C", "")
        with pytest.raises(NotAuthorized):
            await engine.delete("sample-1")

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, engine, identity):
        await identity.sign_in(ALICE)

        with pytest.raises(JournalNotFound, match="Journal not found or has been deleted"):
            await engine.update("missing", "T", "C", "")


class TestOwnership:
    @pytest.mark.asyncio
    async def test_other_owners_journals_are_untouched(self, engine, identity, network, fallback, remote_sessions):
        await identity.sign_in(ALICE)
        remote_journal = (await engine.create("Remote", "Body", "")).journal
        network.set_online(False)
        local_journal = (await engine.create("Local", "Body", "")).journal
        network.set_online(True)
        await identity.sign_out()
        await identity.sign_in(BOB)
        before = snapshot(fallback, remote_sessions)

        for journal_id in (remote_journal.id, local_journal.id):
            with pytest.raises(NotAuthorized):
                await engine.update(journal_id, "Hijacked", "Body", "")
            with pytest.raises(NotAuthorized):
                await engine.delete(journal_id)
            with pytest.raises(NotAuthorized):
                engine.open_for_edit(journal_id)

        assert snapshot(fallback, remote_sessions) == before


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_remote_journal(self, engine, identity, remote_sessions):
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal

        await engine.delete(created.id)

        assert engine.owned_journals == []
        assert engine.all_journals == []
        assert remote_documents(remote_sessions) == {}

    @pytest.mark.asyncio
    async def test_failed_remote_delete_changes_nothing(self, engine, identity, remote, fallback):
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal
        remote.failing = {"delete_document"}

        with pytest.raises(DeleteFailed, match="remote store unavailable"):
            await engine.delete(created.id)

        assert [j.id for j in engine.owned_journals] == [created.id]
        assert [j.id for j in engine.all_journals] == [created.id]
        assert fallback.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_fallback_journal(self, engine, identity, remote, fallback):
        remote.offline = True
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal

        await engine.delete(created.id)

        assert fallback.list_all() == []
        assert engine.owned_journals == []

    @pytest.mark.asyncio
    async def test_delete_downgraded_journal_removes_remote_copy(self, engine, identity, remote, fallback, remote_sessions):
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal
        remote.delay = 0.6
        await engine.update(created.id, "T2", "C", "")
        remote.delay = 0
        await asyncio.sleep(0.5)

        await engine.delete(created.id)
        await engine.drain()

        assert fallback.list_all() == []
        assert created.id in fallback.tombstones()
        assert remote_documents(remote_sessions) == {}

        await identity.sign_out()
        await identity.sign_in(ALICE)
        assert engine.owned_journals == []

    @pytest.mark.asyncio
    async def test_delete_drops_cached_translations_and_generation(self, engine, identity, remote, fallback):
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal
        await engine.update(created.id, "T2", "C", "")
        remote.failing = {"update_document"}
        await engine.translations.get_or_build(engine.owned_journals[0], "es")
        remote.failing = set()
        assert "es" in fallback.translations_for(created.id)

        await engine.delete(created.id)

        assert fallback.translations_for(created.id) == {}
        assert created.id not in engine._generations

    @pytest.mark.asyncio
    async def test_update_in_flight_cannot_resurrect_deleted_journal(self, engine, identity, remote, fallback):
        await identity.sign_in(ALICE)
        created = (await engine.create("T", "C", "")).journal
        remote.delay = 0.2

        update = asyncio.create_task(engine.update(created.id, "T2", "C", ""))
        await asyncio.sleep(0.05)
        remote.delay = 0
        await engine.delete(created.id)

        with pytest.raises(JournalNotFound):
            await update
        assert engine.owned_journals == []
        assert fallback.list_all() == []
        assert created.id not in {j.id for j in engine.merged_journals()}


class TestMergedView:
    @pytest.mark.asyncio
    async def test_unauthenticated_viewer_sees_exactly_the_samples(self, engine):
        views = await engine.merged_view()

        assert [v.id for v in views] == [s.id for s in SAMPLE_JOURNALS]
        assert all(v.tier == Tier.SAMPLE for v in views)
        assert not any(v.is_owner for v in views)

    @pytest.mark.asyncio
    async def test_tier_order_is_remote_fallback_samples(self, engine, identity, network):
        await identity.sign_in(ALICE)
        await engine.create("Remote", "Body", "")
        network.set_online(False)
        await engine.create("Local", "Body", "")

        views = await engine.merged_view()

        assert [v.tier for v in views] == [Tier.REMOTE, Tier.FALLBACK] + [Tier.SAMPLE] * len(SAMPLE_JOURNALS)
        assert views[0].is_owner and views[1].is_owner

    @pytest.mark.asyncio
    async def test_other_owners_downgraded_journal_is_listed_once(self, engine, identity, remote):
        await identity.sign_in(ALICE)
        created = (await engine.create("Draft", "Body", "")).journal
        remote.failing = {"update_document"}
        await engine.update(created.id, "Kept", "Body", "")
        remote.failing = set()
        await identity.sign_out()

        await identity.sign_in(BOB)

        views = [v for v in await engine.merged_view() if v.id == created.id]
        assert len(views) == 1
        assert views[0].title == "Kept"
        assert views[0].tier == Tier.FALLBACK
        assert not views[0].is_owner

    @pytest.mark.asyncio
    async def test_merged_view_translates_entries(self, engine, identity):
        await identity.sign_in(ALICE)
        await engine.create("Morning", "Walk", "outside")

        views = await engine.merged_view("es")

        assert views[0].title == "[ES] Morning"
        assert views[0].tags == ["[ES] outside"]
        sample = next(v for v in views if v.id == "sample-1")
        assert sample.title == "El Arte de Vivir Conscientemente"

    @pytest.mark.asyncio
    async def test_display_language_comes_from_preferences(self, engine, identity, preferences):
        from jrl.preferences.schemas import AccessibilityPreferences

        await identity.sign_in(ALICE)
        await engine.create("Morning", "Walk", "")
        preferences.save(AccessibilityPreferences(current_language="fr"))

        views = await engine.merged_view()

        assert views[0].title == "[FR] Morning"
        assert views[0].language == "fr"

    @pytest.mark.asyncio
    async def test_search_matches_tags_case_insensitively(self, engine, identity):
        await identity.sign_in(ALICE)
        await engine.create("Monday", "Meeting notes", "Work")
        await engine.create("Tuesday", "Gym", "health")

        views = await engine.search("WORK")

        assert [v.title for v in views] == ["Monday"]

    @pytest.mark.asyncio
    async def test_search_oldest_reverses_order(self, engine, identity):
        await identity.sign_in(ALICE)
        await engine.create("First", "Entry", "zebra")
        await engine.create("Second", "Entry", "zebra")

        recent = await engine.search("zebra")
        oldest = await engine.search("zebra", ORDER_OLDEST)

        assert [v.title for v in recent] == ["Second", "First"]
        assert [v.title for v in oldest] == ["First", "Second"]

    @pytest.mark.asyncio
    async def test_translate_all_covers_owned_and_global(self, engine, identity, remote, translator):
        await remote.create(COLLECTION, {"user_id": BOB.uid, "title": "Theirs", "content": "c", "tags": []})
        await identity.sign_in(ALICE)
        await engine.create("Mine", "c", "")

        count = await engine.translate_all("de")

        assert count == 2
        assert translator.calls == 2
        assert all("de" in j.translations for j in engine.all_journals)
