from dataclasses import replace
from datetime import datetime, timezone

import pytest

from src.league_draft.domain.entities.draft import Draft, DraftPick
from src.league_draft.domain.entities.draft_status import DraftStatus
from src.league_draft.domain.exceptions import ConflictError, NotFoundError, ValidationError
from src.league_draft.infrastructure.storage_adapter import MemoryDraftRepository

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    return MemoryDraftRepository()


def started(draft: Draft) -> Draft:
    return replace(
        draft,
        status=DraftStatus.IN_PROGRESS,
        current_pick=1,
        current_turn_started_at=NOW,
        draft_order=["A", "B"],
        version=draft.version + 1,
    )


@pytest.mark.asyncio
async def test_create_and_get(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    found = await repo.get_draft(draft.id)

    assert found == draft
    assert repo.get_draft_count() == 1
    assert await repo.get_draft("missing") is None


@pytest.mark.asyncio
async def test_reads_are_snapshots(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    draft.draft_order.append("intruder")

    found = await repo.get_draft(draft.id)
    assert found.draft_order == []


@pytest.mark.asyncio
async def test_duplicate_id_conflicts(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    with pytest.raises(ConflictError):
        await repo.create_draft(Draft(league_id="L1", id=draft.id))


@pytest.mark.asyncio
async def test_update_checks_version(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    updated = await repo.update_draft(started(draft), expected_version=0)
    assert updated.version == 1

    with pytest.raises(ConflictError):
        await repo.update_draft(started(draft), expected_version=0)


@pytest.mark.asyncio
async def test_update_must_advance_version(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    with pytest.raises(ValidationError):
        await repo.update_draft(replace(started(draft), version=0), expected_version=0)


@pytest.mark.asyncio
async def test_update_rejects_broken_invariants(repo):
    draft = await repo.create_draft(Draft(league_id="L1"))
    broken = replace(
        started(draft),
        current_pick=3,
        picks=[DraftPick(1, "A", "c1", NOW), DraftPick(2, "B", "c1", NOW)],
    )
    with pytest.raises(ValidationError, match="drafted more than once"):
        await repo.update_draft(broken, expected_version=0)

    assert (await repo.get_draft(draft.id)).version == 0


@pytest.mark.asyncio
async def test_update_missing_draft(repo):
    with pytest.raises(NotFoundError):
        await repo.update_draft(started(Draft(league_id="L1")), expected_version=0)


@pytest.mark.asyncio
async def test_list_and_delete(repo):
    first = await repo.create_draft(Draft(league_id="L1"))
    await repo.create_draft(Draft(league_id="L1"))
    await repo.create_draft(Draft(league_id="L2"))

    assert len(await repo.list_drafts_by_league("L1")) == 2

    await repo.delete_draft(first.id)
    assert len(await repo.list_drafts_by_league("L1")) == 1
    with pytest.raises(NotFoundError):
        await repo.delete_draft(first.id)

    repo.clear_all_drafts()
    assert repo.get_draft_count() == 0
