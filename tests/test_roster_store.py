import json

import pytest

from src.league_draft.domain.exceptions import ValidationError
from src.league_draft.infrastructure.roster_adapter import JsonTeamRosterStore


@pytest.fixture
def roster_store(tmp_path):
    return JsonTeamRosterStore(str(tmp_path))


def test_unknown_team_has_empty_roster(roster_store):
    roster = roster_store.load("team-a")
    assert roster.team_id == "team-a"
    assert roster.drafted_contestants == []


@pytest.mark.asyncio
async def test_append_writes_json_file(roster_store, tmp_path):
    await roster_store.append_contestant("team-a", "c1")
    await roster_store.append_contestant("team-a", "c2")

    with open(tmp_path / "rosters" / "team-a.json", encoding="utf-8") as f:
        data = json.load(f)
    assert data == {"team_id": "team-a", "drafted_contestants": ["c1", "c2"]}


@pytest.mark.asyncio
async def test_append_is_idempotent(roster_store):
    await roster_store.append_contestant("team-a", "c1")
    await roster_store.append_contestant("team-a", "c1")
    assert roster_store.load("team-a").drafted_contestants == ["c1"]


@pytest.mark.asyncio
async def test_reset_roster(roster_store):
    await roster_store.append_contestant("team-a", "c1")
    await roster_store.reset_roster("team-a")
    assert roster_store.load("team-a").drafted_contestants == []


@pytest.mark.asyncio
async def test_rosters_survive_new_instance(roster_store, tmp_path):
    await roster_store.append_contestant("team-b", "c7")
    reopened = JsonTeamRosterStore(str(tmp_path))
    assert reopened.load("team-b").drafted_contestants == ["c7"]


@pytest.mark.parametrize("team_id", ["", "..", "../escape", "nested/team"])
def test_team_id_must_be_a_plain_name(roster_store, team_id):
    with pytest.raises(ValidationError, match="Invalid team id"):
        roster_store.load(team_id)


@pytest.mark.asyncio
async def test_append_rejects_escaping_team_id(roster_store, tmp_path):
    with pytest.raises(ValidationError):
        await roster_store.append_contestant("../escape", "c1")
    assert not (tmp_path / "escape.json").exists()


def test_corrupt_roster_file_is_validation_error(roster_store, tmp_path):
    (tmp_path / "rosters" / "team-a.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError, match="corrupt"):
        roster_store.load("team-a")


def test_roster_file_with_wrong_shape_is_validation_error(roster_store, tmp_path):
    (tmp_path / "rosters" / "team-a.json").write_text('["c1"]', encoding="utf-8")
    with pytest.raises(ValidationError, match="corrupt"):
        roster_store.load("team-a")
