from datetime import datetime, timezone

from src.league_draft.domain.entities.draft import DraftPick
from src.league_draft.domain.services.completion import is_complete

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def picks_for(counts):
    picks = []
    number = 1
    for team_id, count in counts.items():
        for _ in range(count):
            picks.append(DraftPick(number, team_id, f"{team_id}-{number}", NOW))
            number += 1
    return picks


def test_complete_when_every_team_has_five():
    assert is_complete(picks_for({"A": 5, "B": 5}), ["A", "B"])


def test_not_complete_while_a_team_is_short():
    assert not is_complete(picks_for({"A": 5, "B": 4}), ["A", "B"])


def test_pick_count_alone_does_not_decide():
    # ten picks for two teams, but one team got all the forfeited slots' share
    assert not is_complete(picks_for({"A": 6, "B": 4}), ["A", "B"])


def test_team_added_after_start_must_also_fill():
    assert not is_complete(picks_for({"A": 5, "B": 5}), ["A", "B", "C"])


def test_removed_team_no_longer_counts():
    assert is_complete(picks_for({"A": 5, "B": 2}), ["A"])


def test_empty_team_set_is_never_complete():
    assert not is_complete([], [])
