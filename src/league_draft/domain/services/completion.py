"""
Completion - Domain Service

Decides whether every roster in the league is full.

The per-team tally is authoritative. Comparing the pick number against
``teams * PER_TEAM_LIMIT`` cannot tell "all rounds used up" apart from
"a team is still short because a slot was forfeited or the team set changed".
"""

from collections import Counter
from typing import Iterable, Sequence

from ..entities.draft import PER_TEAM_LIMIT, DraftPick


def is_complete(
    picks: Iterable[DraftPick],
    league_team_ids: Sequence[str],
    per_team_limit: int = PER_TEAM_LIMIT,
) -> bool:
    """Check if every team currently in the league holds a full roster"""
    if not league_team_ids:
        return False
    counts = Counter(pick.team_id for pick in picks)
    return all(counts[team_id] == per_team_limit for team_id in league_team_ids)
