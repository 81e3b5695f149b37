"""
Turn Order - Domain Service

Maps a pick number onto the team that owns it. Pure functions, no I/O.
"""

import math
from typing import Optional, Sequence

from ..entities.draft import Draft


def team_for_pick(draft_order: Sequence[str], pick_number: int, draft_format: str) -> Optional[str]:
    """Get the team that owns a 1-based pick number.

    Args:
        draft_order: Team ids in first-round order
        pick_number: Overall pick number, starting at 1
        draft_format: "snake" reverses every even round, "linear" never does

    Returns:
        Optional[str]: Team id, or None when there is no order or no pick yet
    """
    team_count = len(draft_order)
    if team_count == 0 or pick_number < 1:
        return None

    round_number = math.ceil(pick_number / team_count)
    position_in_round = ((pick_number - 1) % team_count) + 1

    if draft_format == "snake" and round_number % 2 == 0:
        return draft_order[team_count - position_in_round]
    return draft_order[position_in_round - 1]


def current_team_id(draft: Draft) -> Optional[str]:
    """Get the team whose turn it is, or None if the draft is not in progress"""
    if not draft.is_active or draft.current_pick == 0:
        return None
    return team_for_pick(draft.draft_order, draft.current_pick, draft.settings.draft_format)


def current_round(draft: Draft) -> int:
    if draft.team_count == 0:
        return 0
    return math.ceil(draft.current_pick / draft.team_count)
