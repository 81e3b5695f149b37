"""
Validation Service - Domain Service

Legality checks for draft operations. Pick validation short-circuits on the
first failed rule so the caller always sees the most fundamental problem.
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping

from ..entities.draft import PER_TEAM_LIMIT, Draft
from ..entities.draft_status import DraftStatus
from ..exceptions import (
    ContestantUnavailableError,
    InvalidDraftStateError,
    TeamLimitError,
    TurnError,
    ValidationError,
)
from .turn_order import current_team_id


def validate_required(data: Mapping[str, Any], required_fields: Iterable[str]) -> None:
    """Raise ValidationError naming every missing or empty field"""
    missing: List[str] = [
        name for name in required_fields
        if data.get(name) is None or data.get(name) == ""
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing[0])


class PickValidator:
    """
    Enforces the legality of a requested pick against current draft state.

    The contestant directory is any object exposing
    ``async belongs_to_league(contestant_id, league_id) -> bool``.
    """

    def __init__(self, contestant_directory, per_team_limit: int = PER_TEAM_LIMIT):
        self._contestant_directory = contestant_directory
        self._per_team_limit = per_team_limit

    async def validate(self, draft: Draft, team_id: str, contestant_id: str) -> None:
        """Validate a pick, raising the first rule it breaks"""
        if draft.status is not DraftStatus.IN_PROGRESS:
            raise InvalidDraftStateError("Draft must be in progress to make picks")

        if current_team_id(draft) != team_id:
            raise TurnError("It is not this team's turn to pick")

        if contestant_id in draft.drafted_contestant_ids:
            raise ContestantUnavailableError("Contestant has already been drafted")

        if not await self._contestant_directory.belongs_to_league(contestant_id, draft.league_id):
            raise ValidationError("Contestant is not in this league", "contestant_id")

        if draft.team_pick_count(team_id) >= self._per_team_limit:
            raise TeamLimitError("Team has already drafted the maximum number of contestants")


class ValidationService:
    """Checks for lifecycle transitions that do not involve a pick"""

    def validate_draft_creation(self, league_id: str, team_ids: List[str]) -> None:
        validate_required({"league_id": league_id}, ["league_id"])
        if not team_ids:
            raise ValidationError("League must have teams before creating a draft")

    def validate_draft_start(self, draft: Draft, team_ids: List[str]) -> None:
        if draft.status is not DraftStatus.NOT_STARTED:
            raise InvalidDraftStateError("Draft must be in not_started state to start")
        if not team_ids:
            raise ValidationError("League must have teams to start draft")
        if len(set(team_ids)) != len(team_ids):
            raise ValidationError("League team list contains duplicates")

    def validate_auto_advance(self, draft: Draft) -> None:
        if draft.status is not DraftStatus.IN_PROGRESS:
            raise InvalidDraftStateError("Draft must be in progress to advance turns")

    def validate_turn_expired(self, draft: Draft, now: datetime, per_team_limit: int = PER_TEAM_LIMIT) -> None:
        """A turn may be forfeited once its timer ran out, or at once when the
        team on the clock already holds a full roster and cannot pick anyway"""
        team_id = current_team_id(draft)
        if team_id is not None and draft.team_pick_count(team_id) >= per_team_limit:
            return
        if not draft.is_turn_expired(now):
            raise InvalidDraftStateError(
                f"Turn for pick {draft.current_pick} has not expired "
                f"({draft.seconds_remaining(now)}s remaining)"
            )
