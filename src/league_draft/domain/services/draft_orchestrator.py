"""
Draft Orchestrator Domain Service

Pure state transitions of the draft lifecycle:

    not_started -> in_progress -> completed

Every method takes a snapshot and returns the next one. Nothing here touches
storage or collaborators; the application service validates, persists and
notifies around these calls.
"""

import random
from dataclasses import replace
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..entities.draft import PER_TEAM_LIMIT, Draft, DraftPick, DraftSettings
from ..entities.draft_status import DraftStatus
from ..exceptions import InvalidDraftStateError
from .completion import is_complete


class DraftOrchestrator:
    """Core domain service that computes draft lifecycle transitions"""

    def __init__(self, per_team_limit: int = PER_TEAM_LIMIT):
        self._per_team_limit = per_team_limit

    def create_draft(
        self,
        league_id: str,
        default_settings: DraftSettings,
        overrides: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> Draft:
        """Create a draft in the pre-draft lobby state"""
        draft = Draft(league_id=league_id, settings=default_settings.merged_with(overrides))
        if now is not None:
            draft.created_at = now
            draft.updated_at = now
        return draft

    def start_draft(
        self,
        draft: Draft,
        team_ids: Sequence[str],
        now: datetime,
        rng: Optional[random.Random] = None,
    ) -> Draft:
        """Lock in a random draft order and open the first turn"""
        draft_order = self.shuffle_order(team_ids, rng)
        return self._transition(
            draft,
            now,
            status=DraftStatus.IN_PROGRESS,
            current_pick=1,
            current_turn_started_at=now,
            draft_order=draft_order,
        )

    def apply_pick(
        self,
        draft: Draft,
        team_id: str,
        contestant_id: str,
        league_team_ids: Sequence[str],
        now: datetime,
    ) -> Tuple[Draft, DraftPick]:
        """Append a validated pick and either advance the turn or finish the draft"""
        pick = DraftPick(
            pick_number=draft.current_pick,
            team_id=team_id,
            contestant_id=contestant_id,
            timestamp=now,
        )
        picks = [*draft.picks, pick]

        if is_complete(picks, league_team_ids, self._per_team_limit):
            updated = self._transition(
                draft,
                now,
                status=DraftStatus.COMPLETED,
                current_turn_started_at=None,
                picks=picks,
            )
        else:
            updated = self._transition(
                draft,
                now,
                current_pick=draft.current_pick + 1,
                current_turn_started_at=now,
                picks=picks,
            )
        return updated, pick

    def skip_turn(self, draft: Draft, league_team_ids: Sequence[str], now: datetime) -> Draft:
        """Forfeit the current slot without recording a pick"""
        if is_complete(draft.picks, league_team_ids, self._per_team_limit):
            return self._transition(
                draft,
                now,
                status=DraftStatus.COMPLETED,
                current_turn_started_at=None,
            )
        return self._transition(
            draft,
            now,
            current_pick=draft.current_pick + 1,
            current_turn_started_at=now,
        )

    @staticmethod
    def shuffle_order(team_ids: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
        """Uniform random permutation of the team ids (Fisher-Yates)"""
        rng = rng or random.Random()
        order = list(team_ids)
        for i in range(len(order) - 1, 0, -1):
            j = rng.randint(0, i)
            order[i], order[j] = order[j], order[i]
        return order

    def _transition(self, draft: Draft, now: datetime, **changes) -> Draft:
        target = changes.get("status", draft.status)
        if target is not draft.status and not draft.status.can_transition_to(target):
            raise InvalidDraftStateError(
                f"Cannot transition from {draft.status.value} to {target.value}"
            )
        return replace(draft, version=draft.version + 1, updated_at=now, **changes)
