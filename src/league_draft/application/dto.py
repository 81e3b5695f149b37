"""
Data Transfer Objects

Simple data containers handed to callers of the application service.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..domain.entities.draft import PER_TEAM_LIMIT, Draft
from ..domain.services.turn_order import current_round, current_team_id


@dataclass(frozen=True)
class DraftStatusDTO:
    """Summary a UI needs to render the draft board header"""
    is_active: bool
    current_team_id: Optional[str]
    current_round: int
    total_rounds: int
    picks_remaining: int

    @classmethod
    def from_domain(cls, draft: Draft) -> "DraftStatusDTO":
        """Convert from domain Draft entity"""
        return cls(
            is_active=draft.is_active,
            current_team_id=current_team_id(draft),
            current_round=current_round(draft),
            total_rounds=PER_TEAM_LIMIT,
            picks_remaining=max(0, draft.total_picks - len(draft.picks)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of wiping a league's draft data"""
    drafts_deleted: int
    teams_reset: int
