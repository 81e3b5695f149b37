"""
Draft Entity - Aggregate Root

The persisted record of one contestant-allocation process for a league.

``picks`` and ``settings`` are structured fields. They are parsed and
checked exactly once, in :meth:`Draft.from_dict`, when a record crosses the
storage boundary; everything past that point works with typed values.
"""

import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import ValidationError
from .draft_status import DraftStatus

# Every team in a league drafts exactly this many contestants
PER_TEAM_LIMIT = 5

DRAFT_FORMATS = ("snake", "linear")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp for {field_name}: {value!r}", field_name) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class DraftSettings:
    """Per-draft rules fixed at creation"""
    pick_time_limit: int = 120  # seconds
    draft_format: str = "snake"
    auto_pick_enabled: bool = False

    def __post_init__(self):
        """Validate settings values"""
        if isinstance(self.pick_time_limit, bool) or not isinstance(self.pick_time_limit, int):
            raise ValidationError("pick_time_limit must be an integer number of seconds", "pick_time_limit")
        if self.pick_time_limit <= 0:
            raise ValidationError("pick_time_limit must be positive", "pick_time_limit")
        if self.draft_format not in DRAFT_FORMATS:
            raise ValidationError(
                f"draft_format must be one of {', '.join(DRAFT_FORMATS)}", "draft_format"
            )
        if not isinstance(self.auto_pick_enabled, bool):
            raise ValidationError("auto_pick_enabled must be a boolean", "auto_pick_enabled")

    def merged_with(self, overrides: Optional[Mapping[str, Any]]) -> "DraftSettings":
        """Return a copy with caller-supplied partial values applied"""
        if not overrides:
            return self
        unknown = set(overrides) - {"pick_time_limit", "draft_format", "auto_pick_enabled"}
        if unknown:
            raise ValidationError(f"Unknown draft settings: {', '.join(sorted(unknown))}")
        return replace(self, **dict(overrides))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pick_time_limit": self.pick_time_limit,
            "draft_format": self.draft_format,
            "auto_pick_enabled": self.auto_pick_enabled,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DraftSettings":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValidationError("Draft settings must be a mapping", "settings")
        return cls().merged_with(data)


@dataclass(frozen=True)
class DraftPick:
    """A single recorded pick; never modified once appended"""
    pick_number: int
    team_id: str
    contestant_id: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pick_number": self.pick_number,
            "team_id": self.team_id,
            "contestant_id": self.contestant_id,
            "timestamp": _format_timestamp(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DraftPick":
        try:
            pick_number = int(data["pick_number"])
            team_id = str(data["team_id"])
            contestant_id = str(data["contestant_id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Malformed draft pick: {data!r}", "picks") from e
        timestamp = _parse_timestamp(data.get("timestamp"), "picks.timestamp")
        if timestamp is None:
            raise ValidationError(f"Draft pick {pick_number} has no timestamp", "picks")
        return cls(pick_number, team_id, contestant_id, timestamp)


@dataclass
class Draft:
    """
    Draft aggregate root.

    Instances are snapshots: the lifecycle never edits one in place, it builds
    the next snapshot with :func:`dataclasses.replace` and writes it back
    conditionally on ``version``.
    """

    league_id: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: DraftStatus = DraftStatus.NOT_STARTED
    current_pick: int = 0
    current_turn_started_at: Optional[datetime] = None
    draft_order: List[str] = field(default_factory=list)
    picks: List[DraftPick] = field(default_factory=list)
    settings: DraftSettings = field(default_factory=DraftSettings)
    version: int = 0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    # ===================
    # Derived State
    # ===================

    @property
    def team_count(self) -> int:
        return len(self.draft_order)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def is_completed(self) -> bool:
        return self.status is DraftStatus.COMPLETED

    @property
    def total_picks(self) -> int:
        """Number of picks needed to fill every roster in the draft order"""
        return self.team_count * PER_TEAM_LIMIT

    @property
    def drafted_contestant_ids(self) -> List[str]:
        return [pick.contestant_id for pick in self.picks]

    def team_picks(self, team_id: str) -> List[DraftPick]:
        """Get the picks made by one team, in pick order"""
        return [pick for pick in self.picks if pick.team_id == team_id]

    def team_pick_count(self, team_id: str) -> int:
        return sum(1 for pick in self.picks if pick.team_id == team_id)

    @property
    def turn_deadline(self) -> Optional[datetime]:
        """When the active turn expires, or None outside of an active turn"""
        if not self.is_active or self.current_turn_started_at is None:
            return None
        return self.current_turn_started_at + timedelta(seconds=self.settings.pick_time_limit)

    def is_turn_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the active turn's timer has run out"""
        deadline = self.turn_deadline
        if deadline is None:
            return False
        return (now or utc_now()) >= deadline

    def seconds_remaining(self, now: Optional[datetime] = None) -> Optional[int]:
        """Whole seconds left on the active turn, clamped at zero"""
        deadline = self.turn_deadline
        if deadline is None:
            return None
        remaining = (deadline - (now or utc_now())).total_seconds()
        return max(0, int(remaining))

    # ===================
    # Validation
    # ===================

    def validate_state(self) -> List[str]:
        """Validate draft invariants and return any issues"""
        issues = []

        if self.current_pick < 0:
            issues.append("current_pick must not be negative")

        if len(set(self.draft_order)) != len(self.draft_order):
            issues.append("draft_order contains duplicate teams")

        if self.status is DraftStatus.NOT_STARTED:
            if self.current_pick != 0 or self.picks or self.draft_order:
                issues.append("A draft that has not started cannot have an order, picks or a current pick")
        elif self.current_pick < 1:
            issues.append("A started draft must have a current pick of at least 1")

        if self.status is DraftStatus.IN_PROGRESS and self.current_turn_started_at is None:
            issues.append("An in-progress draft must record when the current turn started")
        if self.status is not DraftStatus.IN_PROGRESS and self.current_turn_started_at is not None:
            issues.append("Only an in-progress draft may have a running turn")

        upper = self.current_pick if self.is_completed else self.current_pick - 1
        previous = 0
        for pick in self.picks:
            if pick.pick_number <= previous:
                issues.append(f"Pick {pick.pick_number} is out of order or repeated")
            if pick.pick_number > upper:
                issues.append(f"Pick {pick.pick_number} is ahead of the current pick")
            if self.draft_order and pick.team_id not in self.draft_order:
                issues.append(f"Pick {pick.pick_number} belongs to a team outside the draft order")
            previous = pick.pick_number

        duplicates = [cid for cid, n in Counter(self.drafted_contestant_ids).items() if n > 1]
        if duplicates:
            issues.append(f"Contestants drafted more than once: {', '.join(sorted(duplicates))}")

        over_limit = [tid for tid, n in Counter(p.team_id for p in self.picks).items() if n > PER_TEAM_LIMIT]
        if over_limit:
            issues.append(f"Teams over the {PER_TEAM_LIMIT}-pick limit: {', '.join(sorted(over_limit))}")

        return issues

    # ===================
    # Storage Boundary
    # ===================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "league_id": self.league_id,
            "status": self.status.value,
            "current_pick": self.current_pick,
            "current_turn_started_at": _format_timestamp(self.current_turn_started_at),
            "draft_order": list(self.draft_order),
            "picks": [pick.to_dict() for pick in self.picks],
            "settings": self.settings.to_dict(),
            "version": self.version,
            "created_at": _format_timestamp(self.created_at),
            "updated_at": _format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Draft":
        """Build a Draft from a stored record, rejecting malformed data"""
        try:
            draft_id = str(data["id"])
            league_id = str(data["league_id"])
        except KeyError as e:
            raise ValidationError(f"Stored draft is missing {e.args[0]}", str(e.args[0])) from e

        try:
            status = DraftStatus(data.get("status") or DraftStatus.NOT_STARTED.value)
        except ValueError as e:
            raise ValidationError(f"Unknown draft status: {data.get('status')!r}", "status") from e

        raw_order = data.get("draft_order") or []
        raw_picks = data.get("picks") or []
        if not isinstance(raw_order, list) or not isinstance(raw_picks, list):
            raise ValidationError("draft_order and picks must be lists")

        try:
            current_pick = int(data.get("current_pick") or 0)
            version = int(data.get("version") or 0)
        except (TypeError, ValueError) as e:
            raise ValidationError("current_pick and version must be integers") from e

        now = utc_now()
        return cls(
            id=draft_id,
            league_id=league_id,
            status=status,
            current_pick=current_pick,
            current_turn_started_at=_parse_timestamp(
                data.get("current_turn_started_at"), "current_turn_started_at"
            ),
            draft_order=[str(team_id) for team_id in raw_order if team_id is not None],
            picks=sorted((DraftPick.from_dict(p) for p in raw_picks), key=lambda p: p.pick_number),
            settings=DraftSettings.from_dict(data.get("settings")),
            version=version,
            created_at=_parse_timestamp(data.get("created_at"), "created_at") or now,
            updated_at=_parse_timestamp(data.get("updated_at"), "updated_at") or now,
        )
