"""
Roster Store Adapter

File-backed team rosters: one JSON document per team listing the
contestants it drafted.
"""

import asyncio
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

from ..application.interfaces import ITeamRosterStore
from ..domain.exceptions import TransientStorageError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class TeamRoster:
    team_id: str
    drafted_contestants: List[str] = field(default_factory=list)


class JsonTeamRosterStore(ITeamRosterStore):
    """Persistent roster per team"""

    def __init__(self, base_dir: Optional[str] = None) -> None:
        base = Path(base_dir or "data")
        self.dir = base / "rosters"
        self.dir.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    def _path(self, team_id: str) -> Path:
        # team ids become file names and must stay inside the roster directory
        if not team_id or team_id in (".", "..") or Path(team_id).name != team_id or "\\" in team_id:
            raise ValidationError(f"Invalid team id: {team_id!r}", "team_id")
        return self.dir / f"{team_id}.json"

    def load(self, team_id: str) -> TeamRoster:
        path = self._path(team_id)
        if not path.exists():
            return TeamRoster(team_id=team_id)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise TransientStorageError(f"Could not read roster for team {team_id}: {e}") from e
        except ValueError as e:
            raise ValidationError(f"Roster file for team {team_id} is corrupt: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("drafted_contestants", []), list):
            raise ValidationError(f"Roster file for team {team_id} is corrupt")
        return TeamRoster(
            team_id=team_id,
            drafted_contestants=[str(cid) for cid in data.get("drafted_contestants", [])],
        )

    def save(self, roster: TeamRoster) -> None:
        path = self._path(roster.team_id)
        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(asdict(roster), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise TransientStorageError(f"Could not write roster for team {roster.team_id}: {e}") from e

    async def append_contestant(self, team_id: str, contestant_id: str) -> None:
        async with self._lock:
            roster = self.load(team_id)
            if contestant_id in roster.drafted_contestants:
                return
            roster.drafted_contestants.append(contestant_id)
            self.save(roster)
        logger.debug(f"Roster of team {team_id} now has {len(roster.drafted_contestants)} contestants")

    async def reset_roster(self, team_id: str) -> None:
        async with self._lock:
            self.save(TeamRoster(team_id=team_id))
