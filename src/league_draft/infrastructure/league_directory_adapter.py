"""
League Directory Adapter

In-memory stand-in for the league backend: teams, contestants and the
rosters teams accumulate during a draft.
"""

from typing import Dict, Iterable, List, Optional

from ..application.interfaces import IContestantDirectory, ITeamDirectory, ITeamRosterStore
from ..domain.exceptions import NotFoundError


class InMemoryLeagueDirectory(ITeamDirectory, IContestantDirectory, ITeamRosterStore):
    """Team, contestant and roster data held in process memory"""

    def __init__(self):
        self._teams: Dict[str, List[str]] = {}  # league_id -> [team_id]
        self._contestant_leagues: Dict[str, str] = {}  # contestant_id -> league_id
        self._rosters: Dict[str, List[str]] = {}  # team_id -> [contestant_id]

    # Seeding

    def add_team(self, league_id: str, team_id: str) -> None:
        teams = self._teams.setdefault(league_id, [])
        if team_id not in teams:
            teams.append(team_id)
        self._rosters.setdefault(team_id, [])

    def remove_team(self, league_id: str, team_id: str) -> None:
        if team_id in self._teams.get(league_id, []):
            self._teams[league_id].remove(team_id)

    def add_contestant(self, league_id: str, contestant_id: str) -> None:
        self._contestant_leagues[contestant_id] = league_id

    def seed_league(
        self,
        league_id: str,
        team_ids: Iterable[str],
        contestant_ids: Iterable[str],
    ) -> None:
        """Register a league's teams and contestants in one call"""
        for team_id in team_ids:
            self.add_team(league_id, team_id)
        for contestant_id in contestant_ids:
            self.add_contestant(league_id, contestant_id)

    def get_roster(self, team_id: str) -> List[str]:
        return list(self._rosters.get(team_id, []))

    # ITeamDirectory

    async def list_teams(self, league_id: str) -> List[str]:
        return list(self._teams.get(league_id, []))

    # IContestantDirectory

    async def belongs_to_league(self, contestant_id: str, league_id: str) -> bool:
        owner: Optional[str] = self._contestant_leagues.get(contestant_id)
        if owner is None:
            raise NotFoundError("Contestant", contestant_id)
        return owner == league_id

    async def list_contestants(self, league_id: str) -> List[str]:
        return [cid for cid, owner in self._contestant_leagues.items() if owner == league_id]

    # ITeamRosterStore

    async def append_contestant(self, team_id: str, contestant_id: str) -> None:
        roster = self._rosters.setdefault(team_id, [])
        if contestant_id not in roster:
            roster.append(contestant_id)

    async def reset_roster(self, team_id: str) -> None:
        self._rosters[team_id] = []
