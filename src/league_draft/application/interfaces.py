"""
Application Layer Interfaces (Ports)

Defines contracts between the draft engine and the systems around it.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.utils.retry import RetryPolicy

from ..domain.entities.draft import Draft, DraftSettings


# Repository Interfaces
class IDraftRepository(ABC):
    """Repository for draft persistence with conditional writes"""

    @abstractmethod
    async def create_draft(self, draft: Draft) -> Draft:
        """Store a new draft; fails if the id is already taken"""
        pass

    @abstractmethod
    async def get_draft(self, draft_id: str) -> Optional[Draft]:
        """Get draft by ID"""
        pass

    @abstractmethod
    async def list_drafts_by_league(self, league_id: str) -> List[Draft]:
        """Get every draft recorded for a league"""
        pass

    @abstractmethod
    async def update_draft(self, draft: Draft, expected_version: int) -> Draft:
        """Replace a stored draft only if its version still equals expected_version.

        Raises:
            ConflictError: If the stored draft changed since it was read
            NotFoundError: If the draft no longer exists
        """
        pass

    @abstractmethod
    async def delete_draft(self, draft_id: str) -> None:
        """Delete a draft"""
        pass


# Collaborator Interfaces
class ITeamDirectory(ABC):
    """Authoritative source of a league's teams"""

    @abstractmethod
    async def list_teams(self, league_id: str) -> List[str]:
        """Get the team ids currently in a league"""
        pass


class IContestantDirectory(ABC):
    """Source of a league's contestants"""

    @abstractmethod
    async def belongs_to_league(self, contestant_id: str, league_id: str) -> bool:
        """Check if a contestant is part of a league.

        Raises:
            NotFoundError: If the contestant does not exist at all
        """
        pass

    @abstractmethod
    async def list_contestants(self, league_id: str) -> List[str]:
        """Get every contestant id in a league"""
        pass


class ITeamRosterStore(ABC):
    """Per-team roster kept alongside the draft record"""

    @abstractmethod
    async def append_contestant(self, team_id: str, contestant_id: str) -> None:
        """Add a drafted contestant to a team's roster; appending twice is a no-op"""
        pass

    @abstractmethod
    async def reset_roster(self, team_id: str) -> None:
        """Clear a team's drafted contestants"""
        pass


# Outbound Event Interfaces
class INotificationDispatcher(ABC):
    """Receives draft events; delivery is up to the implementation"""

    @abstractmethod
    async def on_draft_started(self, league_id: str) -> None:
        pass

    @abstractmethod
    async def on_turn_changed(self, league_id: str, team_id: str, deadline_ms: int) -> None:
        """A new turn opened; deadline_ms is the epoch time it expires"""
        pass

    @abstractmethod
    async def on_turn_skipped(self, league_id: str, team_id: str) -> None:
        pass

    @abstractmethod
    async def on_pick_made(self, league_id: str, team_id: str, contestant_id: str) -> None:
        pass

    @abstractmethod
    async def on_draft_completed(self, league_id: str) -> None:
        pass

    @abstractmethod
    async def on_draft_deleted(self, league_id: str) -> None:
        pass


# Configuration Interfaces
class IDraftConfiguration(ABC):
    """Interface for draft configuration"""

    @abstractmethod
    def get_default_settings(self) -> DraftSettings:
        """Settings a new draft starts from before caller overrides"""
        pass

    @abstractmethod
    def get_retry_policy(self) -> RetryPolicy:
        """Backoff used for transient storage failures"""
        pass
