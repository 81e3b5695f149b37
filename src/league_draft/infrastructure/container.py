"""
Dependency Injection Configuration

Central container that wires up all dependencies for the draft engine.
"""

from typing import Any, Dict, Mapping, Optional

from ..application.draft_service import DraftApplicationService
from ..application.interfaces import (
    IContestantDirectory,
    IDraftConfiguration,
    IDraftRepository,
    INotificationDispatcher,
    ITeamDirectory,
    ITeamRosterStore,
)
from .draft_config_adapter import DraftConfigurationAdapter
from .league_api_adapter import LeagueAPIClient
from .league_directory_adapter import InMemoryLeagueDirectory
from .notification_adapter import LoggingNotificationDispatcher
from .roster_adapter import JsonTeamRosterStore
from .storage_adapter import MemoryDraftRepository


class DraftContainer:
    """
    Dependency injection container for the draft engine.

    Centralizes all dependency wiring and provides factory methods
    for creating properly configured services.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        notification_dispatcher: Optional[INotificationDispatcher] = None,
    ):
        """
        Initialize container from a configuration mapping.

        Args:
            config: Values as returned by ``get_config()`` (optional for testing)
            notification_dispatcher: Overrides the logging dispatcher
        """
        self._services: Dict[str, Any] = {}
        self._setup_dependencies(config or {}, notification_dispatcher)

    def _setup_dependencies(
        self,
        config: Mapping[str, Any],
        notification_dispatcher: Optional[INotificationDispatcher],
    ) -> None:
        """Setup all service dependencies"""
        configuration = DraftConfigurationAdapter(config)
        self._services['draft_configuration'] = configuration
        self._services['draft_repository'] = MemoryDraftRepository()
        self._services['notification_dispatcher'] = notification_dispatcher or LoggingNotificationDispatcher()

        api_url = configuration.get_league_api_url()
        if api_url:
            # League backend owns teams, contestants and rosters
            client = LeagueAPIClient(api_url, api_key=configuration.get_league_api_key())
            self._services['league_api_client'] = client
            self._services['team_directory'] = client
            self._services['contestant_directory'] = client
            self._services['roster_store'] = client
        else:
            directory = InMemoryLeagueDirectory()
            self._services['league_directory'] = directory
            self._services['team_directory'] = directory
            self._services['contestant_directory'] = directory
            roster_dir = configuration.get_roster_data_dir()
            self._services['roster_store'] = JsonTeamRosterStore(roster_dir) if roster_dir else directory

    def get_draft_service(self) -> DraftApplicationService:
        """Get configured draft application service"""
        if 'draft_service' not in self._services:
            self._services['draft_service'] = DraftApplicationService(
                draft_repository=self.get_draft_repository(),
                team_directory=self.get_team_directory(),
                contestant_directory=self.get_contestant_directory(),
                roster_store=self.get_roster_store(),
                notification_dispatcher=self.get_notification_dispatcher(),
                configuration=self.get_draft_configuration(),
            )
        return self._services['draft_service']

    def get_draft_repository(self) -> IDraftRepository:
        return self._services['draft_repository']

    def get_team_directory(self) -> ITeamDirectory:
        return self._services['team_directory']

    def get_contestant_directory(self) -> IContestantDirectory:
        return self._services['contestant_directory']

    def get_roster_store(self) -> ITeamRosterStore:
        return self._services['roster_store']

    def get_notification_dispatcher(self) -> INotificationDispatcher:
        return self._services['notification_dispatcher']

    def get_draft_configuration(self) -> IDraftConfiguration:
        return self._services['draft_configuration']

    def get_league_directory(self) -> Optional[InMemoryLeagueDirectory]:
        """Get the in-memory directory used for seeding, if one is wired"""
        return self._services.get('league_directory')

    async def cleanup(self) -> None:
        """Cleanup resources"""
        client = self._services.get('league_api_client')
        if client is not None:
            await client.close()

        # Clear all drafts from memory
        repo = self._services.get('draft_repository')
        if isinstance(repo, MemoryDraftRepository):
            repo.clear_all_drafts()

        # Clear service cache
        self._services.clear()


# Global container instance
_container: Optional[DraftContainer] = None


def get_container() -> DraftContainer:
    """Get global container instance"""
    global _container
    if _container is None:
        _container = DraftContainer()
    return _container


def initialize_container(config: Optional[Mapping[str, Any]] = None) -> DraftContainer:
    """Initialize global container with configuration"""
    global _container
    _container = DraftContainer(config)
    return _container


async def cleanup_container() -> None:
    """Cleanup global container"""
    global _container
    if _container:
        await _container.cleanup()
        _container = None
