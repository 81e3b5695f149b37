"""
Infrastructure Layer

Adapters for external systems and services.
"""

from .container import DraftContainer, cleanup_container, get_container, initialize_container
from .draft_config_adapter import DraftConfigurationAdapter
from .league_api_adapter import LeagueAPIClient
from .league_directory_adapter import InMemoryLeagueDirectory
from .notification_adapter import LoggingNotificationDispatcher
from .roster_adapter import JsonTeamRosterStore
from .storage_adapter import MemoryDraftRepository

__all__ = [
    "DraftConfigurationAdapter",
    "DraftContainer",
    "InMemoryLeagueDirectory",
    "JsonTeamRosterStore",
    "LeagueAPIClient",
    "LoggingNotificationDispatcher",
    "MemoryDraftRepository",
    "cleanup_container",
    "get_container",
    "initialize_container",
]
