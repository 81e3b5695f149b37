import random
from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest

from src.league_draft.application.draft_service import DraftApplicationService
from src.league_draft.infrastructure.draft_config_adapter import DraftConfigurationAdapter
from src.league_draft.infrastructure.league_directory_adapter import InMemoryLeagueDirectory
from src.league_draft.infrastructure.mock_adapters import RecordingNotificationDispatcher
from src.league_draft.infrastructure.storage_adapter import MemoryDraftRepository

from .sample_league import (
    CONTESTANT_IDS,
    DUO_CONTESTANT_IDS,
    DUO_LEAGUE_ID,
    DUO_TEAM_IDS,
    LEAGUE_ID,
    OTHER_CONTESTANT_ID,
    OTHER_LEAGUE_ID,
    TEAM_IDS,
)


class FakeClock:
    """Deterministic clock; tests move time forward explicitly"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_config() -> Dict[str, str]:
    """Configuration with instant retries"""
    return {
        "DRAFT_RETRY_ATTEMPTS": "3",
        "DRAFT_RETRY_BASE_DELAY": "0",
        "DRAFT_RETRY_MAX_DELAY": "0",
    }


@pytest.fixture
def configuration(test_config) -> DraftConfigurationAdapter:
    return DraftConfigurationAdapter(test_config)


@pytest.fixture
def league_directory() -> InMemoryLeagueDirectory:
    directory = InMemoryLeagueDirectory()
    directory.seed_league(LEAGUE_ID, TEAM_IDS, CONTESTANT_IDS)
    directory.seed_league(DUO_LEAGUE_ID, DUO_TEAM_IDS, DUO_CONTESTANT_IDS)
    directory.seed_league(OTHER_LEAGUE_ID, ["team-z"], [OTHER_CONTESTANT_ID])
    return directory


@pytest.fixture
def repository() -> MemoryDraftRepository:
    return MemoryDraftRepository()


@pytest.fixture
def dispatcher() -> RecordingNotificationDispatcher:
    return RecordingNotificationDispatcher()


@pytest.fixture
def service(repository, league_directory, dispatcher, configuration, clock) -> DraftApplicationService:
    return DraftApplicationService(
        draft_repository=repository,
        team_directory=league_directory,
        contestant_directory=league_directory,
        roster_store=league_directory,
        notification_dispatcher=dispatcher,
        configuration=configuration,
        clock=clock,
        rng=random.Random(42),
    )
