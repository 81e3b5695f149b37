"""
Notification Adapter

Default dispatcher that writes draft events to the log. Real delivery
(push, websocket, email) plugs in behind the same interface.
"""

import logging
from datetime import datetime, timezone

from ..application.interfaces import INotificationDispatcher

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    """Logs every draft event at INFO level"""

    async def on_draft_started(self, league_id: str) -> None:
        logger.info(f"[league {league_id}] The draft has begun")

    async def on_turn_changed(self, league_id: str, team_id: str, deadline_ms: int) -> None:
        deadline = datetime.fromtimestamp(deadline_ms / 1000, tz=timezone.utc)
        logger.info(f"[league {league_id}] Team {team_id} is on the clock until {deadline.isoformat()}")

    async def on_turn_skipped(self, league_id: str, team_id: str) -> None:
        logger.info(f"[league {league_id}] Team {team_id} ran out of time and lost the pick")

    async def on_pick_made(self, league_id: str, team_id: str, contestant_id: str) -> None:
        logger.info(f"[league {league_id}] Team {team_id} drafted contestant {contestant_id}")

    async def on_draft_completed(self, league_id: str) -> None:
        logger.info(f"[league {league_id}] The draft is complete")

    async def on_draft_deleted(self, league_id: str) -> None:
        logger.info(f"[league {league_id}] The draft was deleted")
