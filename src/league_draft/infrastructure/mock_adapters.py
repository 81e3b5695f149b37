"""
Mock Adapters for Testing

Implementations of interfaces that record calls instead of acting on them.
"""

from typing import Any, List, Tuple

from ..application.interfaces import INotificationDispatcher


class RecordingNotificationDispatcher(INotificationDispatcher):
    """Mock dispatcher that keeps every event in order"""

    def __init__(self):
        self.events: List[Tuple[Any, ...]] = []

    async def on_draft_started(self, league_id: str) -> None:
        self.events.append(("draft_started", league_id))

    async def on_turn_changed(self, league_id: str, team_id: str, deadline_ms: int) -> None:
        self.events.append(("turn_changed", league_id, team_id, deadline_ms))

    async def on_turn_skipped(self, league_id: str, team_id: str) -> None:
        self.events.append(("turn_skipped", league_id, team_id))

    async def on_pick_made(self, league_id: str, team_id: str, contestant_id: str) -> None:
        self.events.append(("pick_made", league_id, team_id, contestant_id))

    async def on_draft_completed(self, league_id: str) -> None:
        self.events.append(("draft_completed", league_id))

    async def on_draft_deleted(self, league_id: str) -> None:
        self.events.append(("draft_deleted", league_id))

    def event_names(self) -> List[str]:
        """Helper for testing"""
        return [event[0] for event in self.events]

    def clear(self) -> None:
        self.events.clear()
