"""
Draft Status Value Object

Represents the lifecycle states of a draft with forward-only transitions.
"""

from enum import Enum
from typing import List


class DraftStatus(Enum):
    """Lifecycle states of a draft"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def next_statuses(self) -> List["DraftStatus"]:
        """Get valid next statuses from the current one"""
        transitions = {
            DraftStatus.NOT_STARTED: [DraftStatus.IN_PROGRESS],
            DraftStatus.IN_PROGRESS: [DraftStatus.COMPLETED],
            DraftStatus.COMPLETED: [],
        }
        return transitions[self]

    def can_transition_to(self, target: "DraftStatus") -> bool:
        """Check if the draft can move to the target status"""
        return target in self.next_statuses

    @property
    def is_active(self) -> bool:
        """Check if picks are currently being made"""
        return self is DraftStatus.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self is DraftStatus.COMPLETED
