"""
Domain Entities

The draft record and its value objects.
"""

from .draft import PER_TEAM_LIMIT, Draft, DraftPick, DraftSettings
from .draft_status import DraftStatus

__all__ = ["Draft", "DraftPick", "DraftSettings", "DraftStatus", "PER_TEAM_LIMIT"]
