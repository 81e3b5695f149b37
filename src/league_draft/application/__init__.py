"""
Application Layer

Coordinates between domain and infrastructure layers.
Contains use cases, application services, and ports (interfaces).
"""

from .draft_service import DraftApplicationService
from .dto import CleanupResult, DraftStatusDTO

__all__ = [
    "DraftApplicationService",
    "DraftStatusDTO",
    "CleanupResult",
]
