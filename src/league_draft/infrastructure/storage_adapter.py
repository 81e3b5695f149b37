"""
Storage Adapter

In-memory implementation of the draft repository.

Records are kept in their serialized form so every read hands out a fresh,
validated snapshot and no caller can mutate stored state by accident.
Writes are compare-and-set on ``version`` under a single lock.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ..application.interfaces import IDraftRepository
from ..domain.entities.draft import Draft
from ..domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class MemoryDraftRepository(IDraftRepository):
    """In-memory draft store with optimistic concurrency"""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}  # draft_id -> serialized Draft
        self._lock = asyncio.Lock()

    async def create_draft(self, draft: Draft) -> Draft:
        """Store a new draft"""
        self._check_invariants(draft)
        async with self._lock:
            if draft.id in self._records:
                raise ConflictError(f"Draft {draft.id} already exists")
            self._records[draft.id] = draft.to_dict()
            return Draft.from_dict(self._records[draft.id])

    async def get_draft(self, draft_id: str) -> Optional[Draft]:
        """Get draft by ID"""
        async with self._lock:
            record = self._records.get(draft_id)
            return Draft.from_dict(record) if record is not None else None

    async def list_drafts_by_league(self, league_id: str) -> List[Draft]:
        async with self._lock:
            return [
                Draft.from_dict(record)
                for record in self._records.values()
                if record["league_id"] == league_id
            ]

    async def update_draft(self, draft: Draft, expected_version: int) -> Draft:
        """Replace the stored draft if nobody else wrote it since it was read"""
        self._check_invariants(draft)
        async with self._lock:
            record = self._records.get(draft.id)
            if record is None:
                raise NotFoundError("Draft", draft.id)
            if record["version"] != expected_version:
                raise ConflictError(
                    f"Draft {draft.id} was modified concurrently "
                    f"(expected version {expected_version}, found {record['version']})"
                )
            if draft.version <= expected_version:
                raise ValidationError(f"Draft {draft.id} update must advance the version")
            self._records[draft.id] = draft.to_dict()
            return Draft.from_dict(self._records[draft.id])

    async def delete_draft(self, draft_id: str) -> None:
        """Delete a draft from storage"""
        async with self._lock:
            if self._records.pop(draft_id, None) is None:
                raise NotFoundError("Draft", draft_id)

    def get_draft_count(self) -> int:
        """Get number of stored drafts"""
        return len(self._records)

    def clear_all_drafts(self) -> None:
        """Clear all drafts (for testing/cleanup)"""
        self._records.clear()

    @staticmethod
    def _check_invariants(draft: Draft) -> None:
        issues = draft.validate_state()
        if issues:
            logger.error(f"Refusing to store draft {draft.id}: {'; '.join(issues)}")
            raise ValidationError(f"Draft {draft.id} is inconsistent: {'; '.join(issues)}")
