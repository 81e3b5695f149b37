"""
Draft Application Service

Main application service that coordinates draft operations.
Acts as the facade for all draft use cases: it loads the persisted draft,
runs it through the domain services, writes the next snapshot back
conditionally and then fans out roster and notification side effects.

The service keeps no draft state between calls. Every mutation is a
read-modify-conditional-write; a lost race surfaces as ConflictError and is
never replayed against the newer state.
"""

import logging
import random
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Tuple

from src.utils.retry import retry_async

from ..domain.entities.draft import Draft, DraftPick, utc_now
from ..domain.exceptions import (
    ConflictError,
    DraftError,
    NotFoundError,
    TransientStorageError,
)
from ..domain.services.draft_orchestrator import DraftOrchestrator
from ..domain.services.turn_order import current_team_id
from ..domain.services.validation_service import (
    PickValidator,
    ValidationService,
    validate_required,
)
from .dto import CleanupResult, DraftStatusDTO
from .interfaces import (
    IContestantDirectory,
    IDraftConfiguration,
    IDraftRepository,
    INotificationDispatcher,
    ITeamDirectory,
    ITeamRosterStore,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (TransientStorageError,)

Mutation = Callable[[Draft], Awaitable[Draft]]


class DraftApplicationService:
    """
    Main application service for draft operations.

    Coordinates between domain services and infrastructure adapters.
    """

    def __init__(
        self,
        draft_repository: IDraftRepository,
        team_directory: ITeamDirectory,
        contestant_directory: IContestantDirectory,
        roster_store: ITeamRosterStore,
        notification_dispatcher: INotificationDispatcher,
        configuration: IDraftConfiguration,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ):
        self._draft_repository = draft_repository
        self._team_directory = team_directory
        self._contestant_directory = contestant_directory
        self._roster_store = roster_store
        self._notification_dispatcher = notification_dispatcher
        self._configuration = configuration
        self._clock = clock
        self._rng = rng or random.Random()
        self._retry_policy = configuration.get_retry_policy()

        # Domain services
        self._orchestrator = DraftOrchestrator()
        self._validation_service = ValidationService()
        self._pick_validator = PickValidator(contestant_directory)

    # ====================
    # Draft Lifecycle
    # ====================

    async def create_draft(self, league_id: str, settings: Optional[Mapping[str, Any]] = None) -> Draft:
        """Create a draft in the pre-draft lobby state"""
        validate_required({"league_id": league_id}, ["league_id"])

        team_ids = await self._retry(lambda: self._team_directory.list_teams(league_id), "list teams")
        self._validation_service.validate_draft_creation(league_id, team_ids)

        draft = self._orchestrator.create_draft(
            league_id,
            self._configuration.get_default_settings(),
            overrides=settings,
            now=self._clock(),
        )
        created = await self._retry(lambda: self._draft_repository.create_draft(draft), "create draft")

        logger.info(f"Created draft {created.id} for league {league_id} ({len(team_ids)} teams)")
        return created

    async def start_draft(self, draft_id: str) -> Draft:
        """Randomize the draft order and open the first turn"""
        async def mutation(draft: Draft) -> Draft:
            team_ids = await self._team_directory.list_teams(draft.league_id)
            self._validation_service.validate_draft_start(draft, team_ids)
            return self._orchestrator.start_draft(draft, team_ids, self._clock(), self._rng)

        _, draft = await self._mutate(draft_id, mutation, "start draft")
        logger.info(f"Started draft {draft.id} with order {draft.draft_order}")

        await self._dispatch("draft_started", self._notification_dispatcher.on_draft_started(draft.league_id))
        await self._announce_progress(draft)
        return draft

    async def make_pick(
        self,
        draft_id: str,
        team_id: str,
        contestant_id: str,
        expected_pick: Optional[int] = None,
    ) -> Draft:
        """Record a pick for the team on the clock.

        Args:
            draft_id: Draft to pick in
            team_id: Team making the pick
            contestant_id: Contestant being drafted
            expected_pick: Pick number the caller believes is current; a
                mismatch raises ConflictError instead of picking in a later slot

        Returns:
            Draft: The persisted snapshot after the pick
        """
        validate_required(
            {"draft_id": draft_id, "team_id": team_id, "contestant_id": contestant_id},
            ["draft_id", "team_id", "contestant_id"],
        )

        async def mutation(draft: Draft) -> Draft:
            self._check_expected_pick(draft, expected_pick)
            await self._pick_validator.validate(draft, team_id, contestant_id)
            league_team_ids = await self._team_directory.list_teams(draft.league_id)
            updated, _ = self._orchestrator.apply_pick(
                draft, team_id, contestant_id, league_team_ids, self._clock()
            )
            return updated

        before, draft = await self._mutate(draft_id, mutation, "make pick")
        logger.info(
            f"Draft {draft.id}: pick {before.current_pick} by team {team_id} "
            f"took contestant {contestant_id}"
        )

        await self._sync_roster(team_id, contestant_id)
        await self._dispatch(
            "pick_made",
            self._notification_dispatcher.on_pick_made(draft.league_id, team_id, contestant_id),
        )
        await self._announce_progress(draft)
        return draft

    async def auto_advance(self, draft_id: str, expected_pick: Optional[int] = None) -> Draft:
        """Forfeit the current turn after its timer ran out.

        Args:
            draft_id: Draft whose turn expired
            expected_pick: Pick number whose timer the caller saw expire; if a
                pick already closed that slot the call fails with ConflictError

        Returns:
            Draft: The persisted snapshot after advancing

        Raises:
            InvalidDraftStateError: While the turn still has time left, unless
                the team on the clock already holds a full roster
        """
        async def mutation(draft: Draft) -> Draft:
            now = self._clock()
            self._validation_service.validate_auto_advance(draft)
            self._check_expected_pick(draft, expected_pick)
            # a pick restarts the timer, so a stale expiry never reaches the next team
            self._validation_service.validate_turn_expired(draft, now)
            league_team_ids = await self._team_directory.list_teams(draft.league_id)
            return self._orchestrator.skip_turn(draft, league_team_ids, now)

        before, draft = await self._mutate(draft_id, mutation, "auto advance")

        skipped_team_id = current_team_id(before)
        logger.info(f"Draft {draft.id}: team {skipped_team_id} forfeited pick {before.current_pick}")
        await self._dispatch(
            "turn_skipped",
            self._notification_dispatcher.on_turn_skipped(draft.league_id, skipped_team_id),
        )
        await self._announce_progress(draft)
        return draft

    async def delete_draft(self, draft_id: str) -> None:
        """Remove a draft record and tell clients to drop their copy"""
        draft = await self.get_draft(draft_id)
        await self._retry(lambda: self._draft_repository.delete_draft(draft_id), "delete draft")
        logger.info(f"Deleted draft {draft_id} for league {draft.league_id}")
        await self._dispatch("draft_deleted", self._notification_dispatcher.on_draft_deleted(draft.league_id))

    # ====================
    # Queries
    # ====================

    async def get_draft(self, draft_id: str) -> Draft:
        """Get draft by ID"""
        validate_required({"draft_id": draft_id}, ["draft_id"])
        return await self._retry(lambda: self._load_draft(draft_id), "get draft")

    async def get_draft_by_league(self, league_id: str) -> Optional[Draft]:
        """Get the league's current draft (the most recently created one)"""
        drafts = await self.list_drafts_by_league(league_id)
        if not drafts:
            return None
        return max(drafts, key=lambda d: d.created_at)

    async def list_drafts_by_league(self, league_id: str) -> List[Draft]:
        validate_required({"league_id": league_id}, ["league_id"])
        return await self._retry(
            lambda: self._draft_repository.list_drafts_by_league(league_id), "list drafts"
        )

    def get_current_team_id(self, draft: Draft) -> Optional[str]:
        """Get the team whose turn it is"""
        return current_team_id(draft)

    def get_draft_status(self, draft: Draft) -> DraftStatusDTO:
        return DraftStatusDTO.from_domain(draft)

    def get_team_picks(self, draft: Draft, team_id: str) -> List[DraftPick]:
        return draft.team_picks(team_id)

    async def get_available_contestants(self, league_id: str, draft_id: Optional[str] = None) -> List[str]:
        """Get contestant ids in the league that have not been drafted yet"""
        validate_required({"league_id": league_id}, ["league_id"])
        contestant_ids = await self._retry(
            lambda: self._contestant_directory.list_contestants(league_id), "list contestants"
        )
        if not draft_id:
            return contestant_ids

        draft = await self.get_draft(draft_id)
        drafted = set(draft.drafted_contestant_ids)
        return [cid for cid in contestant_ids if cid not in drafted]

    # ====================
    # Administration
    # ====================

    async def delete_all_drafts_for_league(self, league_id: str) -> int:
        """Delete every draft of a league, skipping ones that fail"""
        drafts = await self.list_drafts_by_league(league_id)
        deleted = 0
        for draft in drafts:
            try:
                await self.delete_draft(draft.id)
                deleted += 1
            except DraftError as e:
                logger.warning(f"Failed to delete draft {draft.id}: {e}")
        return deleted

    async def cleanup_league_draft_data(self, league_id: str) -> CleanupResult:
        """Delete all of a league's drafts and empty every team roster"""
        drafts_deleted = await self.delete_all_drafts_for_league(league_id)

        team_ids = await self._retry(lambda: self._team_directory.list_teams(league_id), "list teams")
        teams_reset = 0
        for team_id in team_ids:
            try:
                await self._roster_store.reset_roster(team_id)
                teams_reset += 1
            except DraftError as e:
                logger.warning(f"Failed to reset roster for team {team_id}: {e}")

        logger.info(
            f"Cleaned up league {league_id}: {drafts_deleted} drafts deleted, {teams_reset} rosters reset"
        )
        return CleanupResult(drafts_deleted=drafts_deleted, teams_reset=teams_reset)

    # ====================
    # Helpers
    # ====================

    async def _load_draft(self, draft_id: str) -> Draft:
        draft = await self._draft_repository.get_draft(draft_id)
        if draft is None:
            raise NotFoundError("Draft", draft_id)
        return draft

    async def _mutate(self, draft_id: str, mutation: Mutation, action: str) -> Tuple[Draft, Draft]:
        """Read, apply and conditionally write; retried only on transient failures.

        Each retry re-reads the stored draft and re-runs the mutation, so a
        stale snapshot is never written.
        """
        validate_required({"draft_id": draft_id}, ["draft_id"])

        async def attempt() -> Tuple[Draft, Draft]:
            current = await self._load_draft(draft_id)
            updated = await mutation(current)
            stored = await self._draft_repository.update_draft(updated, expected_version=current.version)
            return current, stored

        try:
            return await retry_async(
                attempt, self._retry_policy, TRANSIENT_ERRORS, description=f"{action} on draft {draft_id}"
            )
        except ConflictError:
            logger.warning(f"{action} on draft {draft_id} lost a concurrent update")
            raise

    async def _retry(self, operation: Callable[[], Awaitable[Any]], description: str) -> Any:
        return await retry_async(operation, self._retry_policy, TRANSIENT_ERRORS, description=description)

    @staticmethod
    def _check_expected_pick(draft: Draft, expected_pick: Optional[int]) -> None:
        if expected_pick is None or not draft.is_active:
            return
        if draft.current_pick != expected_pick:
            raise ConflictError(
                f"Pick {expected_pick} is no longer current (draft is at pick {draft.current_pick})"
            )

    async def _announce_progress(self, draft: Draft) -> None:
        """Emit completion, or the turn change for whoever is on the clock now"""
        if draft.is_completed:
            logger.info(f"Draft {draft.id} completed with {len(draft.picks)} picks")
            await self._dispatch(
                "draft_completed", self._notification_dispatcher.on_draft_completed(draft.league_id)
            )
            return

        team_id = current_team_id(draft)
        deadline = draft.turn_deadline
        deadline_ms = int(deadline.timestamp() * 1000) if deadline else 0
        await self._dispatch(
            "turn_changed",
            self._notification_dispatcher.on_turn_changed(draft.league_id, team_id, deadline_ms),
        )

    async def _sync_roster(self, team_id: str, contestant_id: str) -> None:
        # Rosters can be rebuilt from draft.picks, so a failure here never undoes the pick
        try:
            await self._roster_store.append_contestant(team_id, contestant_id)
        except Exception:
            logger.error(
                f"Failed to add contestant {contestant_id} to roster of team {team_id}",
                exc_info=True,
            )

    async def _dispatch(self, event: str, notification: Awaitable[None]) -> None:
        try:
            await notification
        except Exception:
            logger.error(f"Failed to deliver {event} notification", exc_info=True)
