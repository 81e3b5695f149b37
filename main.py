import asyncio
import logging
import os
import random
import sys
from typing import Dict, NoReturn

from src.league_draft.domain.entities.draft import PER_TEAM_LIMIT
from src.league_draft.domain.exceptions import DraftError
from src.league_draft.infrastructure.container import DraftContainer, cleanup_container, initialize_container

logger = logging.getLogger(__name__)

DEMO_LEAGUE_ID = "demo-league"
DEMO_TEAMS = ["team-red", "team-blue", "team-green"]
DEMO_CONTESTANTS = [f"contestant-{n:02d}" for n in range(1, 21)]


def setup_logging() -> None:
    """Configure logging settings"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("draft.log", encoding="utf-8")
        ]
    )


def get_config() -> Dict[str, str]:
    """Get configuration from environment variables"""
    return {
        "DRAFT_PICK_TIME_LIMIT": os.getenv("DRAFT_PICK_TIME_LIMIT", ""),
        "DRAFT_FORMAT": os.getenv("DRAFT_FORMAT", ""),
        "DRAFT_AUTO_PICK": os.getenv("DRAFT_AUTO_PICK", ""),
        "DRAFT_RETRY_ATTEMPTS": os.getenv("DRAFT_RETRY_ATTEMPTS", ""),
        "DRAFT_RETRY_BASE_DELAY": os.getenv("DRAFT_RETRY_BASE_DELAY", ""),
        "DRAFT_RETRY_MAX_DELAY": os.getenv("DRAFT_RETRY_MAX_DELAY", ""),
        "LEAGUE_API_URL": os.getenv("LEAGUE_API_URL", ""),
        "LEAGUE_API_KEY": os.getenv("LEAGUE_API_KEY", ""),
        "ROSTER_DATA_DIR": os.getenv("ROSTER_DATA_DIR", ""),
    }


async def run_draft(container: DraftContainer, league_id: str) -> None:
    """Drive one draft to completion, each team picking a random available contestant"""
    service = container.get_draft_service()

    directory = container.get_league_directory()
    if directory is not None:
        directory.seed_league(league_id, DEMO_TEAMS, DEMO_CONTESTANTS)

    draft = await service.create_draft(league_id)
    draft = await service.start_draft(draft.id)

    while not draft.is_completed:
        team_id = service.get_current_team_id(draft)
        available = await service.get_available_contestants(league_id, draft.id)
        if not available:
            logger.warning(f"League {league_id} ran out of contestants before every roster filled")
            break
        if len(draft.team_picks(team_id)) >= PER_TEAM_LIMIT:
            draft = await service.auto_advance(draft.id, expected_pick=draft.current_pick)
            continue
        draft = await service.make_pick(
            draft.id, team_id, random.choice(available), expected_pick=draft.current_pick
        )

    for team_id in draft.draft_order:
        picked = ", ".join(pick.contestant_id for pick in service.get_team_picks(draft, team_id))
        logger.info(f"{team_id}: {picked}")


async def main() -> NoReturn:
    """Main entry point

    Raises:
        SystemExit: If the draft fails
    """
    try:
        logger.info("Loading configuration from environment...")
        config = get_config()
        container = initialize_container(config)

        league_id = sys.argv[1] if len(sys.argv) > 1 else DEMO_LEAGUE_ID
        logger.info(f"Running draft for league {league_id}...")
        await run_draft(container, league_id)

    except DraftError as e:
        logger.error(f"Draft failed [{e.code}]: {e.message}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await cleanup_container()

    sys.exit(0)

if __name__ == "__main__":
    # Set up logging
    setup_logging()
    logger.info("Starting draft application...")

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Draft stopped by user")
