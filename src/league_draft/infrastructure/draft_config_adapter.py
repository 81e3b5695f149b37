"""
Draft Configuration Adapter

Turns the flat string configuration read from the environment into the
typed defaults the draft engine runs with.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from src.utils.retry import BASE_RETRY_DELAY, MAX_RETRY_ATTEMPTS, MAX_RETRY_DELAY, RetryPolicy

from ..application.interfaces import IDraftConfiguration
from ..domain.entities.draft import DraftSettings
from ..domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


class DraftConfigurationAdapter(IDraftConfiguration):
    """
    Configuration adapter backed by a plain mapping.

    Missing or empty keys fall back to the built-in defaults; values that are
    present but unparseable raise ValidationError at construction time.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._config = dict(config or {})
        defaults = DraftSettings()
        self._settings = DraftSettings(
            pick_time_limit=self._get("DRAFT_PICK_TIME_LIMIT", int, defaults.pick_time_limit),
            draft_format=self._get("DRAFT_FORMAT", str, defaults.draft_format),
            auto_pick_enabled=self._get("DRAFT_AUTO_PICK", _parse_bool, defaults.auto_pick_enabled),
        )
        try:
            self._retry_policy = RetryPolicy(
                max_attempts=self._get("DRAFT_RETRY_ATTEMPTS", int, MAX_RETRY_ATTEMPTS),
                base_delay=self._get("DRAFT_RETRY_BASE_DELAY", float, BASE_RETRY_DELAY),
                max_delay=self._get("DRAFT_RETRY_MAX_DELAY", float, MAX_RETRY_DELAY),
            )
        except ValueError as e:
            raise ValidationError(f"Invalid retry configuration: {e}") from e

        logger.debug(f"Draft defaults: {self._settings}, retry: {self._retry_policy}")

    def _get(self, key: str, parse: Callable[[str], Any], default: Any) -> Any:
        raw = self._config.get(key)
        if raw is None or raw == "":
            return default
        if not isinstance(raw, str):
            return raw
        try:
            return parse(raw)
        except ValueError as e:
            raise ValidationError(f"Invalid value for {key}: {raw!r}", key) from e

    def get_default_settings(self) -> DraftSettings:
        return self._settings

    def get_retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def get_league_api_url(self) -> Optional[str]:
        """Base URL of the league backend, or None to run on in-memory data"""
        return self._config.get("LEAGUE_API_URL") or None

    def get_league_api_key(self) -> Optional[str]:
        return self._config.get("LEAGUE_API_KEY") or None

    def get_roster_data_dir(self) -> Optional[str]:
        """Directory for file-backed rosters, or None to keep them in memory"""
        return self._config.get("ROSTER_DATA_DIR") or None
