"""
Settings service - the key/value store behind daily targets, follow-up gaps
and Instagram account safety.
"""
import logging
from typing import Dict

from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.core.exceptions import raise_not_found, raise_validation_error
from vendorflow.engine.safety import SAFETY_LIMITS, parse_iso_datetime
from vendorflow.repositories.setting_repo import SettingRepository

logger = logging.getLogger(__name__)

# Upper bound for each integer setting
INTEGER_KEYS = {
    "instagram_daily_target": 1000,
    "whatsapp_daily_target": 1000,
    "email_daily_target": 1000,
    "days_insta_followup": 365,
    "days_wa_followup": 365,
    "days_email_followup": 365,
}
ACCOUNT_AGE_KEY = "insta_account_age"
BLOCK_DATE_KEY = "insta_last_action_block"


def base_key(key: str) -> str:
    """Strip an "<agent_id>:" prefix."""
    return key.split(":", 1)[1] if ":" in key else key


def validate_setting(key: str, value: str) -> None:
    """Reject values the planner could not use. Empty values clear a key."""
    name = base_key(key)
    if not name:
        raise_validation_error("setting key must not be empty", key)
    if value == "":
        return
    if name in INTEGER_KEYS:
        try:
            number = int(value)
        except ValueError:
            raise_validation_error("must be a whole number", key)
        if number < 0:
            raise_validation_error("must not be negative", key)
        if number > INTEGER_KEYS[name]:
            raise_validation_error(f"must be at most {INTEGER_KEYS[name]}", key)
    elif name == ACCOUNT_AGE_KEY and value not in SAFETY_LIMITS:
        raise_validation_error(f"must be one of {', '.join(SAFETY_LIMITS)}", key)
    elif name == BLOCK_DATE_KEY:
        try:
            parse_iso_datetime(value)
        except ValueError:
            raise_validation_error("must be an ISO date", key)


class SettingsService:
    """Service for planning settings."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.setting_repo = SettingRepository(session)

    async def get_all(self) -> Dict[str, str]:
        return await self.setting_repo.get_map()

    async def upsert(self, values: Dict[str, str]) -> Dict[str, str]:
        """Validate and write several keys at once."""
        cleaned = {key.strip(): str(value).strip() for key, value in values.items()}
        for key, value in cleaned.items():
            validate_setting(key, value)

        result = await self.setting_repo.upsert_many(cleaned)
        logger.info(f"Updated settings: {', '.join(sorted(cleaned))}")
        return result

    async def delete(self, key: str) -> None:
        setting = await self.setting_repo.get_by_field("key", key)
        if not setting:
            raise_not_found("Setting", key)
        await self.setting_repo.delete(setting.id)
        logger.info(f"Deleted setting {key}")
