"""
Planning configuration resolved from the flat settings store.
"""
import logging
from typing import Optional, Dict, Mapping

logger = logging.getLogger(__name__)

# Compiled-in defaults used when neither the agent nor the global key is set
DEFAULTS: Dict[str, str] = {
    "instagram_daily_target": "30",
    "whatsapp_daily_target": "20",
    "email_daily_target": "15",
    "days_insta_followup": "5",
    "days_wa_followup": "3",
    "days_email_followup": "4",
    "insta_account_age": "warm",
}


class PlanConfig:
    """
    Read-only view over key/value settings.

    Lookups check "<agent_id>:<key>" first, then "<key>", then DEFAULTS.
    Empty values are treated as unset.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None, defaults: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})
        self._defaults = dict(DEFAULTS if defaults is None else defaults)

    @classmethod
    def coerce(cls, settings) -> "PlanConfig":
        if isinstance(settings, PlanConfig):
            return settings
        return cls(settings)

    def resolve(self, key: str, agent_id: Optional[str] = None, default: Optional[str] = None) -> Optional[str]:
        if agent_id:
            value = self._values.get(f"{agent_id}:{key}")
            if value:
                return value
        value = self._values.get(key)
        if value:
            return value
        if default is not None:
            return default
        return self._defaults.get(key)

    def resolve_int(self, key: str, agent_id: Optional[str] = None, default: Optional[int] = None) -> int:
        fallback = default if default is not None else int(self._defaults.get(key, "0"))
        raw = self.resolve(key, agent_id)
        if raw is None:
            return fallback
        try:
            return int(str(raw).strip())
        except ValueError:
            logger.warning(f"Setting '{key}' has non-integer value '{raw}', using {fallback}")
            return fallback

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)
