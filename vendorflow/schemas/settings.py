"""
Settings schemas.
"""
from typing import Dict
from pydantic import BaseModel


class SettingsUpdate(BaseModel):
    """Keys to write. Prefix a key with "<agent_id>:" to override it for one agent."""
    values: Dict[str, str]

    class Config:
        json_schema_extra = {
            "example": {
                "values": {
                    "instagram_daily_target": "30",
                    "agent-2:insta_account_age": "new",
                    "insta_last_action_block": "2026-10-15"
                }
            }
        }


class SettingsResponse(BaseModel):
    values: Dict[str, str]
