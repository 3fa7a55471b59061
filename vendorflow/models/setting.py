"""
Setting model - flat key/value configuration.
Agent-specific overrides are stored under "<agent_id>:<key>".
"""
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field


class Setting(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    key: str = Field(unique=True, index=True)
    value: str = Field(default="")
    updated_at: datetime = Field(default_factory=datetime.utcnow)
