"""
Common schemas used across multiple endpoints.
"""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str

    class Config:
        json_schema_extra = {"example": {"message": "Setting 'email_daily_target' deleted"}}


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
