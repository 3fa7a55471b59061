"""
Daily plan schemas - the value objects returned by the planning engine.
"""
import uuid
from typing import Optional, List, Dict
from datetime import datetime
from pydantic import BaseModel


class DailyTask(BaseModel):
    """One vendor/channel action proposed for today."""
    vendor_id: uuid.UUID
    vendor_name: str
    category: str
    city: str
    channel: str  # instagram, whatsapp, email
    type: str  # initial, followup
    priority: int
    is_overdue: bool = False
    days_overdue: int = 0
    identifier: str = ""
    sequence_label: str
    step_number: int
    total_steps: int
    available_channels: List[str] = []


class PlanSession(BaseModel):
    """A labelled bucket of tasks worked in one sitting."""
    id: str
    label: str
    description: str
    channel: str  # a channel name or "mixed"
    session_type: str  # overdue, followup, outreach
    tasks: List[DailyTask]
    estimated_minutes: int
    urgent: bool = False


class ChannelProgress(BaseModel):
    """Budget and progress for one channel."""
    done_today: int
    target: int
    safe_limit: int
    remaining: int
    weekly_done: int
    weekly_cap: int
    pct: int
    safe: bool


class DoneToday(BaseModel):
    instagram: int = 0
    whatsapp: int = 0
    email: int = 0
    total: int = 0
    replies: int = 0


class PerformanceSnapshot(BaseModel):
    """Sent/reply/signup counts over one time window."""
    total: int = 0
    instagram: int = 0
    whatsapp: int = 0
    email: int = 0
    replies: int = 0
    signups: int = 0


class HotLead(BaseModel):
    """Vendor that answered with interest."""
    id: uuid.UUID
    full_name: str
    category: str
    city: str
    responded_at: Optional[datetime] = None
    responded_channel: Optional[str] = None

    class Config:
        from_attributes = True


class TimeRecommendation(BaseModel):
    channel: str
    label: str
    reason: str


class DailyPlan(BaseModel):
    """Complete plan for one agent for one day."""
    generated_at: datetime
    sessions: List[PlanSession] = []
    planned_tasks: List[DailyTask] = []
    progress: Dict[str, ChannelProgress]
    done_today: DoneToday
    yesterday: PerformanceSnapshot
    this_week: PerformanceSnapshot
    hot_leads: List[HotLead] = []
    time_recommendation: TimeRecommendation
    total_tasks: int = 0
    total_estimated_minutes: int = 0
    overall_pct: int = 0

    class Config:
        json_schema_extra = {
            "example": {
                "total_tasks": 1,
                "total_estimated_minutes": 1,
                "overall_pct": 0,
            }
        }
