"""
Performance snapshots, hot leads and the time-of-day channel hint.
"""
from datetime import datetime, timedelta
from typing import Optional, List, Iterable, Tuple

from vendorflow.engine.allocator import count_sent_between
from vendorflow.engine.channels import INSTAGRAM, WHATSAPP, EMAIL
from vendorflow.models.outreach_log import OutreachLog
from vendorflow.models.vendor import Vendor, VendorStatus
from vendorflow.schemas.plan import PerformanceSnapshot, HotLead, TimeRecommendation, DoneToday

HOT_LEADS_LIMIT = 5


def day_start(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def week_start(now: datetime) -> datetime:
    """Monday 00:00 of the week containing now."""
    return day_start(now) - timedelta(days=now.weekday())


def yesterday_window(now: datetime) -> Tuple[datetime, datetime]:
    start = day_start(now) - timedelta(days=1)
    return start, day_start(now) - timedelta(microseconds=1)


def log_window_start(now: datetime) -> datetime:
    """Earliest log timestamp any part of a plan built at now looks at."""
    return min(week_start(now), yesterday_window(now)[0])


def _in_window(value: Optional[datetime], start: datetime, end: datetime) -> bool:
    return value is not None and start <= value <= end


def snapshot(
    logs: Iterable[OutreachLog],
    vendors: Iterable[Vendor],
    start: datetime,
    end: datetime,
) -> PerformanceSnapshot:
    """Sends, replies and signups across every agent within [start, end]."""
    vendors = list(vendors)
    sent = count_sent_between(logs, start, end)
    return PerformanceSnapshot(
        total=sum(sent.values()),
        instagram=sent[INSTAGRAM],
        whatsapp=sent[WHATSAPP],
        email=sent[EMAIL],
        replies=sum(1 for v in vendors if _in_window(v.responded_at, start, end)),
        signups=sum(
            1 for v in vendors
            if v.overall_status == VendorStatus.CONVERTED and _in_window(v.updated_at, start, end)
        ),
    )


def yesterday_snapshot(logs, vendors, now: datetime) -> PerformanceSnapshot:
    start, end = yesterday_window(now)
    return snapshot(logs, vendors, start, end)


def week_snapshot(logs, vendors, now: datetime) -> PerformanceSnapshot:
    return snapshot(logs, vendors, week_start(now), now)


def done_today_summary(done: dict, vendors: Iterable[Vendor], now: datetime) -> DoneToday:
    today = now.date()
    return DoneToday(
        instagram=done[INSTAGRAM],
        whatsapp=done[WHATSAPP],
        email=done[EMAIL],
        total=done[INSTAGRAM] + done[WHATSAPP] + done[EMAIL],
        replies=sum(1 for v in vendors if v.responded_at and v.responded_at.date() == today),
    )


def hot_leads(vendors: Iterable[Vendor], limit: int = HOT_LEADS_LIMIT) -> List[HotLead]:
    """Interested vendors, latest response first."""
    interested = [v for v in vendors if v.overall_status == VendorStatus.INTERESTED]
    interested.sort(key=lambda v: v.responded_at or datetime.min, reverse=True)
    return [HotLead.model_validate(v) for v in interested[:limit]]


def time_recommendation(now: datetime) -> TimeRecommendation:
    hour = now.hour
    if hour < 9:
        return TimeRecommendation(channel=EMAIL, label="Email", reason="Business inboxes are checked first thing in the morning")
    if hour < 13:
        return TimeRecommendation(channel=INSTAGRAM, label="Instagram", reason="Peak engagement window, vendors are browsing")
    if hour < 15:
        return TimeRecommendation(channel=EMAIL, label="Email", reason="Post-lunch email check window")
    if hour < 18:
        return TimeRecommendation(channel=WHATSAPP, label="WhatsApp", reason="Afternoon activity spike on WhatsApp")
    if hour < 20:
        return TimeRecommendation(channel=INSTAGRAM, label="Instagram", reason="Evening browsing peak")
    return TimeRecommendation(channel=EMAIL, label="Review", reason="Late, review data and plan for tomorrow")
