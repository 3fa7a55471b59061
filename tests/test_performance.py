# file: tests/test_performance.py
from datetime import datetime, timedelta

from vendorflow.engine.performance import (
    hot_leads, log_window_start, time_recommendation, week_snapshot, week_start,
    yesterday_snapshot, yesterday_window,
)

from tests.conftest import NOW, make_vendor, make_log


def test_time_windows():
    assert week_start(NOW) == datetime(2026, 10, 12)
    start, end = yesterday_window(NOW)
    assert start == datetime(2026, 10, 13)
    assert end < datetime(2026, 10, 14)
    assert log_window_start(NOW) == datetime(2026, 10, 12)


def test_log_window_on_monday_reaches_sunday():
    monday = datetime(2026, 10, 19, 9, 0)
    assert log_window_start(monday) == datetime(2026, 10, 18)


def test_yesterday_and_week_snapshots():
    vendor = make_vendor()
    replied = make_vendor(overall_status="interested", responded_at=NOW - timedelta(days=1))
    converted = make_vendor(overall_status="converted", updated_at=NOW - timedelta(hours=2))
    logs = [
        make_log(vendor, "instagram", "sent", created_at=NOW - timedelta(days=1)),
        make_log(vendor, "whatsapp", "followed_up", created_at=NOW - timedelta(days=1)),
        make_log(vendor, "email", "skipped", created_at=NOW - timedelta(days=1)),
        make_log(vendor, "email", "sent", created_at=NOW),
    ]
    vendors = [vendor, replied, converted]

    yesterday = yesterday_snapshot(logs, vendors, NOW)
    assert (yesterday.total, yesterday.instagram, yesterday.whatsapp, yesterday.email) == (2, 1, 1, 0)
    assert yesterday.replies == 1
    assert yesterday.signups == 0

    week = week_snapshot(logs, vendors, NOW)
    assert week.total == 3
    assert week.signups == 1


def test_hot_leads_latest_first():
    older = make_vendor(full_name="Older", overall_status="interested", responded_at=NOW - timedelta(days=3))
    newer = make_vendor(full_name="Newer", overall_status="interested", responded_at=NOW - timedelta(hours=1))
    declined = make_vendor(overall_status="declined", responded_at=NOW)
    leads = hot_leads([older, declined, newer], limit=5)
    assert [lead.full_name for lead in leads] == ["Newer", "Older"]
    assert len(hot_leads([older, newer], limit=1)) == 1


def test_time_recommendation_by_hour():
    channels = [time_recommendation(NOW.replace(hour=h)).channel for h in (8, 11, 14, 16, 19, 22)]
    assert channels == ["email", "instagram", "email", "whatsapp", "instagram", "email"]
