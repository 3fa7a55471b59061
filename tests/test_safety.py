# file: tests/test_safety.py
from datetime import timedelta

import pytest

from vendorflow.engine.safety import get_insta_safety_limit, get_channel_limit

from tests.conftest import NOW


@pytest.mark.parametrize("age,daily,weekly", [
    ("new", 15, 70),
    ("warm", 25, 140),
    ("aged", 40, 200),
])
def test_limits_by_account_age(age, daily, weekly):
    limit = get_insta_safety_limit({"insta_account_age": age}, now=NOW)
    assert (limit.daily, limit.weekly) == (daily, weekly)


def test_unknown_age_uses_warm():
    limit = get_insta_safety_limit({"insta_account_age": "ancient"}, now=NOW)
    assert (limit.daily, limit.weekly) == (25, 140)


def test_recent_block_halves_limits():
    blocked = (NOW - timedelta(days=3)).date().isoformat()
    limit = get_insta_safety_limit({"insta_account_age": "new", "insta_last_action_block": blocked}, now=NOW)
    assert (limit.daily, limit.weekly) == (7, 35)


def test_old_block_is_ignored():
    blocked = (NOW - timedelta(days=10)).date().isoformat()
    limit = get_insta_safety_limit({"insta_last_action_block": blocked}, now=NOW)
    assert (limit.daily, limit.weekly) == (25, 140)


def test_timezone_aware_block_date():
    blocked = (NOW - timedelta(days=1)).isoformat() + "+05:30"
    limit = get_insta_safety_limit({"insta_last_action_block": blocked}, now=NOW)
    assert limit.daily == 12


def test_block_date_with_utc_suffix():
    blocked = (NOW - timedelta(days=2)).strftime("%Y-%m-%dT%H:%M:%SZ")
    limit = get_insta_safety_limit({"insta_last_action_block": blocked}, now=NOW)
    assert (limit.daily, limit.weekly) == (12, 70)


def test_unreadable_block_date_is_ignored():
    limit = get_insta_safety_limit({"insta_last_action_block": "last tuesday"}, now=NOW)
    assert limit.daily == 25


def test_agent_specific_account_age():
    settings = {"insta_account_age": "aged", "agent-2:insta_account_age": "new"}
    assert get_insta_safety_limit(settings, "agent-2", NOW).daily == 15
    assert get_insta_safety_limit(settings, "agent-1", NOW).daily == 40


def test_flat_channel_limits():
    assert get_channel_limit("whatsapp", {}).daily == 50
    assert get_channel_limit("email", {}).weekly == 500
