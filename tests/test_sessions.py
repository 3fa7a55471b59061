# file: tests/test_sessions.py
from vendorflow.engine.sessions import group_sessions

from tests.conftest import make_task


def test_session_order_and_grouping():
    planned = [
        make_task("instagram", "initial"),
        make_task("whatsapp", "followup"),
        make_task("email", "followup", is_overdue=True),
        make_task("whatsapp", "initial"),
        make_task("instagram", "followup", is_overdue=True),
    ]
    sessions = group_sessions(planned)
    assert [s.id for s in sessions] == [
        "overdue", "followup-whatsapp", "outreach-instagram", "outreach-whatsapp",
    ]
    assert sessions[0].urgent
    assert sessions[0].channel == "mixed"
    assert len(sessions[0].tasks) == 2
    assert sessions[0].description == "2 follow-ups past due, handle first"
    assert sessions[1].description == "1 follow-up due today"


def test_estimated_minutes():
    instagram = group_sessions([make_task("instagram") for _ in range(3)])
    whatsapp = group_sessions([make_task("whatsapp") for _ in range(3)])
    assert instagram[0].estimated_minutes == 2
    assert whatsapp[0].estimated_minutes == 2
    assert group_sessions([make_task("email") for _ in range(6)])[0].estimated_minutes == 3


def test_empty_plan_has_no_sessions():
    assert group_sessions([]) == []
