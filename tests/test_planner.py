# file: tests/test_planner.py
from datetime import timedelta

from vendorflow.engine.planner import build_daily_plan

from tests.conftest import NOW, make_vendor, make_sequence, make_log


def test_example_new_photographer():
    vendor = make_vendor()
    plan = build_daily_plan([vendor], [], [], {}, now=NOW)
    assert plan.total_tasks == 1
    task = plan.planned_tasks[0]
    assert (task.channel, task.type, task.priority) == ("instagram", "initial", 55)
    assert plan.sessions[0].id == "outreach-instagram"
    assert plan.total_estimated_minutes == 1
    assert plan.generated_at == NOW


def test_plan_is_idempotent():
    vendors = [make_vendor() for _ in range(10)]
    sequences = [make_sequence(v) for v in vendors[:5]]
    first = build_daily_plan(vendors, sequences, [], {}, now=NOW)
    second = build_daily_plan(vendors, sequences, [], {}, now=NOW)
    assert first == second


def test_plan_does_not_mutate_inputs():
    vendor = make_vendor()
    sequence = make_sequence(vendor)
    settings = {"instagram_daily_target": "5"}
    build_daily_plan([vendor], [sequence], [], settings, now=NOW)
    assert sequence.current_step == 0
    assert vendor.insta_status == "pending"
    assert settings == {"instagram_daily_target": "5"}


def test_at_most_one_task_per_vendor():
    vendors = [make_vendor() for _ in range(8)]
    plan = build_daily_plan(vendors, [], [], {}, now=NOW)
    ids = [task.vendor_id for task in plan.planned_tasks]
    assert len(ids) == len(set(ids)) == 8


def test_excluded_vendors_never_planned():
    statuses = ["interested", "not_interested", "declined", "maybe_later", "converted", "invalid"]
    vendors = [make_vendor(overall_status=status) for status in statuses]
    plan = build_daily_plan(vendors, [make_sequence(v) for v in vendors], [], {}, now=NOW)
    assert plan.planned_tasks == []
    assert plan.overall_pct == 0


def test_budget_caps_the_queue():
    vendors = [make_vendor() for _ in range(10)]
    plan = build_daily_plan(vendors, [], [], {"instagram_daily_target": "3"}, now=NOW)
    instagram = [t for t in plan.planned_tasks if t.channel == "instagram"]
    assert len(instagram) == 3
    assert plan.total_tasks == 3
    assert plan.progress["instagram"].target == 3


def test_budget_fallback_with_persisted_sequence():
    vendor = make_vendor()
    plan = build_daily_plan(
        [vendor], [make_sequence(vendor)], [], {"instagram_daily_target": "0"}, now=NOW
    )
    task = plan.planned_tasks[0]
    assert (task.channel, task.priority) == ("whatsapp", 50)


def test_sends_today_reduce_budget():
    vendors = [make_vendor() for _ in range(5)]
    other = make_vendor(overall_status="interested")
    logs = [make_log(other, "instagram", "sent") for _ in range(2)]
    plan = build_daily_plan(vendors, [], logs, {"instagram_daily_target": "3"}, now=NOW)
    assert plan.progress["instagram"].done_today == 2
    assert plan.done_today.instagram == 2
    assert len([t for t in plan.planned_tasks if t.channel == "instagram"]) == 1


def test_skipped_pair_is_hidden_for_the_day():
    vendor = make_vendor()
    logs = [make_log(vendor, "instagram", "skipped")]
    plan = build_daily_plan([vendor], [make_sequence(vendor)], logs, {}, now=NOW)
    assert plan.planned_tasks == []

    tomorrow = build_daily_plan([vendor], [make_sequence(vendor)], logs, {}, now=NOW + timedelta(days=1))
    assert tomorrow.planned_tasks[0].channel == "instagram"


def test_sequence_progression_over_days():
    started = NOW - timedelta(days=1)
    vendor = make_vendor(insta_status="sent", insta_contacted_at=started)
    sequence = make_sequence(vendor, current_step=1, started_at=started)

    assert build_daily_plan([vendor], [sequence], [], {}, now=NOW).planned_tasks == []
    assert build_daily_plan([vendor], [], [], {}, now=NOW).planned_tasks == []

    later = NOW + timedelta(days=2)
    with_sequence = build_daily_plan([vendor], [sequence], [], {}, now=later).planned_tasks
    simulated = build_daily_plan([vendor], [], [], {}, now=later).planned_tasks
    assert with_sequence[0].channel == simulated[0].channel == "whatsapp"


def test_agents_split_vendors_without_overlap():
    vendors = [make_vendor() for _ in range(6)]
    plans = [
        build_daily_plan(vendors, [], [], {}, agent_id=f"agent-{i}", total_agents=3, agent_index=i, now=NOW)
        for i in range(3)
    ]
    planned = [task.vendor_id for plan in plans for task in plan.planned_tasks]
    assert len(planned) == len(set(planned))
    assert sorted(planned) == sorted(v.id for v in vendors)


def test_hot_leads_and_progress_in_plan():
    lead = make_vendor(overall_status="interested", responded_at=NOW - timedelta(hours=1))
    plan = build_daily_plan([lead], [], [], {}, now=NOW)
    assert [h.id for h in plan.hot_leads] == [lead.id]
    assert plan.done_today.replies == 1
    assert set(plan.progress) == {"instagram", "whatsapp", "email"}


def test_huge_followup_gap_means_not_due():
    vendor = make_vendor(
        username=None,
        phone=None,
        email_status="sent",
        email_contacted_at=NOW - timedelta(days=6),
    )
    plan = build_daily_plan([vendor], [], [], {"days_email_followup": "3000000"}, now=NOW)
    assert plan.planned_tasks == []

    regular = build_daily_plan([vendor], [], [], {"days_email_followup": "4"}, now=NOW)
    assert regular.planned_tasks[0].type == "followup"
