# file: tests/test_plan_service.py
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from vendorflow.services.plan_service import PlanService

from tests.conftest import NOW, make_vendor, make_sequence, make_log


def service_with(vendors, sequences=(), logs=(), settings=None):
    service = PlanService(AsyncMock())
    service.vendor_repo.get_all = AsyncMock(return_value=list(vendors))
    service.sequence_repo.get_active = AsyncMock(return_value=list(sequences))
    service.log_repo.get_since = AsyncMock(return_value=list(logs))
    service.setting_repo.get_map = AsyncMock(return_value=settings or {})
    return service


@pytest.mark.asyncio
async def test_build_plan_loads_everything_once():
    vendor = make_vendor()
    done = make_vendor(overall_status="converted")
    service = service_with([vendor, done], [make_sequence(vendor)], [make_log(done, "email")])

    plan = await service.build_plan(agent_id="a1", now=NOW)

    assert [t.vendor_id for t in plan.planned_tasks] == [vendor.id]
    assert plan.done_today.email == 1
    service.vendor_repo.get_all.assert_awaited_once()
    service.log_repo.get_since.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("total_agents,agent_index", [(2, 2), (2, -1), (-1, 0)])
async def test_build_plan_rejects_bad_partition(total_agents, agent_index):
    service = service_with([])
    with pytest.raises(HTTPException) as exc:
        await service.build_plan(total_agents=total_agents, agent_index=agent_index, now=NOW)
    assert exc.value.status_code == 422
    service.vendor_repo.get_all.assert_not_awaited()
