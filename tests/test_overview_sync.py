import asyncio

import httpx
import pytest

from campus_seating.client.apiClient import RouteApiClient
from campus_seating.client.overviewSync import LoadState, OverviewSyncController, poll_interval_from_env
from campus_seating.client.polling import PeriodicTask
from campus_seating.schemas.route import FleetSummary

# Long enough that only the immediate tick runs during a test
NO_REPEAT = 3600


def _summary(number, boys=0, girls=0, staff=0):
    return {
        "number": number, "busNumber": f"TN-{number:02d}", "driver": "Ravi",
        "capacity": 40, "studentsTotal": boys + girls,
        "boys": boys, "girls": girls, "staff": staff,
    }


def _detail(number, attendance=()):
    return {"success": True, "route": {
        "number": number, "busNumber": f"TN-{number:02d}", "driver": "Ravi",
        "capacity": 40, "staff": [], "students": [],
        "attendance": list(attendance),
    }}


def _attendance(*counts):
    return {"success": True, "attendance": [
        {"date": f"2026-01-{10 + i:02d}", "count": c} for i, c in enumerate(counts)
    ]}


async def _with_controller(handler, scenario, poll_interval=NO_REPEAT):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    ) as http:
        controller = OverviewSyncController(RouteApiClient(http), poll_interval=poll_interval)
        try:
            await scenario(controller)
        finally:
            await controller.close()
        return controller


def test_overview_loads_once_sorted_with_totals():
    calls = []

    async def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json={"success": True, "overview": [
            _summary(9, boys=2), _summary(2, girls=3, staff=1), _summary(5),
        ]})

    async def scenario(controller):
        assert controller.overview.state == LoadState.IDLE
        await controller.start()

    controller = asyncio.run(_with_controller(handler, scenario))

    assert controller.overview.state == LoadState.READY
    assert [row.number for row in controller.rows] == [2, 5, 9]
    assert controller.totals == FleetSummary(buses=3, students=5, boys=2, girls=3, staff=1)
    assert calls == ["/routes/admin/overview"]


def test_overview_failure_is_visible():
    async def handler(request):
        return httpx.Response(500, text="database offline")

    controller = asyncio.run(_with_controller(handler, lambda c: c.start()))

    assert controller.overview.state == LoadState.FAILED
    assert controller.overview.error == "database offline"
    assert controller.rows == []


def test_failed_poll_keeps_last_good_attendance():
    state = {"fail": False}

    async def handler(request):
        if request.url.path == "/routes/7":
            return httpx.Response(200, json=_detail(7))
        if state["fail"]:
            raise httpx.ConnectError("network down", request=request)
        return httpx.Response(200, json=_attendance(30, 31, 29))

    async def scenario(controller):
        await controller.select(7)
        await asyncio.sleep(0.05)  # let the immediate tick land
        await controller.poll_attendance()
        assert len(controller.attendance.data) == 3

        state["fail"] = True
        await controller.poll_attendance()

        assert controller.attendance.state == LoadState.FAILED
        assert [a.count for a in controller.attendance.data] == [30, 31, 29]
        assert controller.attendance.error is None
        assert [a.count for a in controller.recent_attendance()] == [29, 31, 30]
        assert controller.detail.state == LoadState.READY

    asyncio.run(_with_controller(handler, scenario))


def test_non_json_poll_is_ignored():
    state = {"html": False}

    async def handler(request):
        if request.url.path == "/routes/7":
            return httpx.Response(200, json=_detail(7))
        if state["html"]:
            return httpx.Response(200, text="<html/>", headers={"content-type": "text/html"})
        return httpx.Response(200, json=_attendance(5))

    async def scenario(controller):
        await controller.select(7)
        await asyncio.sleep(0.05)  # let the immediate tick land
        await controller.poll_attendance()
        state["html"] = True
        await controller.poll_attendance()
        assert [a.count for a in controller.attendance.data] == [5]
        assert controller.attendance.error is None

    asyncio.run(_with_controller(handler, scenario))


def test_late_detail_for_superseded_selection_is_discarded():
    release_route_3 = asyncio.Event()

    async def handler(request):
        path = request.url.path
        if path == "/routes/3":
            await release_route_3.wait()
            return httpx.Response(200, json=_detail(3))
        if path == "/routes/9":
            return httpx.Response(200, json=_detail(9))
        return httpx.Response(200, json=_attendance())

    async def scenario(controller):
        slow = asyncio.create_task(controller.select(3))
        await asyncio.sleep(0)
        await controller.select(9)
        assert controller.detail.data.number == 9

        release_route_3.set()
        await slow

        assert controller.selected == 9
        assert controller.detail.state == LoadState.READY
        assert controller.detail.data.number == 9

    asyncio.run(_with_controller(handler, scenario))


def test_late_poll_for_previous_route_is_discarded():
    release_route_3_poll = asyncio.Event()

    async def handler(request):
        path = request.url.path
        if path == "/routes/3/attendance":
            await release_route_3_poll.wait()
            return httpx.Response(200, json=_attendance(99, 98))
        if path == "/routes/9/attendance":
            return httpx.Response(200, json=_attendance(12))
        return httpx.Response(200, json=_detail(int(path.rsplit("/", 1)[1])))

    async def scenario(controller):
        await controller.select(3)
        pending = asyncio.create_task(controller.poll_attendance())
        await asyncio.sleep(0)

        await controller.select(9)
        await controller.poll_attendance()

        release_route_3_poll.set()
        await pending

        assert [a.count for a in controller.attendance.data] == [12]

    asyncio.run(_with_controller(handler, scenario))


def test_detail_failure_is_visible():
    async def handler(request):
        if request.url.path == "/routes/4":
            return httpx.Response(404, json={"success": False, "message": "Route not found"})
        return httpx.Response(200, json=_attendance())

    async def scenario(controller):
        await controller.select(4)
        assert controller.detail.state == LoadState.FAILED
        assert controller.detail.error == "Route not found"

    asyncio.run(_with_controller(handler, scenario))


def test_recent_attendance_falls_back_to_detail_before_first_poll():
    async def handler(request):
        if request.url.path == "/routes/7":
            return httpx.Response(200, json=_detail(7, [
                {"date": f"2026-01-{d:02d}", "count": d} for d in range(1, 10)
            ]))
        return httpx.Response(503)

    async def scenario(controller):
        await controller.select(7)
        recent = controller.recent_attendance()
        assert [a.count for a in recent] == [9, 8, 7, 6, 5, 4]

    asyncio.run(_with_controller(handler, scenario))


def test_polling_repeats_until_deselected():
    polls = []

    async def handler(request):
        if request.url.path.endswith("/attendance"):
            polls.append(request.url.path)
            return httpx.Response(200, json=_attendance(len(polls)))
        return httpx.Response(200, json=_detail(7))

    async def scenario(controller):
        await controller.select(7)
        await asyncio.sleep(0.1)
        controller.deselect()
        seen = len(polls)
        await asyncio.sleep(0.05)

        assert seen >= 2
        # at most one tick that was already scheduled may still land
        assert len(polls) <= seen + 1
        assert controller.attendance.state == LoadState.IDLE

    asyncio.run(_with_controller(handler, scenario, poll_interval=0.01))


def test_close_discards_in_flight_poll():
    release = asyncio.Event()

    async def handler(request):
        if request.url.path.endswith("/attendance"):
            await release.wait()
            return httpx.Response(200, json=_attendance(1, 2))
        return httpx.Response(200, json=_detail(7))

    async def main():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://test"
        ) as http:
            controller = OverviewSyncController(RouteApiClient(http), poll_interval=NO_REPEAT)
            await controller.select(7)
            closing = asyncio.create_task(controller.close())
            await asyncio.sleep(0)
            release.set()
            await closing
            return controller

    controller = asyncio.run(main())
    assert controller.attendance.data is None


def test_periodic_task_rejects_non_positive_interval():
    async def noop():
        return None

    with pytest.raises(ValueError):
        PeriodicTask(noop, 0)


def test_poll_interval_from_env(monkeypatch):
    monkeypatch.delenv("BUS_ATTENDANCE_POLL_SECONDS", raising=False)
    assert poll_interval_from_env() == 8.0
    monkeypatch.setenv("BUS_ATTENDANCE_POLL_SECONDS", "2.5")
    assert poll_interval_from_env() == 2.5
    monkeypatch.setenv("BUS_ATTENDANCE_POLL_SECONDS", "soon")
    assert poll_interval_from_env() == 8.0


def test_malformed_detail_ends_failed():
    async def handler(request):
        if request.url.path == "/routes/3":
            return httpx.Response(200, json={"success": True, "route": {"number": 3}})
        return httpx.Response(200, json=_attendance())

    async def scenario(controller):
        await controller.select(3)
        assert controller.detail.state == LoadState.FAILED
        assert controller.detail.error == "Malformed response"

    asyncio.run(_with_controller(handler, scenario))


def test_overview_without_rows_key_ends_failed():
    async def handler(request):
        return httpx.Response(200, json={"success": True})

    controller = asyncio.run(_with_controller(handler, lambda c: c.start()))

    assert controller.overview.state == LoadState.FAILED
    assert controller.overview.error == "Malformed response"
    assert controller.rows == []
