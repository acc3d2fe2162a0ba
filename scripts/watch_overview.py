#!/usr/bin/env python3
"""
Follow one route's attendance through the API, the way the admin panel does.

Usage: python scripts/watch_overview.py <route-number> [seconds]
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from campus_seating.client.apiClient import RouteApiClient
from campus_seating.client.overviewSync import LoadState, OverviewSyncController


async def watch(route_number: int, duration: float):
    api = RouteApiClient.from_env()
    controller = OverviewSyncController(api)
    try:
        await controller.start()
        if controller.overview.state == LoadState.FAILED:
            print(f"✗ Overview failed: {controller.overview.error}")
            return 1

        totals = controller.totals
        print(f"Fleet: {totals.buses} buses, {totals.students} students, {totals.staff} staff")

        await controller.select(route_number)
        if controller.detail.state == LoadState.FAILED:
            print(f"✗ Route {route_number}: {controller.detail.error}")
            return 1

        elapsed = 0.0
        while elapsed < duration:
            recent = controller.recent_attendance()
            latest = f"{recent[0].date} = {recent[0].count}" if recent else "none yet"
            print(f"Route {route_number} latest attendance: {latest}")
            await asyncio.sleep(controller.poll_interval)
            elapsed += controller.poll_interval
        return 0
    finally:
        await controller.close()
        await api.aclose()


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    duration = float(sys.argv[2]) if len(sys.argv) > 2 else 60.0
    sys.exit(asyncio.run(watch(int(sys.argv[1]), duration)))


if __name__ == "__main__":
    main()
