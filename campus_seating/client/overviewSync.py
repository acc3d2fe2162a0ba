"""
Admin overview sync.

Keeps three independently loaded slots consistent while responses arrive
out of order:

* ``overview``   - route summaries, fetched once by ``start()``
* ``detail``     - the selected route, fetched on every ``select()``
* ``attendance`` - live-polled headcounts for the selected route

Every selection bumps a token. A response is applied only if the token it
was issued under is still current, so a slow answer for a route the admin
has already moved away from is dropped.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, List, Optional

from campus_seating.client.apiClient import RouteApiClient, TransportError
from campus_seating.client.polling import PeriodicTask
from campus_seating.constants import ATTENDANCE_POLL_INTERVAL_SECONDS, RECENT_ATTENDANCE_LIMIT
from campus_seating.db.routeAggregator import fleetTotals, sortSummaries
from campus_seating.schemas.route import AttendanceEntry, FleetSummary

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Loadable:
    state: LoadState = LoadState.IDLE
    data: Any = None
    error: Optional[str] = None

    def loading(self) -> "Loadable":
        # Keep the last good data visible while reloading
        return replace(self, state=LoadState.LOADING, error=None)

    def ready(self, data: Any) -> "Loadable":
        return Loadable(LoadState.READY, data, None)

    def failed(self, error: Optional[str]) -> "Loadable":
        return replace(self, state=LoadState.FAILED, error=error)


def poll_interval_from_env() -> float:
    raw = (os.getenv("BUS_ATTENDANCE_POLL_SECONDS") or "").strip()
    if not raw:
        return ATTENDANCE_POLL_INTERVAL_SECONDS
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid BUS_ATTENDANCE_POLL_SECONDS=%r", raw)
        return ATTENDANCE_POLL_INTERVAL_SECONDS
    return value if value > 0 else ATTENDANCE_POLL_INTERVAL_SECONDS


class OverviewSyncController:
    def __init__(
        self,
        api: RouteApiClient,
        poll_interval: Optional[float] = None,
        recent_limit: int = RECENT_ATTENDANCE_LIMIT,
    ) -> None:
        self._api = api
        self.poll_interval = poll_interval if poll_interval is not None else poll_interval_from_env()
        self.recent_limit = recent_limit

        self.overview = Loadable()
        self.detail = Loadable()
        self.attendance = Loadable()
        self.selected: Optional[int] = None

        self._token = 0
        self._poller: Optional[PeriodicTask] = None
        self._closed = False

    # -- overview -----------------------------------------------------------

    async def start(self) -> None:
        """Fetch the route overview once. Errors are shown to the admin."""
        self.overview = self.overview.loading()
        try:
            rows = await self._api.fetch_overview()
        except TransportError as exc:
            if not self._closed:
                self.overview = self.overview.failed(exc.message or "Failed to load overview")
            return
        if not self._closed:
            self.overview = self.overview.ready(sortSummaries(rows))

    @property
    def rows(self) -> List:
        return self.overview.data or []

    @property
    def totals(self) -> FleetSummary:
        return fleetTotals(self.rows)

    # -- selection ----------------------------------------------------------

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _is_current(self, token: int) -> bool:
        return not self._closed and token == self._token

    def _stop_polling(self) -> None:
        if self._poller is not None:
            self._poller.cancel()
            self._poller = None

    async def select(self, number: int) -> None:
        """Show one route's detail and start live attendance for it."""
        if self._closed:
            return
        token = self._next_token()
        self.selected = number
        self.detail = Loadable().loading()
        self.attendance = Loadable()

        self._stop_polling()
        self._poller = PeriodicTask(lambda: self._poll(token, number), self.poll_interval).start()

        try:
            route = await self._api.fetch_route(number)
        except TransportError as exc:
            if self._is_current(token):
                self.detail = self.detail.failed(exc.message or "Failed to load")
            return
        if self._is_current(token):
            self.detail = self.detail.ready(route)

    def deselect(self) -> None:
        self._next_token()
        self._stop_polling()
        self.selected = None
        self.detail = Loadable()
        self.attendance = Loadable()

    # -- attendance polling -------------------------------------------------

    async def poll_attendance(self) -> None:
        """Run one attendance tick for the current selection."""
        if self.selected is None or self._closed:
            return
        await self._poll(self._token, self.selected)

    async def _poll(self, token: int, number: int) -> None:
        if not self._is_current(token):
            return
        self.attendance = self.attendance.loading()
        try:
            records = await self._api.fetch_attendance(number)
        except TransportError as exc:
            # Background ticks never surface errors; keep the last snapshot
            logger.debug("Attendance poll for route %s failed: %s", number, exc.message)
            if self._is_current(token):
                self.attendance = self.attendance.failed(None)
            return
        if self._is_current(token):
            self.attendance = self.attendance.ready(records)

    def recent_attendance(self) -> List[AttendanceEntry]:
        """Latest submissions first, capped at ``recent_limit``."""
        records = self.attendance.data
        if records is None and self.detail.state == LoadState.READY:
            records = self.detail.data.attendance
        if not records or self.recent_limit <= 0:
            return []
        return list(reversed(records))[: self.recent_limit]

    # -- teardown -----------------------------------------------------------

    async def close(self) -> None:
        """Stop polling; responses still in flight are discarded when they land."""
        self._closed = True
        self._next_token()
        poller = self._poller
        self._stop_polling()
        if poller is not None:
            await poller.drain()
