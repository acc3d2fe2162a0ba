"""Client-side session: who is logged in, created on login and dropped on logout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from campus_seating.client.apiClient import RouteApiClient
from campus_seating.schemas.route import SeatMapResponse


class NotAuthenticatedError(Exception):
    pass


@dataclass(frozen=True)
class SessionContext:
    person_id: str
    name: str
    role: str
    route_number: Optional[int] = None


class SessionManager:
    """Holds at most one :class:`SessionContext`.

    There is no server-side token; every new manager (or a logout) requires
    logging in again.
    """

    def __init__(self, api: RouteApiClient) -> None:
        self._api = api
        self._current: Optional[SessionContext] = None

    @property
    def current(self) -> Optional[SessionContext]:
        return self._current

    async def login(self, email: str, date_of_birth: str, role: str) -> SessionContext:
        # A failed attempt leaves no half-open session behind
        self._current = None
        user = await self._api.login(email, date_of_birth, role)
        self._current = SessionContext(
            person_id=user.id,
            name=user.name,
            role=user.role,
            route_number=user.routeNumber,
        )
        return self._current

    def logout(self) -> None:
        self._current = None

    def require(self) -> SessionContext:
        if self._current is None:
            raise NotAuthenticatedError("Log in to view seats")
        return self._current


async def fetch_seat_map(api: RouteApiClient, session: SessionContext) -> SeatMapResponse:
    """Seat map for the session's own route with the viewer's seat marked."""
    if session.route_number is None:
        raise ValueError(f"{session.name} is not assigned to a route")
    return await api.fetch_seat_map(session.route_number, viewer_id=session.person_id)
