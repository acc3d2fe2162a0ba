"""Async client for the campus seating HTTP API."""
from __future__ import annotations

import os
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import httpx
import pydantic

from campus_seating.schemas.person import PersonResponse
from campus_seating.schemas.route import (
    AttendanceEntry,
    RouteDetail,
    RouteListItem,
    RouteSummary,
    SeatMapResponse,
)


class TransportError(Exception):
    """Network failure, non-2xx status, or a body that is not JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _error_message(response: httpx.Response) -> str:
    if _is_json(response):
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
    return response.text or f"Request failed ({response.status_code})"


class RouteApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` that only ever returns parsed
    payloads or raises :class:`TransportError`. Responses are never coerced
    into empty defaults."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_env(cls, timeout: float = 10.0) -> "RouteApiClient":
        """Build a client against ``CAMPUS_SEATING_API_URL`` (default localhost)."""
        base_url = (os.getenv("CAMPUS_SEATING_API_URL") or "http://localhost:8000").strip()
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        parse: Optional[Callable[[Dict[str, Any]], Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return ``parse(payload)``.

        A success body that does not match ``parse`` is a transport error too,
        so callers only ever see parsed data or :class:`TransportError`.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or "Network error") from exc

        if not response.is_success:
            raise TransportError(_error_message(response), response.status_code)
        if not _is_json(response):
            raise TransportError(
                response.text or f"Unexpected response (status {response.status_code})",
                response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Malformed JSON response", response.status_code) from exc

        if not isinstance(payload, dict) or not payload.get("success"):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise TransportError(message or "Request failed", response.status_code)

        if parse is None:
            return payload
        try:
            return parse(payload)
        except (pydantic.ValidationError, KeyError, TypeError) as exc:
            raise TransportError("Malformed response", response.status_code) from exc

    async def login(self, email: str, password: str, role: str) -> PersonResponse:
        return await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password, "role": role},
            parse=lambda p: PersonResponse.model_validate(p["user"]),
        )

    async def fetch_routes(self) -> List[RouteListItem]:
        return await self._request(
            "GET", "/routes",
            parse=lambda p: [RouteListItem.model_validate(r) for r in p["routes"]],
        )

    async def fetch_overview(self) -> List[RouteSummary]:
        return await self._request(
            "GET", "/routes/admin/overview",
            parse=lambda p: [RouteSummary.model_validate(r) for r in p["overview"]],
        )

    async def fetch_route(self, number: int) -> RouteDetail:
        return await self._request(
            "GET", f"/routes/{number}",
            parse=lambda p: RouteDetail.model_validate(p["route"]),
        )

    async def fetch_attendance(self, number: int) -> List[AttendanceEntry]:
        return await self._request(
            "GET", f"/routes/{number}/attendance",
            parse=lambda p: [AttendanceEntry.model_validate(a) for a in p["attendance"]],
        )

    async def fetch_seat_map(self, number: int, viewer_id: Optional[str] = None) -> SeatMapResponse:
        params = {"viewerId": viewer_id} if viewer_id else None
        return await self._request(
            "GET", f"/routes/{number}/seats",
            params=params,
            parse=SeatMapResponse.model_validate,
        )

    async def submit_attendance(self, number: int, day: date, count: int) -> AttendanceEntry:
        return await self._request(
            "POST",
            f"/routes/{number}/attendance",
            json={"date": day.isoformat(), "count": count},
            parse=lambda p: AttendanceEntry.model_validate(p["record"]),
        )
