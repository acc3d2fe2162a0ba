from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from campus_seating.constants import ROLE_STAFF, ROLE_STUDENT
from campus_seating.db.database import SessionLocal
from campus_seating.db.attendanceLedger import appendAttendance, attendanceHistory
from campus_seating.db.routeAggregator import buildOverview, availableSeats
from campus_seating.db.seatClassifier import classifySeats, findViewerSeat
from campus_seating.errors import RouteNotFoundError
from campus_seating.models.route import Route
from campus_seating.schemas.person import PersonResponse
from campus_seating.schemas.route import (
    AttendanceCreate,
    AttendanceEntry,
    AttendanceRecordResponse,
    AttendanceResponse,
    OverviewResponse,
    RouteDetail,
    RouteDetailResponse,
    RouteListItem,
    RouteListResponse,
    SeatMapResponse,
)

router = APIRouter(prefix="/routes", tags=["Routes"])


def getDb():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def getRouteOr404(db: Session, number: int) -> Route:
    route = db.query(Route).filter(Route.number == number).first()
    if not route:
        raise RouteNotFoundError()
    return route


def toAttendanceEntries(records):
    return [AttendanceEntry(date=r.date, count=r.count) for r in records]


@router.get("", response_model=RouteListResponse)
def listRoutes(db: Session = Depends(getDb)):
    routes = db.query(Route).order_by(Route.number).all()
    return RouteListResponse(routes=[
        RouteListItem(
            number=r.number,
            busNumber=r.bus_number,
            driver=r.driver,
            capacity=r.capacity
        )
        for r in routes
    ])


@router.get("/admin/overview", response_model=OverviewResponse)
def getOverview(db: Session = Depends(getDb)):
    """
    Per-route occupancy for the admin table, sorted by route number.
    Recomputed from the rosters on every call.
    """
    routes = db.query(Route).all()
    return OverviewResponse(overview=buildOverview(routes))


@router.get("/{number}", response_model=RouteDetailResponse)
def getRouteDetail(number: int, db: Session = Depends(getDb)):
    """Route metadata, riders split by role, and the full attendance log"""
    route = getRouteOr404(db, number)
    roster = list(route.roster)

    return RouteDetailResponse(route=RouteDetail(
        number=route.number,
        busNumber=route.bus_number,
        driver=route.driver,
        capacity=route.capacity,
        staff=[PersonResponse.fromModel(p) for p in roster if p.role == ROLE_STAFF],
        students=[PersonResponse.fromModel(p) for p in roster if p.role == ROLE_STUDENT],
        attendance=toAttendanceEntries(attendanceHistory(db, number)),
    ))


@router.get("/{number}/seats", response_model=SeatMapResponse)
def getSeatMap(
    number: int,
    viewerId: Optional[str] = Query(None, description="Person id whose seat is highlighted"),
    db: Session = Depends(getDb)
):
    route = getRouteOr404(db, number)
    seats = classifySeats(route, viewerId)
    return SeatMapResponse(
        routeNumber=route.number,
        capacity=route.capacity,
        availableSeats=availableSeats(route),
        viewerSeat=findViewerSeat(seats),
        seats=seats,
    )


@router.get("/{number}/attendance", response_model=AttendanceResponse)
def getAttendance(number: int, db: Session = Depends(getDb)):
    getRouteOr404(db, number)
    return AttendanceResponse(attendance=toAttendanceEntries(attendanceHistory(db, number)))


@router.post("/{number}/attendance", response_model=AttendanceRecordResponse, status_code=201)
def submitAttendance(number: int, request: AttendanceCreate, db: Session = Depends(getDb)):
    """Coordinator headcount submission. Appended, never replaces earlier entries."""
    getRouteOr404(db, number)
    record = appendAttendance(db, number, request.date, request.count)
    return AttendanceRecordResponse(record=AttendanceEntry(date=record.date, count=record.count))
