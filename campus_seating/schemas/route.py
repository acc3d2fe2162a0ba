from datetime import date as date_type
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, StrictInt

from campus_seating.schemas.person import PersonResponse


class SeatCategory(str, Enum):
    FACULTY = "faculty"
    GIRL = "girl"
    BOY = "boy"
    VIEWER = "viewer"
    OCCUPIED = "occupied"
    AVAILABLE = "available"


class Seat(BaseModel):
    number: int
    category: SeatCategory
    occupantName: Optional[str] = None


class SeatMapResponse(BaseModel):
    success: bool = True
    routeNumber: int
    capacity: int
    availableSeats: int
    viewerSeat: Optional[int] = None
    seats: List[Seat]


class RouteSummary(BaseModel):
    number: int
    busNumber: str
    driver: str
    capacity: int
    studentsTotal: int
    boys: int
    girls: int
    staff: int


class FleetSummary(BaseModel):
    buses: int = 0
    students: int = 0
    boys: int = 0
    girls: int = 0
    staff: int = 0


class RouteListItem(BaseModel):
    number: int
    busNumber: str
    driver: str
    capacity: int


class RouteListResponse(BaseModel):
    success: bool = True
    routes: List[RouteListItem]


class OverviewResponse(BaseModel):
    success: bool = True
    overview: List[RouteSummary]


class AttendanceEntry(BaseModel):
    date: date_type
    count: int


class AttendanceCreate(BaseModel):
    """Headcount submitted by a route coordinator"""
    date: date_type
    # Strict so "12" or 4.0 are rejected instead of coerced; the range is
    # checked by the ledger so negative values get its error message
    count: StrictInt

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2026-01-14",
                "count": 38
            }
        }


class AttendanceResponse(BaseModel):
    success: bool = True
    attendance: List[AttendanceEntry]


class AttendanceRecordResponse(BaseModel):
    success: bool = True
    record: AttendanceEntry


class RouteDetail(BaseModel):
    number: int
    busNumber: str
    driver: str
    capacity: int
    staff: List[PersonResponse] = Field(default_factory=list)
    students: List[PersonResponse] = Field(default_factory=list)
    attendance: List[AttendanceEntry] = Field(default_factory=list)


class RouteDetailResponse(BaseModel):
    success: bool = True
    route: RouteDetail
