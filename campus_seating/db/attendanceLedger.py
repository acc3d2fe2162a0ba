"""
Attendance Ledger

Append-only headcount history per route. This module is the only writer
to attendance_records and exposes no update or delete path.

"Recent" means most recently *appended*, not latest calendar date: a
backfilled record for last week still shows up first if it was the last
one submitted.
"""
import logging
from datetime import date as date_type
from typing import List

from sqlalchemy.orm import Session

from campus_seating.errors import InvalidAttendanceError
from campus_seating.models.attendanceRecord import AttendanceRecord

logger = logging.getLogger(__name__)


def validateCount(count) -> int:
    # bool is an int subclass; True must not count as one rider
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidAttendanceError("Attendance count must be a whole number")
    if count < 0:
        raise InvalidAttendanceError("Attendance count cannot be negative")
    return count


def appendAttendance(db: Session, routeNumber: int, date: date_type, count) -> AttendanceRecord:
    validateCount(count)
    if not isinstance(date, date_type):
        raise InvalidAttendanceError("Attendance date must be a calendar date")

    try:
        record = AttendanceRecord(route_number=routeNumber, date=date, count=count)
        db.add(record)
        db.commit()
        db.refresh(record)
    except Exception as e:
        db.rollback()
        raise e

    logger.info("Recorded attendance for route %s: %s on %s", routeNumber, count, date)
    return record


def recentAttendance(db: Session, routeNumber: int, k: int) -> List[AttendanceRecord]:
    """Last `k` appended records for a route, most recent first."""
    if k < 0:
        raise ValueError("k must be >= 0")
    if k == 0:
        return []

    return (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.route_number == routeNumber)
        .order_by(AttendanceRecord.id.desc())
        .limit(k)
        .all()
    )


def attendanceHistory(db: Session, routeNumber: int) -> List[AttendanceRecord]:
    """Every record for a route in append order"""
    return (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.route_number == routeNumber)
        .order_by(AttendanceRecord.id.asc())
        .all()
    )
