from datetime import date

import pytest

from campus_seating.db.attendanceLedger import (
    appendAttendance,
    attendanceHistory,
    recentAttendance,
)
from campus_seating.errors import InvalidAttendanceError

from conftest import make_route


@pytest.fixture
def ledger_db(db):
    db.add_all([make_route(7, 40), make_route(8, 40)])
    db.commit()
    return db


def test_recent_returns_last_appended_in_reverse_call_order(ledger_db):
    # Dates deliberately out of calendar order: call order must win
    appendAttendance(ledger_db, 7, date(2026, 1, 12), 30)
    appendAttendance(ledger_db, 7, date(2026, 1, 14), 31)
    appendAttendance(ledger_db, 7, date(2026, 1, 10), 29)

    recent = recentAttendance(ledger_db, 7, 2)

    assert [(r.date, r.count) for r in recent] == [
        (date(2026, 1, 10), 29),
        (date(2026, 1, 14), 31),
    ]


def test_history_keeps_append_order_per_route(ledger_db):
    appendAttendance(ledger_db, 7, date(2026, 1, 12), 30)
    appendAttendance(ledger_db, 8, date(2026, 1, 12), 12)
    appendAttendance(ledger_db, 7, date(2026, 1, 11), 28)

    assert [r.count for r in attendanceHistory(ledger_db, 7)] == [30, 28]
    assert [r.count for r in attendanceHistory(ledger_db, 8)] == [12]


def test_recent_is_empty_for_no_records_or_zero(ledger_db):
    assert recentAttendance(ledger_db, 8, 5) == []
    appendAttendance(ledger_db, 7, date(2026, 1, 12), 30)
    assert recentAttendance(ledger_db, 7, 0) == []


def test_recent_rejects_negative_k(ledger_db):
    with pytest.raises(ValueError):
        recentAttendance(ledger_db, 7, -1)


def test_zero_count_is_allowed(ledger_db):
    record = appendAttendance(ledger_db, 7, date(2026, 1, 12), 0)
    assert record.count == 0


@pytest.mark.parametrize("count", [-1, 2.5, "12", True, None])
def test_invalid_counts_are_rejected(ledger_db, count):
    with pytest.raises(InvalidAttendanceError):
        appendAttendance(ledger_db, 7, date(2026, 1, 12), count)
    assert attendanceHistory(ledger_db, 7) == []
