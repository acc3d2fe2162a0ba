#!/usr/bin/env python3
"""Print the fleet overview and latest attendance straight from the database."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from campus_seating.constants import RECENT_ATTENDANCE_LIMIT
from campus_seating.db.attendanceLedger import recentAttendance
from campus_seating.db.database import SessionLocal
from campus_seating.db.routeAggregator import buildOverview, fleetTotals
from campus_seating.models.route import Route

db = SessionLocal()
try:
    overview = buildOverview(db.query(Route).all())
    totals = fleetTotals(overview)

    print("\n" + "=" * 80)
    print("FLEET OVERVIEW")
    print("=" * 80)
    print(f"Buses: {totals.buses}  Students: {totals.students}  "
          f"Boys/Girls: {totals.boys}/{totals.girls}  Staff: {totals.staff}")

    for row in overview:
        print(f"\nRoute {row.number}  ({row.busNumber}, driver {row.driver})")
        print(f"  Capacity: {row.capacity}")
        print(f"  Students: {row.studentsTotal} (boys {row.boys}, girls {row.girls})")
        print(f"  Staff: {row.staff}")
        recent = recentAttendance(db, row.number, RECENT_ATTENDANCE_LIMIT)
        if recent:
            print("  Recent attendance: " + ", ".join(f"{r.date}={r.count}" for r in recent))

    print("\n" + "=" * 80 + "\n")
finally:
    db.close()
