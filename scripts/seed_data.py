"""
Seed script to populate database with demo routes and riders.
Run with: python scripts/seed_data.py
"""
import sys
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from campus_seating.db.database import Base, SessionLocal, engine
from campus_seating.db.attendanceLedger import appendAttendance
from campus_seating.models.attendanceRecord import AttendanceRecord
from campus_seating.models.person import Person
from campus_seating.models.route import Route


ROUTES = [
    {"number": 3, "bus_number": "TN-33-AB-1203", "driver": "Ravi Kumar", "capacity": 40},
    {"number": 7, "bus_number": "TN-33-AB-1707", "driver": "Murugan S", "capacity": 50},
    {"number": 12, "bus_number": "TN-33-AB-2112", "driver": "Selvam P", "capacity": 35},
]

FIRST_NAMES = {
    "female": ["Asha", "Divya", "Meera", "Priya", "Kavya", "Nila"],
    "male": ["Kiran", "Arjun", "Vikram", "Rahul", "Surya", "Hari"],
}


def clear_existing_data(db):
    """Clear existing attendance, riders and routes"""
    print("Clearing existing data...")
    db.query(AttendanceRecord).delete()
    db.query(Person).delete()
    db.query(Route).delete()
    db.commit()
    print("✓ Existing data cleared")


def create_routes(db):
    route_objects = []
    for route_data in ROUTES:
        route = Route(**route_data)
        db.add(route)
        route_objects.append(route)

    db.commit()
    print(f"✓ Created {len(route_objects)} routes")
    return route_objects


def create_riders(db, routes):
    """Two staff up front, then students alternating girls and boys"""
    total = 0
    for route in routes:
        seat = 1
        for i in range(1, 3):
            db.add(Person(
                id=f"R{route.number}-F{i}",
                name=f"Prof. Staff {route.number}.{i}",
                email=f"staff{route.number}.{i}@campus.edu",
                date_of_birth=f"197{i}-06-1{i}",
                role="staff",
                route_number=route.number,
                seat_number=seat,
            ))
            seat += 1

        # Leave a few seats free on every bus
        riders = route.capacity - 2 - 5
        for i in range(riders):
            gender = "female" if i % 2 == 0 else "male"
            names = FIRST_NAMES[gender]
            db.add(Person(
                id=f"R{route.number}-S{i + 1:02d}",
                name=f"{names[i % len(names)]} {route.number}{i + 1:02d}",
                email=f"student{route.number}.{i + 1}@campus.edu",
                date_of_birth=f"2004-{(i % 12) + 1:02d}-{(i % 27) + 1:02d}",
                role="student",
                gender=gender,
                # every ninth student has not paid yet
                paid=(i % 9 != 8),
                route_number=route.number,
                seat_number=seat,
            ))
            seat += 1
        total += 2 + riders
        print(f"✓ Route {route.number}: {2 + riders} riders for {route.capacity} seats")

    db.commit()
    return total


def create_attendance(db, routes):
    today = date.today()
    for route in routes:
        for days_ago in range(5, 0, -1):
            appendAttendance(db, route.number, today - timedelta(days=days_ago), route.capacity - 5 - days_ago)
    print(f"✓ Created attendance history for {len(routes)} routes")


def main():
    print("=" * 60)
    print("SEEDING DATABASE WITH DEMO DATA")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        clear_existing_data(db)
        routes = create_routes(db)
        riders = create_riders(db, routes)
        create_attendance(db, routes)

        print("\n" + "=" * 60)
        print("✓ SEEDING COMPLETE")
        print("=" * 60)
        print(f"Created: {len(routes)} routes, {riders} riders")

        print("\nSample logins:")
        for route in routes:
            student = db.query(Person).filter(
                Person.route_number == route.number, Person.role == "student"
            ).order_by(Person.seat_number).first()
            print(f"  Route {route.number}: {student.email} / {student.date_of_birth}")

    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
