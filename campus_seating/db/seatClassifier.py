"""
Seat Classification

Turns a route's roster into the ordered seat map shown to a rider.
Seat N is held by roster position N; seats past the end of the roster
are free.

Category precedence is a ranked rule table, evaluated top to bottom once
per seat; the first rule that matches decides the category:

    viewer    -> the authenticated person's own seat
    faculty   -> staff occupant
    girl      -> female student
    boy       -> male student
    occupied  -> any other occupant
    available -> no occupant
"""
from typing import Callable, List, Optional, Tuple

from campus_seating.constants import ROLE_STAFF, ROLE_STUDENT, GENDER_MALE, GENDER_FEMALE
from campus_seating.errors import RouteCapacityError
from campus_seating.schemas.route import Seat, SeatCategory


SeatRule = Tuple[SeatCategory, Callable[[object, Optional[str]], bool]]


def _isViewer(occupant, viewerId):
    return occupant is not None and viewerId is not None and str(occupant.id) == str(viewerId)


def _isStudentWithGender(gender):
    def check(occupant, viewerId):
        return occupant is not None and occupant.role == ROLE_STUDENT and occupant.gender == gender
    return check


SEAT_RULES: List[SeatRule] = [
    (SeatCategory.VIEWER, _isViewer),
    (SeatCategory.FACULTY, lambda occupant, viewerId: occupant is not None and occupant.role == ROLE_STAFF),
    (SeatCategory.GIRL, _isStudentWithGender(GENDER_FEMALE)),
    (SeatCategory.BOY, _isStudentWithGender(GENDER_MALE)),
    (SeatCategory.OCCUPIED, lambda occupant, viewerId: occupant is not None),
    (SeatCategory.AVAILABLE, lambda occupant, viewerId: occupant is None),
]


def categorize(occupant, viewerId: Optional[str] = None) -> SeatCategory:
    for category, matches in SEAT_RULES:
        if matches(occupant, viewerId):
            return category
    # Unreachable: the last two rules cover every occupant value
    raise AssertionError("seat rule table is not exhaustive")


def classifySeats(route, viewerId: Optional[str] = None) -> List[Seat]:
    """Build seats 1..capacity for a route, marking the viewer's seat."""
    roster = list(route.roster)
    if len(roster) > route.capacity:
        raise RouteCapacityError(
            f"Route {route.number} has {len(roster)} riders for {route.capacity} seats"
        )

    seats = []
    for number in range(1, route.capacity + 1):
        occupant = roster[number - 1] if number <= len(roster) else None
        seats.append(Seat(
            number=number,
            category=categorize(occupant, viewerId),
            occupantName=occupant.name if occupant is not None else None,
        ))
    return seats


def findViewerSeat(seats: List[Seat]) -> Optional[int]:
    for seat in seats:
        if seat.category == SeatCategory.VIEWER:
            return seat.number
    return None
