"""
Route and fleet occupancy statistics.

Everything here is a pure function of the roster snapshot it is given.
Nothing is cached: totals are recomputed on every request so they can
never drift from the roster.
"""
from functools import reduce
from typing import Iterable, List

from campus_seating.constants import ROLE_STAFF, ROLE_STUDENT, GENDER_MALE, GENDER_FEMALE
from campus_seating.schemas.route import RouteSummary, FleetSummary


def summarizeRoute(route) -> RouteSummary:
    roster = list(route.roster)
    boys = sum(1 for p in roster if p.role == ROLE_STUDENT and p.gender == GENDER_MALE)
    girls = sum(1 for p in roster if p.role == ROLE_STUDENT and p.gender == GENDER_FEMALE)
    staff = sum(1 for p in roster if p.role == ROLE_STAFF)

    return RouteSummary(
        number=route.number,
        busNumber=route.bus_number,
        driver=route.driver,
        capacity=route.capacity,
        studentsTotal=boys + girls,
        boys=boys,
        girls=girls,
        staff=staff,
    )


def availableSeats(route) -> int:
    return max(route.capacity - len(route.roster), 0)


def sortSummaries(summaries: Iterable[RouteSummary]) -> List[RouteSummary]:
    """Ascending by route number; numbers are unique so this is a total order."""
    return sorted(summaries, key=lambda s: s.number)


def buildOverview(routes: Iterable) -> List[RouteSummary]:
    return sortSummaries(summarizeRoute(route) for route in routes)


def _addSummary(totals: FleetSummary, summary: RouteSummary) -> FleetSummary:
    return FleetSummary(
        buses=totals.buses + 1,
        students=totals.students + summary.studentsTotal,
        boys=totals.boys + summary.boys,
        girls=totals.girls + summary.girls,
        staff=totals.staff + summary.staff,
    )


def fleetTotals(summaries: Iterable[RouteSummary]) -> FleetSummary:
    """Plain sums over all routes, independent of input order."""
    return reduce(_addSummary, summaries, FleetSummary())
