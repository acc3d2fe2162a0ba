import logging

from sqlalchemy.orm import Session

from campus_seating.constants import (
    ROLES,
    ROLE_STUDENT,
    MISSING_LOGIN_FIELDS_MESSAGE,
    INVALID_ROLE_MESSAGE,
)
from campus_seating.errors import ValidationError, InvalidCredentials, UnpaidFeeError
from campus_seating.models.person import Person

logger = logging.getLogger(__name__)


def normalizeEmail(email) -> str:
    return str(email).casefold()


def findPersonByRole(db: Session, email: str, role: str):
    """
    Case-insensitive email lookup within one role's population.

    Both sides are folded in Python: SQL lower() only folds ASCII on
    SQLite and under the C collation, so non-ASCII addresses would miss.
    """
    wanted = normalizeEmail(email)
    people = db.query(Person).filter(Person.role == role).order_by(Person.id).all()
    for person in people:
        if normalizeEmail(person.email) == wanted:
            return person
    return None


def authenticate(db: Session, email, dateOfBirth, role) -> Person:
    """
    Resolve a login attempt to a Person.

    Order of checks:
    1. all three fields present, role is student or staff
    2. email matches (case-insensitive) and password equals the stored DOB
    3. students must have paid the bus fee

    A credential failure always wins over the fee gate, so an unpaid
    student with a wrong password sees "Invalid credentials".
    """
    if not email or not dateOfBirth or not role:
        raise ValidationError(MISSING_LOGIN_FIELDS_MESSAGE)

    if role not in ROLES:
        raise ValidationError(INVALID_ROLE_MESSAGE)

    person = findPersonByRole(db, email, role)
    if not person or person.date_of_birth != dateOfBirth:
        logger.info("Rejected %s login: invalid credentials", role)
        raise InvalidCredentials()

    if role == ROLE_STUDENT and person.paid is not True:
        logger.info("Rejected student login for %s: bus fee unpaid", person.id)
        raise UnpaidFeeError()

    return person
