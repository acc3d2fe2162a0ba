from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_seating.db.database import SessionLocal
from campus_seating.db.identityLookup import authenticate
from campus_seating.schemas.person import LoginRequest, LoginResponse, PersonResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


def getDb():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(getDb)):
    """
    Log in with email + date of birth as password.

    - 400 when a field is missing or the role is unknown
    - 401 on unknown email or wrong date of birth
    - 403 when a student has not paid the bus fee
    """
    person = authenticate(db, request.email, request.password, request.role)
    return LoginResponse(user=PersonResponse.fromModel(person))
