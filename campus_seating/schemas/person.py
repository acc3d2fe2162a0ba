from pydantic import BaseModel
from typing import Optional


class PersonResponse(BaseModel):
    """Public view of a person; the date of birth is intentionally absent."""
    id: str
    name: str
    email: str
    role: str
    gender: Optional[str] = None
    paid: Optional[bool] = None
    seatNumber: Optional[int] = None
    routeNumber: Optional[int] = None

    @classmethod
    def fromModel(cls, person) -> "PersonResponse":
        return cls(
            id=str(person.id),
            name=person.name,
            email=person.email,
            role=person.role,
            gender=person.gender,
            paid=person.paid,
            seatNumber=person.seat_number,
            routeNumber=person.route_number,
        )


class LoginRequest(BaseModel):
    # All optional so missing fields surface as our own 400 message
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "email": "asha@campus.edu",
                "password": "2004-03-17",
                "role": "student"
            }
        }


class LoginResponse(BaseModel):
    success: bool = True
    user: PersonResponse
