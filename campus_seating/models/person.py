import uuid
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from campus_seating.db.database import Base


class Person(Base):
    """
    A student or staff member riding a campus route.

    Identity fields never change after creation; only `paid` and
    `seat_number` are updated by administrative action.
    """
    __tablename__ = "persons"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    # Doubles as the login password; never serialised back to clients
    date_of_birth = Column(String, nullable=False)

    # "student" or "staff"
    role = Column(String, nullable=False)
    gender = Column(String, nullable=True)

    # Fee gate, students only
    paid = Column(Boolean, nullable=True)

    seat_number = Column(Integer, nullable=True)
    route_number = Column(Integer, ForeignKey("routes.number"), nullable=True)

    route = relationship("Route", back_populates="roster")
