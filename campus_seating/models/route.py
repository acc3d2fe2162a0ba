from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from campus_seating.db.database import Base
from campus_seating.models.person import Person


class Route(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, unique=True, nullable=False)
    bus_number = Column(String, nullable=False)
    driver = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)

    # Seat holders first in seat order, then everyone without a seat number
    roster = relationship(
        "Person",
        back_populates="route",
        order_by=lambda: (Person.seat_number.is_(None), Person.seat_number, Person.id),
    )
