from datetime import datetime
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, CheckConstraint
from campus_seating.db.database import Base


class AttendanceRecord(Base):
    """
    One headcount submission for a route.

    Records are append-only. `id` grows with every insert and is the
    ordering key for "recent" queries; `date` is stored as submitted and
    may be out of calendar order (backfills).
    """
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    route_number = Column(Integer, ForeignKey("routes.number"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    count = Column(Integer, nullable=False)
    submitted_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("count >= 0", name="attendance_count_non_negative"),
    )
