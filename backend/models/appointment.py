from sqlalchemy import Column, String, DateTime, Text, Index
from core.database import BaseModel, CHAR_LENGTH


class AppointmentStatus:
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    ALL = (PENDING, CONFIRMED, COMPLETED, CANCELLED)
    # Statuses that hold a slot
    BLOCKING = (PENDING, CONFIRMED)


class Appointment(BaseModel):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_slot", "scheduled_date", "scheduled_time"),
    )

    name = Column(String(CHAR_LENGTH), nullable=False)
    phone = Column(String(20), nullable=False)  # digits only
    email = Column(String(CHAR_LENGTH), nullable=False)
    class_type = Column(String(100), nullable=False)
    scheduled_date = Column(DateTime(timezone=True), nullable=False)
    scheduled_time = Column(String(5), nullable=False)  # HH:MM
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING)
