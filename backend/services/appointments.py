from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConflictException, NotFoundException, ValidationException
from core.utils.logging import structured_logger
from core.utils.phone import digits_only, is_valid_br_phone
from core.utils.timeutils import gym_zone, utcnow
from models.appointment import Appointment, AppointmentStatus
from schemas.appointment import AppointmentCreate


class AppointmentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        if not is_valid_br_phone(data.phone):
            raise ValidationException(message="Invalid phone format", errors={"phone": "invalid format"})

        hour, minute = (int(part) for part in data.scheduled_time.split(":"))
        # The requested slot is gym-local wall-clock time
        scheduled_at = datetime(
            data.scheduled_date.year,
            data.scheduled_date.month,
            data.scheduled_date.day,
            hour,
            minute,
            tzinfo=gym_zone(),
        ).astimezone(timezone.utc)
        if scheduled_at <= utcnow():
            raise ValidationException(
                message="Appointment must be scheduled in the future",
                errors={"scheduledDate": "must be in the future"},
            )

        result = await self.db.execute(
            select(Appointment.id).where(
                Appointment.scheduled_date == scheduled_at,
                Appointment.scheduled_time == data.scheduled_time,
                Appointment.status.in_(AppointmentStatus.BLOCKING),
            )
        )
        if result.first() is not None:
            raise ConflictException(message="This time slot is already booked")

        appointment = Appointment(
            name=data.name,
            phone=digits_only(data.phone),
            email=data.email.lower(),
            class_type=data.class_type,
            scheduled_date=scheduled_at,
            scheduled_time=data.scheduled_time,
            notes=data.notes or None,
            status=AppointmentStatus.PENDING,
        )
        self.db.add(appointment)
        await self.db.commit()
        await self.db.refresh(appointment)

        structured_logger.info(
            message="Appointment booked",
            metadata={
                "appointment_id": str(appointment.id),
                "class_type": appointment.class_type,
                "scheduled_at": scheduled_at.isoformat(),
            },
        )
        return appointment

    async def list_appointments(self, status: Optional[str] = None, limit: int = 50) -> List[Appointment]:
        query = select(Appointment)
        if status:
            query = query.where(Appointment.status == status)
        query = query.order_by(Appointment.scheduled_date.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_appointment(self, appointment_id: UUID) -> Appointment:
        result = await self.db.execute(select(Appointment).where(Appointment.id == appointment_id))
        appointment = result.scalars().first()
        if not appointment:
            raise NotFoundException(message="Appointment not found")
        return appointment

    async def update_status(self, appointment_id: UUID, status: str) -> Appointment:
        appointment = await self.get_appointment(appointment_id)
        appointment.status = status
        await self.db.commit()
        await self.db.refresh(appointment)
        return appointment

    async def delete_appointment(self, appointment_id: UUID) -> None:
        appointment = await self.get_appointment(appointment_id)
        await self.db.delete(appointment)
        await self.db.commit()
