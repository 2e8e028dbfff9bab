import secrets
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import ExpiredCheckinCodeException, NotFoundException, ValidationException
from core.utils.logging import structured_logger
from core.utils.phone import digits_only, is_valid_br_phone
from core.utils.timeutils import gym_today, gym_zone, utcnow
from models.checkin import CheckIn, CheckinCode
from schemas.checkin import CheckInCreate


def build_daily_code(day: date) -> str:
    """QR<YYYYMMDD><8 upper-case hex chars>"""
    return f"QR{day.strftime('%Y%m%d')}{secrets.token_hex(4).upper()}"


def checkin_url(code: str) -> str:
    return f"{settings.PUBLIC_APP_URL.rstrip('/')}/checkin/{code}"


def gym_day_bounds(day: date):
    """UTC [start, end) of a gym-local calendar day"""
    start = datetime.combine(day, time.min, tzinfo=gym_zone())
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


class CheckinService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_code_for_day(self, day: date) -> Optional[CheckinCode]:
        result = await self.db.execute(select(CheckinCode).where(CheckinCode.valid_date == day))
        return result.scalars().first()

    async def get_or_create_today_code(self) -> CheckinCode:
        today = gym_today()
        existing = await self.get_code_for_day(today)
        if existing:
            return existing

        checkin_code = CheckinCode(code=build_daily_code(today), valid_date=today)
        self.db.add(checkin_code)
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request created today's code first
            await self.db.rollback()
            existing = await self.get_code_for_day(today)
            if existing is None:
                raise
            return existing
        await self.db.refresh(checkin_code)

        structured_logger.info(
            message="Daily check-in code created",
            metadata={"code": checkin_code.code, "valid_date": today.isoformat()},
        )
        return checkin_code

    async def get_code(self, code: Optional[str]) -> CheckinCode:
        if not code:
            raise ValidationException(message="QR code is required", errors={"code": "required"})
        result = await self.db.execute(select(CheckinCode).where(CheckinCode.code == code))
        checkin_code = result.scalars().first()
        if not checkin_code:
            raise NotFoundException(message="QR code not found")
        return checkin_code

    async def get_valid_code(self, code: Optional[str]) -> CheckinCode:
        """Code valid for today; 400 missing/expired, 404 unknown"""
        checkin_code = await self.get_code(code)
        if checkin_code.valid_date != gym_today():
            raise ExpiredCheckinCodeException()
        return checkin_code

    async def register_checkin(self, data: CheckInCreate) -> CheckIn:
        if not is_valid_br_phone(data.phone):
            raise ValidationException(message="Invalid phone format", errors={"phone": "invalid format"})

        code_id = None
        if data.code:
            result = await self.db.execute(select(CheckinCode).where(CheckinCode.code == data.code))
            checkin_code = result.scalars().first()
            if not checkin_code:
                raise ValidationException(message="Invalid QR code", errors={"code": "unknown"})
            if checkin_code.valid_date != gym_today():
                raise ExpiredCheckinCodeException()
            code_id = checkin_code.id

        check_in = CheckIn(
            name=data.name,
            phone=digits_only(data.phone),
            check_in_time=utcnow(),
            status="ACTIVE",
            code_id=code_id,
        )
        self.db.add(check_in)
        await self.db.commit()
        await self.db.refresh(check_in)

        structured_logger.info(
            message="Check-in registered",
            metadata={"check_in_id": str(check_in.id), "with_code": code_id is not None},
        )
        return check_in

    async def list_today_checkins(self) -> List[CheckIn]:
        start, end = gym_day_bounds(gym_today())
        result = await self.db.execute(
            select(CheckIn)
            .where(
                CheckIn.check_in_time >= start,
                CheckIn.check_in_time < end,
                CheckIn.status == "ACTIVE",
            )
            .order_by(CheckIn.check_in_time.desc())
        )
        return list(result.scalars().all())
