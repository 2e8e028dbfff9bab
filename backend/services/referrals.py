from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthenticatedPrincipal
from core.exceptions import ValidationException
from core.utils.logging import structured_logger
from core.utils.phone import digits_only, is_valid_br_phone
from models.referral import Referral
from schemas.referral import ReferralCreate

ANONYMOUS_REFERRER = "Visitante"


class ReferralService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_referral(
        self,
        data: ReferralCreate,
        principal: Optional[AuthenticatedPrincipal] = None,
    ) -> Referral:
        if not is_valid_br_phone(data.referred_phone):
            raise ValidationException(
                message="Invalid phone format", errors={"referredPhone": "invalid format"}
            )

        referral = Referral(
            referrer_id=principal.user_id if principal else None,
            referrer_name=principal.name if principal else ANONYMOUS_REFERRER,
            referrer_email=principal.email if principal else None,
            referred_name=data.referred_name,
            referred_phone=digits_only(data.referred_phone),
            referred_email=data.referred_email.lower() if data.referred_email else None,
            status="PENDING",
        )
        self.db.add(referral)
        await self.db.commit()
        await self.db.refresh(referral)

        structured_logger.info(
            message="Referral registered",
            user_id=str(principal.user_id) if principal else None,
            metadata={"referral_id": str(referral.id)},
        )
        return referral

    async def list_referrals(self, limit: int = 100) -> List[Referral]:
        result = await self.db.execute(
            select(Referral).order_by(Referral.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())
