from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundException
from models.partner import Partner
from schemas.partner import PartnerCreate, PartnerUpdate


class PartnerService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_partners(
        self,
        category: Optional[str] = None,
        include_all: bool = False,
        limit: int = 50,
    ) -> List[Partner]:
        query = select(Partner)
        if not include_all:
            query = query.where(Partner.is_active.is_(True))
        if category:
            query = query.where(Partner.category == category)
        query = query.order_by(Partner.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_partner(self, partner_id: UUID) -> Partner:
        result = await self.db.execute(select(Partner).where(Partner.id == partner_id))
        partner = result.scalars().first()
        if not partner:
            raise NotFoundException(message="Partner not found")
        return partner

    async def create_partner(self, data: PartnerCreate) -> Partner:
        partner = Partner(**data.model_dump())
        self.db.add(partner)
        await self.db.commit()
        await self.db.refresh(partner)
        return partner

    async def update_partner(self, partner_id: UUID, data: PartnerUpdate) -> Partner:
        partner = await self.get_partner(partner_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key in ("name", "description", "category", "is_active"):
                continue
            setattr(partner, key, value)
        await self.db.commit()
        await self.db.refresh(partner)
        return partner

    async def delete_partner(self, partner_id: UUID) -> None:
        partner = await self.get_partner(partner_id)
        await self.db.delete(partner)
        await self.db.commit()
