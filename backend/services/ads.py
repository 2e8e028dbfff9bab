from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundException, ValidationException
from core.utils.timeutils import as_utc, utcnow
from models.ad import Ad
from schemas.ad import AdCreate, AdUpdate


def _future(valid_until):
    valid_until = as_utc(valid_until)
    if valid_until <= utcnow():
        raise ValidationException(
            message="validUntil must be in the future",
            errors={"validUntil": "must be in the future"},
        )
    return valid_until


class AdService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_ads(self, include_all: bool = False, limit: int = 10) -> List[Ad]:
        query = select(Ad)
        if not include_all:
            query = query.where(Ad.is_active.is_(True), Ad.valid_until > utcnow())
        query = query.order_by(Ad.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_ad(self, ad_id: UUID) -> Ad:
        result = await self.db.execute(select(Ad).where(Ad.id == ad_id))
        ad = result.scalars().first()
        if not ad:
            raise NotFoundException(message="Ad not found")
        return ad

    async def create_ad(self, data: AdCreate) -> Ad:
        values = data.model_dump()
        values["valid_until"] = _future(values["valid_until"])
        ad = Ad(**values)
        self.db.add(ad)
        await self.db.commit()
        await self.db.refresh(ad)
        return ad

    async def update_ad(self, ad_id: UUID, data: AdUpdate) -> Ad:
        ad = await self.get_ad(ad_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("valid_until") is not None:
            changes["valid_until"] = _future(changes["valid_until"])
        for key, value in changes.items():
            if value is None and key in ("title", "valid_until", "is_active"):
                continue
            setattr(ad, key, value)
        await self.db.commit()
        await self.db.refresh(ad)
        return ad

    async def delete_ad(self, ad_id: UUID) -> None:
        ad = await self.get_ad(ad_id)
        await self.db.delete(ad)
        await self.db.commit()
