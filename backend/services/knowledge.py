from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundException, ValidationException
from models.knowledge import KnowledgeEntry
from schemas.knowledge import KnowledgeCreate, KnowledgeUpdate


class KnowledgeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_entries(self) -> List[KnowledgeEntry]:
        result = await self.db.execute(
            select(KnowledgeEntry).order_by(KnowledgeEntry.category.asc(), KnowledgeEntry.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_entry(self, entry_id: UUID) -> KnowledgeEntry:
        result = await self.db.execute(select(KnowledgeEntry).where(KnowledgeEntry.id == entry_id))
        entry = result.scalars().first()
        if not entry:
            raise NotFoundException(message="Knowledge entry not found")
        return entry

    async def create_entry(self, data: KnowledgeCreate) -> KnowledgeEntry:
        entry = KnowledgeEntry(**data.model_dump())
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def update_entry(self, entry_id: UUID, data: KnowledgeUpdate) -> KnowledgeEntry:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationException(message="No fields to update")
        entry = await self.get_entry(entry_id)
        for key, value in changes.items():
            setattr(entry, key, value)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def delete_entry(self, entry_id: UUID) -> None:
        entry = await self.get_entry(entry_id)
        await self.db.delete(entry)
        await self.db.commit()
