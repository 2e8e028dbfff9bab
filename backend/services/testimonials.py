from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundException
from models.testimonial import Testimonial
from schemas.testimonial import TestimonialCreate, TestimonialUpdate


class TestimonialService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_testimonials(self, include_all: bool = False) -> List[Testimonial]:
        query = select(Testimonial)
        if not include_all:
            query = query.where(Testimonial.is_active.is_(True))
        result = await self.db.execute(query.order_by(Testimonial.created_at.desc()))
        return list(result.scalars().all())

    async def get_testimonial(self, testimonial_id: UUID) -> Testimonial:
        result = await self.db.execute(select(Testimonial).where(Testimonial.id == testimonial_id))
        testimonial = result.scalars().first()
        if not testimonial:
            raise NotFoundException(message="Testimonial not found")
        return testimonial

    async def create_testimonial(self, data: TestimonialCreate) -> Testimonial:
        testimonial = Testimonial(**data.model_dump())
        self.db.add(testimonial)
        await self.db.commit()
        await self.db.refresh(testimonial)
        return testimonial

    async def update_testimonial(self, testimonial_id: UUID, data: TestimonialUpdate) -> Testimonial:
        testimonial = await self.get_testimonial(testimonial_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key != "image":
                continue
            setattr(testimonial, key, value)
        await self.db.commit()
        await self.db.refresh(testimonial)
        return testimonial

    async def delete_testimonial(self, testimonial_id: UUID) -> None:
        testimonial = await self.get_testimonial(testimonial_id)
        await self.db.delete(testimonial)
        await self.db.commit()
