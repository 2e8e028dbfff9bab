from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundException
from core.utils.logging import structured_logger
from models.plan import Plan, PlanStatus
from schemas.plan import PlanCreate, PlanUpdate

DEFAULT_PLANS = [
    {
        "name": "Básico",
        "price": 89,
        "description": "Ideal para iniciantes",
        "features": ["Acesso à musculação", "Avaliação física inicial", "Horário comercial"],
        "active_members": 156,
        "monthly_revenue": 13884,
        "status": PlanStatus.ACTIVE,
        "popular": False,
    },
    {
        "name": "Premium",
        "price": 149,
        "description": "Para quem quer mais resultados",
        "features": ["Tudo do plano Básico", "Aulas em grupo", "Acesso 24h", "2 sessões de personal"],
        "active_members": 243,
        "monthly_revenue": 36207,
        "status": PlanStatus.ACTIVE,
        "popular": True,
    },
    {
        "name": "VIP",
        "price": 249,
        "description": "Experiência completa",
        "features": ["Tudo do plano Premium", "Personal trainer dedicado", "Plano nutricional", "Área VIP exclusiva"],
        "active_members": 88,
        "monthly_revenue": 21912,
        "status": PlanStatus.ACTIVE,
        "popular": False,
    },
]


class PlanService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _all(self) -> List[Plan]:
        result = await self.db.execute(select(Plan).order_by(Plan.created_at.asc(), Plan.price.asc()))
        return list(result.scalars().all())

    async def seed_default_plans(self) -> List[Plan]:
        plans = [Plan(**data) for data in DEFAULT_PLANS]
        self.db.add_all(plans)
        await self.db.commit()
        structured_logger.info(message="Default plans created", metadata={"count": len(plans)})
        return await self._all()

    async def list_plans(self) -> List[Plan]:
        """All plans, seeding the defaults on an empty table"""
        plans = await self._all()
        if not plans:
            plans = await self.seed_default_plans()
        return plans

    async def get_plan(self, plan_id: UUID) -> Plan:
        result = await self.db.execute(select(Plan).where(Plan.id == plan_id))
        plan = result.scalars().first()
        if not plan:
            raise NotFoundException(message="Plan not found")
        return plan

    async def create_plan(self, data: PlanCreate) -> Plan:
        plan = Plan(**data.model_dump())
        self.db.add(plan)
        await self.db.commit()
        await self.db.refresh(plan)
        return plan

    async def update_plan(self, plan_id: UUID, data: PlanUpdate) -> Plan:
        plan = await self.get_plan(plan_id)
        for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(plan, key, value)
        await self.db.commit()
        await self.db.refresh(plan)
        return plan

    async def delete_plan(self, plan_id: UUID) -> None:
        plan = await self.get_plan(plan_id)
        await self.db.delete(plan)
        await self.db.commit()
