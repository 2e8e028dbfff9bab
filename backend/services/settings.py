from copy import deepcopy

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.utils.logging import structured_logger
from models.settings import AcademySettings
from schemas.settings import AcademySettingsUpdate

DEFAULT_LOGO = "/placeholder-logo.png"

DEFAULT_ACADEMY_SETTINGS = {
    "name": "Black Red Academia",
    "description": "Academia moderna com equipamentos de última geração, personal trainers qualificados e ambiente motivador.",
    "phone": "(11) 99999-9999",
    "email": "contato@gymstarter.com.br",
    "address": "Rua das Academias, 123 - Centro",
    "whatsapp": "5511999999999",
    "hours": {
        "weekdays": {"open": "05:00", "close": "23:00"},
        "saturday": {"open": "07:00", "close": "20:00"},
        "sunday": {"open": "08:00", "close": "18:00"},
    },
    "colors": {"primary": "#DC2626", "secondary": "#000000"},
    "notifications": {
        "newMessages": True,
        "newMembers": True,
        "payments": True,
        "weeklyReports": False,
    },
    "logo": DEFAULT_LOGO,
    "about": "Fundada em 2024, a Black Red nasceu com o propósito de revolucionar o conceito de academia.",
    "hero_title": "TRANSFORME SEU CORPO",
    "hero_subtitle": "Nova Academia",
    "hero_image": "/modern-gym-interior-with-red-and-black-equipment.jpg",
    "features": {
        "title": "Por que escolher a Black Red?",
        "description": "Oferecemos tudo que você precisa para alcançar seus objetivos fitness",
        "items": [
            {"icon": "Dumbbell", "title": "Equipamentos Modernos",
             "description": "Equipamentos de última geração para todos os tipos de treino"},
            {"icon": "Users", "title": "Personal Trainers",
             "description": "Profissionais qualificados para te orientar em cada exercício"},
            {"icon": "Clock", "title": "Horário Flexível",
             "description": "Aberto das 05:00 às 23:00 para se adequar à sua rotina"},
            {"icon": "Trophy", "title": "Resultados Garantidos",
             "description": "Metodologia comprovada para alcançar seus objetivos"},
        ],
    },
    "metrics": {
        "activeMembers": 500,
        "personalTrainers": 15,
        "operatingHours": "05:00-23:00",
        "foundedYear": 2024,
    },
}


class SettingsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_settings(self) -> AcademySettings:
        """Latest settings row, created from the defaults on first read"""
        result = await self.db.execute(
            select(AcademySettings).order_by(AcademySettings.created_at.desc()).limit(1)
        )
        academy = result.scalars().first()
        if academy is None:
            academy = AcademySettings(**deepcopy(DEFAULT_ACADEMY_SETTINGS))
            self.db.add(academy)
            await self.db.commit()
            await self.db.refresh(academy)
            structured_logger.info(message="Default academy settings created")
        return academy

    async def update_settings(self, data: AcademySettingsUpdate) -> AcademySettings:
        academy = await self.get_settings()
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key not in ("logo", "about", "hero_title", "hero_subtitle", "hero_image"):
                continue
            setattr(academy, key, value)
        await self.db.commit()
        await self.db.refresh(academy)
        return academy
