#!/usr/bin/env python3
"""
Database initialization + seeding script for the gym API.

- Creates tables (optionally dropping them first).
- Seeds the default administrator, membership plans and academy settings.
- Optionally seeds a few sample promotions and partners for local development.
"""

import asyncio
import argparse
from datetime import timedelta

from core.database import Base, db_manager, initialize_db
from core.config import settings
from core.logging_config import setup_logging
import models  # noqa: F401  registers every table on Base.metadata
from schemas.partner import PartnerCreate
from schemas.promotion import PromotionCreate
from services.auth import AuthService
from services.partners import PartnerService
from services.plans import PlanService
from services.promotions import PromotionService
from services.settings import SettingsService
from core.utils.timeutils import utcnow

SAMPLE_PROMOTIONS = [
    {
        "title": "Matrícula Zero",
        "description": "Sem taxa de matrícula para novos alunos neste mês.",
        "days": 30,
    },
    {
        "title": "Traga um Amigo",
        "description": "Treine com um amigo e ganhe 50% de desconto na primeira mensalidade dele.",
        "days": 15,
    },
]

SAMPLE_PARTNERS = [
    {
        "name": "NutriFit",
        "description": "Consultoria nutricional com 15% de desconto para alunos.",
        "category": "nutricao",
    },
    {
        "name": "FisioPlus",
        "description": "Clínica de fisioterapia parceira.",
        "category": "saude",
    },
]


async def create_tables(drop: bool = False):
    """Create all database tables, dropping them first when asked."""
    db_uri = settings.SQLALCHEMY_DATABASE_URI
    print(f"🔗 Connecting to database: {db_uri.split('@')[-1] if '@' in db_uri else db_uri}")
    async with db_manager.engine.begin() as conn:
        if drop:
            print("🗑️  Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)
        print("🏗️  Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
    print("✅ Database tables created successfully!")


async def seed_defaults():
    """Administrator, plans and academy settings"""
    async with db_manager.get_session_with_retry() as session:
        admin = await AuthService(session).ensure_default_admin()
        if admin:
            print(f"👤 Created admin {admin.email}")
        else:
            print("👤 Admin already present")

        plans = await PlanService(session).list_plans()
        print(f"💳 {len(plans)} plans available")

        academy = await SettingsService(session).get_settings()
        print(f"🏋️  Academy settings ready for '{academy.name}'")


async def seed_samples():
    async with db_manager.get_session_with_retry() as session:
        promotions = PromotionService(session)
        for sample in SAMPLE_PROMOTIONS:
            promotion = await promotions.create_promotion(
                PromotionCreate(
                    title=sample["title"],
                    description=sample["description"],
                    valid_until=utcnow() + timedelta(days=sample["days"]),
                )
            )
            print(f"🎟️  Promotion '{promotion.title}' -> /promo/{promotion.short_code}")

        partners = PartnerService(session)
        for sample in SAMPLE_PARTNERS:
            await partners.create_partner(PartnerCreate(**sample))
        print(f"🤝 Created {len(SAMPLE_PARTNERS)} partners")


async def main():
    parser = argparse.ArgumentParser(
        description="Initialize DB and seed the default admin, plans and settings.")
    parser.add_argument("--drop", action="store_true",
                        help="Drop existing tables before creating them")
    parser.add_argument("--samples", action="store_true",
                        help="Also seed sample promotions and partners")
    args = parser.parse_args()

    setup_logging(level=settings.LOG_LEVEL)
    print("🚀 Initializing gym database...")

    initialize_db(settings.SQLALCHEMY_DATABASE_URI, settings.ENVIRONMENT == "local")

    try:
        await create_tables(drop=args.drop)
        await seed_defaults()
        if args.samples:
            await seed_samples()
        print("✅ Database initialization complete!")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        raise
    finally:
        await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(main())
