import secrets
import string
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import db_manager
from core.exceptions import DatabaseException, NotFoundException, ValidationException
from core.utils.logging import structured_logger
from core.utils.retry import generate_unique
from core.utils.timeutils import as_utc, ensure_aware, utcnow
from models.promotion import Promotion
from schemas.promotion import PromotionCreate, PromotionUpdate

BASE36_ALPHABET = string.digits + string.ascii_lowercase
CODE_LENGTH = 6
HOME_URL = "/"


def _random_base36(length: int = CODE_LENGTH) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def generate_unique_code(year: Optional[int] = None) -> str:
    """PROMO-<year>-<6 upper-case base36 chars>"""
    year = year or utcnow().year
    return f"PROMO-{year}-{_random_base36().upper()}"


def generate_short_code() -> str:
    """6 lower-case base36 chars"""
    return _random_base36()


def promotion_url(promotion: Promotion) -> str:
    return f"/promotion/{promotion.unique_code or promotion.id}"


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class PromotionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def unique_code_exists(self, code: str) -> bool:
        result = await self.db.execute(select(Promotion.id).where(Promotion.unique_code == code))
        return result.first() is not None

    async def short_code_exists(self, code: str) -> bool:
        result = await self.db.execute(select(Promotion.id).where(Promotion.short_code == code))
        return result.first() is not None

    async def create_promotion(self, promotion_data: PromotionCreate) -> Promotion:
        valid_until = as_utc(promotion_data.valid_until)
        if valid_until <= utcnow():
            raise ValidationException(
                message="validUntil must be in the future",
                errors={"validUntil": "must be in the future"},
            )

        max_attempts = settings.PROMO_CODE_MAX_ATTEMPTS
        unique_code = await generate_unique(
            generate_unique_code, self.unique_code_exists, max_attempts, label="unique code"
        )
        short_code = await generate_unique(
            generate_short_code, self.short_code_exists, max_attempts, label="short code"
        )

        promotion = Promotion(
            title=promotion_data.title,
            description=promotion_data.description,
            image=_clean_optional(promotion_data.image),
            valid_until=valid_until,
            is_active=True,
            unique_code=unique_code,
            short_code=short_code,
            access_count=0,
        )
        self.db.add(promotion)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Another writer took one of the codes between the check and the insert
            await self.db.rollback()
            structured_logger.error(
                message="Promotion insert violated a unique constraint",
                metadata={"unique_code": unique_code, "short_code": short_code},
                exception=e,
            )
            raise DatabaseException(message="Could not persist promotion")
        await self.db.refresh(promotion)

        structured_logger.info(
            message="Promotion created",
            metadata={
                "promotion_id": str(promotion.id),
                "unique_code": unique_code,
                "short_code": short_code,
            },
        )
        return promotion

    async def list_promotions(self, include_all: bool = False, limit: int = 50) -> List[Promotion]:
        query = select(Promotion)
        if not include_all:
            query = query.where(Promotion.is_active.is_(True), Promotion.valid_until > utcnow())
        query = query.order_by(Promotion.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_promotion_by_id(self, promotion_id: UUID) -> Optional[Promotion]:
        result = await self.db.execute(select(Promotion).where(Promotion.id == promotion_id))
        return result.scalars().first()

    async def get_promotion(self, id_or_code: str) -> Promotion:
        """Look a promotion up by id, falling back to its unique code"""
        promotion = None
        try:
            promotion = await self.get_promotion_by_id(UUID(id_or_code))
        except ValueError:
            pass
        if promotion is None:
            result = await self.db.execute(
                select(Promotion).where(Promotion.unique_code == id_or_code)
            )
            promotion = result.scalars().first()
        if promotion is None:
            raise NotFoundException(message="Promotion not found")
        return promotion

    async def update_promotion(self, promotion_id: UUID, promotion_data: PromotionUpdate) -> Promotion:
        promotion = await self.get_promotion_by_id(promotion_id)
        if not promotion:
            raise NotFoundException(message="Promotion not found")

        changes = promotion_data.model_dump(exclude_unset=True)
        if "valid_until" in changes:
            if changes["valid_until"] is None:
                raise ValidationException(message="validUntil cannot be empty")
            changes["valid_until"] = as_utc(changes["valid_until"])
            if changes["valid_until"] <= utcnow():
                raise ValidationException(
                    message="validUntil must be in the future",
                    errors={"validUntil": "must be in the future"},
                )
        if "image" in changes:
            changes["image"] = _clean_optional(changes["image"])
        for key in ("title", "description", "is_active"):
            if key in changes and changes[key] is None:
                raise ValidationException(message=f"{key} cannot be empty")

        for key, value in changes.items():
            setattr(promotion, key, value)

        await self.db.commit()
        await self.db.refresh(promotion)
        return promotion

    async def delete_promotion(self, promotion_id: UUID) -> None:
        promotion = await self.get_promotion_by_id(promotion_id)
        if not promotion:
            raise NotFoundException(message="Promotion not found")
        await self.db.delete(promotion)
        await self.db.commit()


class PromoRedirector:
    """Resolves a short or unique code to the promotion page, counting the visit."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_code(self, code: str) -> Optional[Promotion]:
        result = await self.db.execute(select(Promotion).where(Promotion.short_code == code))
        promotion = result.scalars().first()
        if promotion is None:
            result = await self.db.execute(select(Promotion).where(Promotion.unique_code == code))
            promotion = result.scalars().first()
        return promotion

    async def resolve(self, code: str) -> str:
        promotion = await self.find_by_code(code)
        if promotion is None or not promotion.is_active:
            structured_logger.info(
                message="Promo code not redeemable",
                metadata={"code": code, "found": promotion is not None},
            )
            return HOME_URL
        if ensure_aware(promotion.valid_until) < utcnow():
            structured_logger.info(
                message="Promo code expired",
                metadata={"code": code, "promotion_id": str(promotion.id)},
            )
            return HOME_URL

        # In-place increment so concurrent visits are all counted
        await self.db.execute(
            update(Promotion)
            .where(Promotion.id == promotion.id)
            .values(access_count=Promotion.access_count + 1)
        )
        await self.db.commit()

        target = promotion_url(promotion)
        structured_logger.info(
            message="Promo code redirected",
            metadata={"code": code, "promotion_id": str(promotion.id), "target": target},
        )
        return target


async def resolve_promo_redirect(code: str) -> str:
    """Redirect target for ``code``; any failure sends the visitor home."""
    try:
        async with db_manager.get_session_with_retry(max_retries=0) as session:
            return await PromoRedirector(session).resolve(code)
    except Exception as e:
        structured_logger.error(
            message="Promo redirect failed",
            endpoint="/promo/{code}",
            metadata={"code": code},
            exception=e,
        )
        return HOME_URL
