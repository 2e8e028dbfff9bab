"""
Promotion creation: code formats, uniqueness and the bounded retry
"""
import re
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, strategies as st
from sqlalchemy import func, select

import services.promotions as promotions_module
from core.config import settings
from core.exceptions import CodeGenerationExhaustedException, DatabaseException
from core.utils.retry import generate_unique
from models.promotion import Promotion
from schemas.promotion import PromotionCreate
from services.promotions import PromotionService, generate_short_code, generate_unique_code

UNIQUE_CODE_RE = re.compile(r"^PROMO-\d{4}-[0-9A-Z]{6}$")
SHORT_CODE_RE = re.compile(r"^[0-9a-z]{6}$")


def future(days: int = 7) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


def promotion_payload(**overrides) -> dict:
    payload = {
        "title": "Black Friday",
        "description": "Metade do preço na matrícula",
        "validUntil": future().isoformat(),
    }
    payload.update(overrides)
    return payload


async def count_promotions(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Promotion))
    return result.scalar_one()


class TestCodeFormats:

    @given(year=st.integers(min_value=2000, max_value=2999))
    def test_unique_code_format(self, year):
        code = generate_unique_code(year)
        assert UNIQUE_CODE_RE.match(code)
        assert code.startswith(f"PROMO-{year}-")

    def test_unique_code_defaults_to_current_year(self):
        assert generate_unique_code().startswith(f"PROMO-{datetime.now(timezone.utc).year}-")

    def test_short_code_format(self):
        for _ in range(200):
            assert SHORT_CODE_RE.match(generate_short_code())


class TestBoundedGeneration:

    async def test_returns_first_free_value(self):
        taken = {"a", "b"}
        candidates = iter(["a", "b", "c"])

        async def exists(value):
            return value in taken

        assert await generate_unique(lambda: next(candidates), exists, max_attempts=10) == "c"

    async def test_stops_after_max_attempts(self):
        calls = []

        def generate():
            calls.append(1)
            return "same"

        async def exists(value):
            return True

        with pytest.raises(CodeGenerationExhaustedException) as exc:
            await generate_unique(generate, exists, max_attempts=10)

        assert len(calls) == 10
        assert exc.value.status_code == 500
        assert exc.value.error_code == "CODE_GENERATION_EXHAUSTED"


class TestPromotionService:

    async def test_created_promotion_has_both_codes(self, db_session):
        promotion = await PromotionService(db_session).create_promotion(
            PromotionCreate(title="  Verão  ", description="Desconto", valid_until=future(), image="  ")
        )

        assert UNIQUE_CODE_RE.match(promotion.unique_code)
        assert SHORT_CODE_RE.match(promotion.short_code)
        assert promotion.access_count == 0
        assert promotion.is_active is True
        assert promotion.title == "Verão"
        assert promotion.image is None

    async def test_codes_are_unique_across_promotions(self, db_session):
        service = PromotionService(db_session)
        created = [
            await service.create_promotion(
                PromotionCreate(title=f"Promo {i}", description="d", valid_until=future())
            )
            for i in range(20)
        ]
        assert len({p.unique_code for p in created}) == 20
        assert len({p.short_code for p in created}) == 20

    async def test_ten_collisions_persist_nothing(self, db_session, monkeypatch):
        service = PromotionService(db_session)
        existing = await service.create_promotion(
            PromotionCreate(title="Existing", description="d", valid_until=future())
        )
        monkeypatch.setattr(promotions_module, "generate_unique_code", lambda: existing.unique_code)

        with pytest.raises(CodeGenerationExhaustedException):
            await service.create_promotion(PromotionCreate(title="New", description="d", valid_until=future()))

        assert await count_promotions(db_session) == 1

    async def test_short_code_collisions_persist_nothing(self, db_session, monkeypatch):
        service = PromotionService(db_session)
        existing = await service.create_promotion(
            PromotionCreate(title="Existing", description="d", valid_until=future())
        )
        taken = existing.short_code
        attempts = []

        def always_taken():
            attempts.append(taken)
            return taken

        monkeypatch.setattr(promotions_module, "generate_short_code", always_taken)

        with pytest.raises(CodeGenerationExhaustedException):
            await service.create_promotion(PromotionCreate(title="New", description="d", valid_until=future()))

        assert len(attempts) == settings.PROMO_CODE_MAX_ATTEMPTS
        assert await count_promotions(db_session) == 1

    async def test_insert_race_surfaces_as_persistence_error(self, db_session, monkeypatch):
        service = PromotionService(db_session)
        existing = await service.create_promotion(
            PromotionCreate(title="Existing", description="d", valid_until=future())
        )

        async def never_exists(code):
            return False

        # Pre-check misses a code another writer already stored
        monkeypatch.setattr(service, "short_code_exists", never_exists)
        monkeypatch.setattr(promotions_module, "generate_short_code", lambda: existing.short_code)

        with pytest.raises(DatabaseException):
            await service.create_promotion(PromotionCreate(title="Racer", description="d", valid_until=future()))

        assert await count_promotions(db_session) == 1


class TestPromotionEndpoints:

    async def test_admin_creates_promotion(self, admin_client):
        response = await admin_client.post("/promotions", json=promotion_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert UNIQUE_CODE_RE.match(data["uniqueCode"])
        assert SHORT_CODE_RE.match(data["shortCode"])
        assert data["accessCount"] == 0
        assert data["isActive"] is True

    async def test_past_valid_until_is_rejected(self, admin_client, db_session):
        past = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()
        response = await admin_client.post("/promotions", json=promotion_payload(validUntil=past))

        assert response.status_code == 400
        assert await count_promotions(db_session) == 0

    @pytest.mark.parametrize("missing", ["title", "description", "validUntil"])
    async def test_missing_fields_are_rejected(self, admin_client, missing):
        payload = promotion_payload()
        payload.pop(missing)
        response = await admin_client.post("/promotions", json=payload)
        assert response.status_code == 400

    async def test_blank_title_is_rejected(self, admin_client):
        response = await admin_client.post("/promotions", json=promotion_payload(title="   "))
        assert response.status_code == 400

    async def test_exhausted_generation_is_server_error(self, admin_client, db_session, monkeypatch):
        service = PromotionService(db_session)
        existing = await service.create_promotion(
            PromotionCreate(title="Existing", description="d", valid_until=future())
        )
        monkeypatch.setattr(promotions_module, "generate_unique_code", lambda: existing.unique_code)

        response = await admin_client.post("/promotions", json=promotion_payload())

        assert response.status_code == 500
        assert response.json()["error_code"] == "CODE_GENERATION_EXHAUSTED"
        assert await count_promotions(db_session) == 1

    async def test_exhausted_short_code_is_server_error(self, admin_client, db_session, monkeypatch):
        service = PromotionService(db_session)
        existing = await service.create_promotion(
            PromotionCreate(title="Existing", description="d", valid_until=future())
        )
        taken = existing.short_code
        monkeypatch.setattr(promotions_module, "generate_short_code", lambda: taken)

        response = await admin_client.post("/promotions", json=promotion_payload())

        assert response.status_code == 500
        assert response.json()["error_code"] == "CODE_GENERATION_EXHAUSTED"
        assert await count_promotions(db_session) == 1

    async def test_anonymous_cannot_create(self, client):
        response = await client.post("/promotions", json=promotion_payload())
        assert response.status_code == 401

    async def test_member_cannot_create(self, member_client):
        response = await member_client.post("/promotions", json=promotion_payload())
        assert response.status_code == 403

    async def test_public_listing_hides_inactive_and_expired(self, client, admin_client, db_session):
        live = (await admin_client.post("/promotions", json=promotion_payload(title="Live"))).json()["data"]
        hidden = (await admin_client.post("/promotions", json=promotion_payload(title="Hidden"))).json()["data"]
        await admin_client.patch(f"/promotions/{hidden['id']}", json={"isActive": False})
        db_session.add(Promotion(
            title="Old",
            description="d",
            valid_until=datetime.now(timezone.utc) - timedelta(days=1),
            unique_code="PROMO-2020-OLD000",
            short_code="old000",
        ))
        await db_session.commit()

        public = (await client.get("/promotions")).json()["data"]
        assert [p["title"] for p in public["promotions"]] == ["Live"]

        everything = (await admin_client.get("/promotions", params={"status": "all"})).json()["data"]
        assert everything["total"] == 3
        assert live["id"] in {p["id"] for p in everything["promotions"]}

    async def test_status_all_requires_admin(self, client, member_client):
        assert (await client.get("/promotions", params={"status": "all"})).status_code == 401
        assert (await member_client.get("/promotions", params={"status": "all"})).status_code == 403

    async def test_get_by_id_or_unique_code(self, client, admin_client):
        created = (await admin_client.post("/promotions", json=promotion_payload())).json()["data"]

        by_id = await client.get(f"/promotions/{created['id']}")
        by_code = await client.get(f"/promotions/{created['uniqueCode']}")

        assert by_id.status_code == 200
        assert by_code.json()["data"]["id"] == created["id"]
        assert (await client.get("/promotions/PROMO-1999-NOPE00")).status_code == 404

    async def test_update_requires_future_date(self, admin_client):
        created = (await admin_client.post("/promotions", json=promotion_payload())).json()["data"]
        past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()

        response = await admin_client.patch(f"/promotions/{created['id']}", json={"validUntil": past})
        assert response.status_code == 400

        response = await admin_client.patch(f"/promotions/{created['id']}", json={"title": "Renamed"})
        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Renamed"
        assert response.json()["data"]["uniqueCode"] == created["uniqueCode"]

    async def test_delete(self, admin_client):
        created = (await admin_client.post("/promotions", json=promotion_payload())).json()["data"]

        assert (await admin_client.delete(f"/promotions/{created['id']}")).status_code == 200
        assert (await admin_client.delete(f"/promotions/{created['id']}")).status_code == 404
