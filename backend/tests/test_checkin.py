"""
Daily QR check-in: code generation, PNG rendering, validation and registration
"""
import re
from datetime import date, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

import services.checkin as checkin_module
from core.utils.timeutils import gym_today
from models.checkin import CheckIn, CheckinCode
from services.checkin import CheckinService, build_daily_code, checkin_url, gym_day_bounds

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
CODE_RE = re.compile(r"^QR\d{8}[0-9A-F]{8}$")


async def add_code(db_session, valid_date: date, code: str = None) -> CheckinCode:
    checkin_code = CheckinCode(code=code or build_daily_code(valid_date), valid_date=valid_date)
    db_session.add(checkin_code)
    await db_session.commit()
    await db_session.refresh(checkin_code)
    return checkin_code


class TestDailyCode:

    def test_code_format(self):
        code = build_daily_code(date(2024, 3, 9))
        assert CODE_RE.match(code)
        assert code.startswith("QR20240309")

    def test_checkin_url(self, monkeypatch):
        monkeypatch.setattr(checkin_module.settings, "PUBLIC_APP_URL", "https://gym.example/")
        assert checkin_url("QR2024") == "https://gym.example/checkin/QR2024"

    def test_day_bounds_cover_one_local_day(self):
        start, end = gym_day_bounds(date(2024, 3, 9))
        assert end - start == timedelta(days=1)
        assert start.utcoffset() == timedelta(0)

    async def test_generate_is_idempotent_per_day(self, admin_client):
        first = await admin_client.get("/qr/generate")
        second = await admin_client.get("/qr/generate")

        assert first.status_code == 200
        data = first.json()["data"]
        assert CODE_RE.match(data["code"])
        assert data["validDate"] == gym_today().isoformat()
        assert data["qrUrl"].endswith(f"/checkin/{data['code']}")
        assert second.json()["data"]["code"] == data["code"]

    async def test_new_day_new_code(self, admin_client, monkeypatch):
        today = gym_today()
        first = (await admin_client.get("/qr/generate")).json()["data"]["code"]

        monkeypatch.setattr(checkin_module, "gym_today", lambda: today + timedelta(days=1))
        second = (await admin_client.get("/qr/generate")).json()["data"]["code"]

        assert first != second
        assert second.startswith(f"QR{(today + timedelta(days=1)).strftime('%Y%m%d')}")

    async def test_generate_requires_admin(self, client, member_client):
        assert (await client.get("/qr/generate")).status_code == 401
        assert (await member_client.get("/qr/generate")).status_code == 403

    async def test_one_code_per_day(self, db_session):
        await add_code(db_session, gym_today())

        with pytest.raises(IntegrityError):
            await add_code(db_session, gym_today())
        await db_session.rollback()

        result = await db_session.execute(select(func.count()).select_from(CheckinCode))
        assert result.scalar_one() == 1

    async def test_generate_returns_stored_code(self, admin_client, db_session):
        stored = await add_code(db_session, gym_today())

        response = await admin_client.get("/qr/generate")

        assert response.json()["data"]["code"] == stored.code

    async def test_concurrent_creation_returns_winner(self, db_session, monkeypatch):
        winner = (await add_code(db_session, gym_today())).code
        service = CheckinService(db_session)
        lookups = []
        original_lookup = service.get_code_for_day

        async def first_lookup_misses(day):
            lookups.append(day)
            if len(lookups) == 1:
                return None
            return await original_lookup(day)

        monkeypatch.setattr(service, "get_code_for_day", first_lookup_misses)

        checkin_code = await service.get_or_create_today_code()

        assert checkin_code.code == winner
        assert len(lookups) == 2
        result = await db_session.execute(select(func.count()).select_from(CheckinCode))
        assert result.scalar_one() == 1


class TestQRImage:

    async def test_renders_png(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today())

        response = await client.get("/qr/image", params={"code": checkin_code.code})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert response.content.startswith(PNG_MAGIC)

    async def test_missing_code(self, client):
        assert (await client.get("/qr/image")).status_code == 400

    async def test_unknown_code(self, client):
        assert (await client.get("/qr/image", params={"code": "QR20000101DEADBEEF"})).status_code == 404

    async def test_expired_code(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today() - timedelta(days=1))
        response = await client.get("/qr/image", params={"code": checkin_code.code})
        assert response.status_code == 400


class TestValidate:

    async def test_valid_code(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today())

        response = await client.get("/checkin/validate", params={"code": checkin_code.code})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {"valid": True, "code": checkin_code.code, "validDate": gym_today().isoformat()}

    async def test_unknown_code(self, client):
        response = await client.get("/checkin/validate", params={"code": "QR20000101DEADBEEF"})

        assert response.status_code == 404
        assert response.json()["valid"] is False

    async def test_missing_code(self, client):
        response = await client.get("/checkin/validate")

        assert response.status_code == 400
        assert response.json()["valid"] is False

    async def test_yesterdays_code(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today() - timedelta(days=1))

        response = await client.get("/checkin/validate", params={"code": checkin_code.code})

        assert response.status_code == 400
        body = response.json()
        assert body["valid"] is False
        assert body["error_code"] == "CHECKIN_CODE_EXPIRED"


class TestRegisterCheckin:

    async def test_check_in_with_todays_code(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today())

        response = await client.post("/checkin", json={
            "name": "Carlos Pereira",
            "phone": "(11) 98765-4321",
            "code": checkin_code.code,
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["phone"] == "11987654321"
        assert data["codeId"] == str(checkin_code.id)
        assert data["status"] == "ACTIVE"

    async def test_check_in_without_code(self, client):
        response = await client.post("/checkin", json={"name": "Carlos", "phone": "1133334444"})
        assert response.status_code == 201
        assert response.json()["data"]["codeId"] is None

    @pytest.mark.parametrize("phone", ["123", "abc", "(11) 9876-54321-00"])
    async def test_bad_phone(self, client, db_session, phone):
        response = await client.post("/checkin", json={"name": "Carlos", "phone": phone})

        assert response.status_code == 400
        result = await db_session.execute(select(CheckIn))
        assert result.scalars().first() is None

    async def test_unknown_code(self, client):
        response = await client.post("/checkin", json={
            "name": "Carlos", "phone": "11987654321", "code": "QR20000101DEADBEEF",
        })
        assert response.status_code == 400

    async def test_expired_code(self, client, db_session):
        checkin_code = await add_code(db_session, gym_today() - timedelta(days=1))

        response = await client.post("/checkin", json={
            "name": "Carlos", "phone": "11987654321", "code": checkin_code.code,
        })

        assert response.status_code == 400
        assert response.json()["error_code"] == "CHECKIN_CODE_EXPIRED"

    async def test_todays_list(self, admin_client):
        for name in ("Ana", "Bruno"):
            await admin_client.post("/checkin", json={"name": name, "phone": "11987654321"})

        response = await admin_client.get("/checkin")

        data = response.json()["data"]
        assert data["total"] == 2
        assert {c["name"] for c in data["checkIns"]} == {"Ana", "Bruno"}

    async def test_list_requires_admin(self, member_client):
        assert (await member_client.get("/checkin")).status_code == 403
