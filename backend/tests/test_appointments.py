"""
Trial-class booking: slot validation, double-booking and admin status changes
"""
from datetime import datetime, timedelta

import pytest

from core.utils.timeutils import gym_today, gym_zone


def booking(days_ahead: int = 2, time: str = "10:00", **overrides) -> dict:
    payload = {
        "name": "Fernanda Alves",
        "phone": "(21) 99876-5432",
        "email": "Fernanda@Example.com",
        "classType": "Musculação",
        "scheduledDate": (gym_today() + timedelta(days=days_ahead)).isoformat(),
        "scheduledTime": time,
        "notes": "Primeira vez",
    }
    payload.update(overrides)
    return payload


class TestBooking:

    async def test_books_a_free_slot(self, client):
        payload = booking()
        response = await client.post("/appointments", json=payload)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "PENDING"
        assert data["phone"] == "21998765432"
        assert data["email"] == "fernanda@example.com"
        assert data["scheduledTime"] == "10:00"

        # Stored in UTC, still 10:00 on the gym's wall clock
        scheduled = datetime.fromisoformat(data["scheduledDate"].replace("Z", "+00:00"))
        local = scheduled.astimezone(gym_zone())
        assert local.date().isoformat() == payload["scheduledDate"]
        assert (local.hour, local.minute) == (10, 0)
        assert scheduled.utcoffset() == timedelta(0)

    async def test_same_slot_conflicts(self, client):
        assert (await client.post("/appointments", json=booking())).status_code == 201

        response = await client.post("/appointments", json=booking(name="Outra Pessoa"))

        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT_ERROR"

    async def test_other_time_same_day_is_free(self, client):
        assert (await client.post("/appointments", json=booking())).status_code == 201
        assert (await client.post("/appointments", json=booking(time="11:00"))).status_code == 201

    async def test_past_slot_rejected(self, client):
        response = await client.post("/appointments", json=booking(days_ahead=-1))
        assert response.status_code == 400

    @pytest.mark.parametrize("overrides", [
        {"phone": "12345"},
        {"email": "not-an-email"},
        {"scheduledTime": "25:00"},
        {"scheduledTime": "9h"},
        {"scheduledDate": "amanhã"},
        {"classType": ""},
    ])
    async def test_invalid_input(self, client, overrides):
        response = await client.post("/appointments", json=booking(**overrides))
        assert response.status_code == 400

    async def test_cancelled_slot_can_be_rebooked(self, client, admin_client):
        first = (await client.post("/appointments", json=booking())).json()["data"]

        response = await admin_client.patch(f"/appointments/{first['id']}", json={"status": "CANCELLED"})
        assert response.json()["data"]["status"] == "CANCELLED"

        assert (await client.post("/appointments", json=booking())).status_code == 201

    async def test_confirmed_slot_still_blocks(self, client, admin_client):
        first = (await client.post("/appointments", json=booking())).json()["data"]
        await admin_client.patch(f"/appointments/{first['id']}", json={"status": "CONFIRMED"})

        assert (await client.post("/appointments", json=booking())).status_code == 409


class TestAdministration:

    async def test_list_requires_admin(self, client, member_client):
        assert (await client.get("/appointments")).status_code == 401
        assert (await member_client.get("/appointments")).status_code == 403

    async def test_filter_by_status(self, client, admin_client):
        first = (await client.post("/appointments", json=booking())).json()["data"]
        await client.post("/appointments", json=booking(time="15:30"))
        await admin_client.patch(f"/appointments/{first['id']}", json={"status": "CONFIRMED"})

        confirmed = (await admin_client.get("/appointments", params={"status": "CONFIRMED"})).json()["data"]
        assert [a["id"] for a in confirmed["appointments"]] == [first["id"]]

        everything = (await admin_client.get("/appointments")).json()["data"]
        assert everything["total"] == 2

    async def test_unknown_status_rejected(self, client, admin_client):
        first = (await client.post("/appointments", json=booking())).json()["data"]
        response = await admin_client.patch(f"/appointments/{first['id']}", json={"status": "DONE"})
        assert response.status_code == 400

    async def test_delete(self, client, admin_client):
        first = (await client.post("/appointments", json=booking())).json()["data"]

        assert (await admin_client.delete(f"/appointments/{first['id']}")).status_code == 200
        assert (await admin_client.delete(f"/appointments/{first['id']}")).status_code == 404
