"""
HTTP surface of the home page calculators
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import services.homev2 as homev2


class TestStatusEndpoint:

    async def test_returns_camel_case_status(self, client, monkeypatch):
        monday_morning = datetime(2024, 1, 8, 10, 0, tzinfo=ZoneInfo("America/Sao_Paulo"))
        monkeypatch.setattr(homev2, "gym_now", lambda: monday_morning)

        response = await client.get("/homev2/status")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {
            "isOpen": True,
            "message": "Aberto Agora",
            "status": "open",
            "nextStatus": "Fechamento",
            "nextTime": "23:00",
            "currentTime": "10:00",
            "dayName": "segunda-feira",
        }

    async def test_sunday_night(self, client, monkeypatch):
        sunday_night = datetime(2024, 1, 7, 20, 15, tzinfo=ZoneInfo("America/Sao_Paulo"))
        monkeypatch.setattr(homev2, "gym_now", lambda: sunday_night)

        data = (await client.get("/homev2/status")).json()["data"]
        assert data["isOpen"] is False
        assert data["nextStatus"] == "Abertura"
        assert data["nextTime"] == "Segunda, 05:00"


class TestAnnualSavingsEndpoint:

    async def test_monthly_price(self, client):
        response = await client.get("/homev2/annual-savings", params={"monthlyPrice": 100, "billingCycle": "monthly"})

        assert response.status_code == 200
        assert response.json()["data"] == {
            "monthlyPrice": 100.0,
            "yearlyPrice": 1020,
            "savings": 180,
            "discountPercentage": 15,
            "billingCycle": "monthly",
        }

    async def test_defaults_to_zero_monthly(self, client):
        data = (await client.get("/homev2/annual-savings")).json()["data"]
        assert data["yearlyPrice"] == 0
        assert data["billingCycle"] == "monthly"

    async def test_invalid_cycle_is_bad_request(self, client):
        response = await client.get("/homev2/annual-savings", params={"monthlyPrice": 100, "billingCycle": "weekly"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"

    async def test_negative_price_is_bad_request(self, client):
        response = await client.get("/homev2/annual-savings", params={"monthlyPrice": -5})
        assert response.status_code == 400

    async def test_non_numeric_price_is_bad_request(self, client):
        response = await client.get("/homev2/annual-savings", params={"monthlyPrice": "abc"})
        assert response.status_code == 400
