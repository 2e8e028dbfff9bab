"""
Refer-a-friend submissions
"""
from services.referrals import ANONYMOUS_REFERRER


class TestReferrals:

    async def test_anonymous_referrer(self, client):
        response = await client.post("/referrals", json={
            "referredName": "Paulo",
            "referredPhone": "(31) 3222-1111",
        })

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["referrerName"] == ANONYMOUS_REFERRER
        assert data["referrerId"] is None
        assert data["referredPhone"] == "3132221111"
        assert data["status"] == "PENDING"

    async def test_signed_in_member_is_referrer(self, member_client, member_user):
        response = await member_client.post("/referrals", json={
            "referredName": "Paulo",
            "referredPhone": "31999998888",
            "referredEmail": "Paulo@Example.com",
        })

        data = response.json()["data"]
        assert data["referrerId"] == str(member_user.id)
        assert data["referrerName"] == "Maria Souza"
        assert data["referrerEmail"] == member_user.email
        assert data["referredEmail"] == "paulo@example.com"

    async def test_bad_phone(self, client):
        response = await client.post("/referrals", json={"referredName": "Paulo", "referredPhone": "999"})
        assert response.status_code == 400

    async def test_missing_name(self, client):
        response = await client.post("/referrals", json={"referredPhone": "31999998888"})
        assert response.status_code == 400

    async def test_admin_list(self, client, admin_client, member_client):
        await client.post("/referrals", json={"referredName": "A", "referredPhone": "31999998888"})
        await client.post("/referrals", json={"referredName": "B", "referredPhone": "31999997777"})

        assert (await member_client.get("/referrals")).status_code == 403

        data = (await admin_client.get("/referrals")).json()["data"]
        assert data["total"] == 2
        assert {r["referredName"] for r in data["referrals"]} == {"A", "B"}
