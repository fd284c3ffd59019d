"""
OrderHub — Delivery Endpoint Tests
===================================

What we test:
    ✅ Sale users create deliveries (status starts as accepted)
    ✅ Customers and anonymous callers are refused (403 / 401)
    ✅ Unknown owner → 404
    ✅ Listing includes the owner's name and email
    ✅ Timestamps read back from the database keep their UTC zone
    ✅ Status change appends a log with the new status
    ✅ Malformed / expired tokens → 401 "Invalid JWT token"
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from orderhub.config import settings


class TestCreateDelivery:

    @pytest.mark.asyncio
    async def test_seller_creates_delivery(self, test_client, seller, customer):
        response = await test_client.post(
            "/deliveries",
            json={"user_id": customer.id, "description": "Notebook"},
            headers=seller.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["userId"] == customer.id
        assert body["description"] == "Notebook"
        assert body["status"] == "accepted"
        assert body["createdAt"]

    @pytest.mark.asyncio
    async def test_customer_is_forbidden(self, test_client, customer):
        response = await test_client.post(
            "/deliveries",
            json={"user_id": customer.id, "description": "Notebook"},
            headers=customer.headers,
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Unauthorized"}

    @pytest.mark.asyncio
    async def test_missing_token(self, test_client, customer):
        response = await test_client.post(
            "/deliveries", json={"user_id": customer.id, "description": "Notebook"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "JWT token not found"}

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client, seller):
        response = await test_client.post(
            "/deliveries",
            json={"user_id": str(uuid4()), "description": "Notebook"},
            headers=seller.headers,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_invalid_body(self, test_client, seller):
        response = await test_client.post(
            "/deliveries",
            json={"user_id": "not-a-uuid", "description": ""},
            headers=seller.headers,
        )

        assert response.status_code == 400
        issues = {issue["field"]: issue for issue in response.json()["issues"]}
        assert issues["user_id"]["message"] == "Invalid uuid"
        assert issues["user_id"]["code"] == "invalid_string"
        assert issues["description"]["code"] == "too_small"


class TestListDeliveries:

    @pytest.mark.asyncio
    async def test_lists_with_owner_summary(self, test_client, seller, customer, delivery):
        response = await test_client.get("/deliveries", headers=seller.headers)

        assert response.status_code == 200
        deliveries = response.json()["deliveries"]
        assert len(deliveries) == 1
        assert deliveries[0]["id"] == delivery["id"]
        assert deliveries[0]["user"] == {"name": customer.name, "email": customer.email}

    @pytest.mark.asyncio
    async def test_timestamps_read_back_as_utc(self, test_client, seller, delivery):
        response = await test_client.get("/deliveries", headers=seller.headers)

        listed = response.json()["deliveries"][0]
        assert listed["createdAt"] == delivery["createdAt"]
        assert listed["createdAt"].endswith("Z")
        assert datetime.fromisoformat(listed["createdAt"].replace("Z", "+00:00")).tzinfo is not None

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client, seller):
        response = await test_client.get("/deliveries", headers=seller.headers)

        assert response.status_code == 200
        assert response.json() == {"deliveries": []}

    @pytest.mark.asyncio
    async def test_customer_is_forbidden(self, test_client, customer):
        response = await test_client.get("/deliveries", headers=customer.headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_garbage_token(self, test_client):
        response = await test_client.get(
            "/deliveries", headers={"Authorization": "Bearer not.a.jwt"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid JWT token"}

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, seller):
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        token = jwt.encode(
            {"sub": seller.id, "role": "sale", "iat": issued, "exp": issued + timedelta(days=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        response = await test_client.get(
            "/deliveries", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid JWT token"}

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret(self, test_client, seller):
        token = jwt.encode(
            {
                "sub": seller.id,
                "role": "sale",
                "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            },
            "some-other-secret",
            algorithm="HS256",
        )

        response = await test_client.get(
            "/deliveries", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401


class TestUpdateDeliveryStatus:

    @pytest.mark.asyncio
    async def test_updates_status_and_appends_log(self, test_client, seller, delivery):
        response = await test_client.patch(
            "/deliveries/status",
            json={"id": delivery["id"], "status": "shipped"},
            headers=seller.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "shipped"
        assert body["updatedAt"] is not None

        shown = await test_client.get(
            f"/delivery-logs/{delivery['id']}/show", headers=seller.headers
        )
        assert [log["description"] for log in shown.json()["logs"]] == ["shipped"]

    @pytest.mark.asyncio
    async def test_any_status_may_follow_any_other(self, test_client, seller, delivery):
        for status in ("delivered", "accepted"):
            response = await test_client.patch(
                "/deliveries/status",
                json={"id": delivery["id"], "status": status},
                headers=seller.headers,
            )
            assert response.status_code == 200
            assert response.json()["status"] == status

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, test_client, seller, delivery):
        response = await test_client.patch(
            "/deliveries/status",
            json={"id": delivery["id"], "status": "lost"},
            headers=seller.headers,
        )

        assert response.status_code == 400
        assert response.json()["issues"][0]["field"] == "status"
        assert response.json()["issues"][0]["code"] == "invalid_enum_value"

    @pytest.mark.asyncio
    async def test_unknown_delivery(self, test_client, seller):
        response = await test_client.patch(
            "/deliveries/status",
            json={"id": str(uuid4()), "status": "shipped"},
            headers=seller.headers,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Delivery not found"}

    @pytest.mark.asyncio
    async def test_customer_is_forbidden(self, test_client, customer, delivery):
        response = await test_client.patch(
            "/deliveries/status",
            json={"id": delivery["id"], "status": "shipped"},
            headers=customer.headers,
        )

        assert response.status_code == 403
