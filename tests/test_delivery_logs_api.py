"""
OrderHub — Delivery Log Endpoint Tests
=======================================

What we test:
    ✅ Sale users append logs; customers cannot
    ✅ Unknown delivery → 404
    ✅ Show returns the delivery, owner summary and logs in order
    ✅ Customers see their own deliveries only
"""

from uuid import uuid4

import pytest


class TestCreateDeliveryLog:

    @pytest.mark.asyncio
    async def test_seller_appends_log(self, test_client, seller, delivery):
        response = await test_client.post(
            "/delivery-logs",
            json={"delivery_id": delivery["id"], "description": "Pacote saiu para entrega"},
            headers=seller.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["deliveryId"] == delivery["id"]
        assert body["description"] == "Pacote saiu para entrega"
        assert body["id"]

    @pytest.mark.asyncio
    async def test_customer_is_forbidden(self, test_client, customer, delivery):
        response = await test_client.post(
            "/delivery-logs",
            json={"delivery_id": delivery["id"], "description": "Chegou"},
            headers=customer.headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_delivery(self, test_client, seller):
        response = await test_client.post(
            "/delivery-logs",
            json={"delivery_id": str(uuid4()), "description": "Chegou"},
            headers=seller.headers,
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Delivery not found"}

    @pytest.mark.asyncio
    async def test_description_too_long(self, test_client, seller, delivery):
        response = await test_client.post(
            "/delivery-logs",
            json={"delivery_id": delivery["id"], "description": "x" * 501},
            headers=seller.headers,
        )

        assert response.status_code == 400
        assert response.json()["issues"] == [
            {
                "field": "description",
                "message": "String must contain at most 500 character(s)",
                "code": "too_big",
            }
        ]


class TestShowDelivery:

    @pytest.mark.asyncio
    async def test_owner_sees_delivery_with_logs(self, test_client, seller, customer, delivery):
        for description in ("Em separação", "Saiu para entrega"):
            await test_client.post(
                "/delivery-logs",
                json={"delivery_id": delivery["id"], "description": description},
                headers=seller.headers,
            )

        response = await test_client.get(
            f"/delivery-logs/{delivery['id']}/show", headers=customer.headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == delivery["id"]
        assert body["status"] == "accepted"
        assert body["user"] == {"name": customer.name, "email": customer.email}
        assert [log["description"] for log in body["logs"]] == ["Em separação", "Saiu para entrega"]

    @pytest.mark.asyncio
    async def test_seller_sees_any_delivery(self, test_client, seller, delivery):
        response = await test_client.get(
            f"/delivery-logs/{delivery['id']}/show", headers=seller.headers
        )

        assert response.status_code == 200
        assert response.json()["logs"] == []

    @pytest.mark.asyncio
    async def test_customer_cannot_see_foreign_delivery(self, test_client, other_customer, delivery):
        response = await test_client.get(
            f"/delivery-logs/{delivery['id']}/show", headers=other_customer.headers
        )

        assert response.status_code == 403
        assert response.json() == {"message": "The user can only view their own deliveries"}

    @pytest.mark.asyncio
    async def test_unknown_delivery(self, test_client, seller):
        response = await test_client.get(
            f"/delivery-logs/{uuid4()}/show", headers=seller.headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client, seller):
        response = await test_client.get("/delivery-logs/123/show", headers=seller.headers)

        assert response.status_code == 400
        assert response.json()["issues"] == [
            {"field": "delivery_id", "message": "Invalid uuid", "code": "invalid_string"}
        ]

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, delivery):
        response = await test_client.get(f"/delivery-logs/{delivery['id']}/show")

        assert response.status_code == 401
