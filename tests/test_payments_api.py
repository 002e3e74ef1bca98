from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from eshop.api.deps import payment_service_dep
from eshop.domain.errors import StorageError
from eshop.domain.services.payment_svc import PaymentService
from eshop.main import app

from tests.fakes import FakePaymentRepo


@pytest.fixture
def repo():
    return FakePaymentRepo()


@pytest.fixture
def client(repo):
    app.dependency_overrides[payment_service_dep] = lambda: PaymentService(repo)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _body(**overrides):
    body = {
        "userId": "user-1",
        "storeId": "store-1",
        "cartId": "cart-1",
        "currency": "USD",
        "amount": 19.98,
        "items": [{"productId": "P1", "quantity": 2, "unitPrice": 9.99}],
        "paymentMethod": "card",
        "metadata": {"channel": "web", "giftWrap": False},
    }
    body.update(overrides)
    return body


def test_create_then_fetch_round_trip(client):
    created = client.post("/api/payments", json=_body())

    assert created.status_code == 201
    data = created.json()
    assert data["status"] == "Success"
    assert data["processedAt"]

    fetched = client.get(f"/api/payments/{data['paymentId']}")
    assert fetched.status_code == 200
    record = fetched.json()
    assert record["paymentId"] == data["paymentId"]
    assert record["status"] == "Success"
    assert record["amount"] == 19.98
    assert record["items"] == [{"productId": "P1", "quantity": 2, "unitPrice": 9.99}]
    assert record["metadata"] == {"channel": "web", "giftWrap": False}


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"userId": ""}, "UserId is required"),
        ({"currency": ""}, "Currency is required"),
        ({"amount": 0}, "Amount must be greater than 0"),
        ({"amount": -1}, "Amount must be greater than 0"),
        ({"paymentMethod": ""}, "PaymentMethod is required"),
        ({"items": []}, "Items are required"),
    ],
)
def test_invalid_requests_are_rejected_without_persisting(client, repo, overrides, reason):
    res = client.post("/api/payments", json=_body(**overrides))

    assert res.status_code == 400
    assert res.json()["detail"] == reason
    assert repo.records == []


def test_missing_fields_are_reported_as_400(client, repo):
    res = client.post("/api/payments", json={"currency": "USD"})

    assert res.status_code == 400
    assert res.json()["detail"] == "UserId is required"


@pytest.mark.parametrize(
    "field, reason",
    [
        ("userId", "UserId is required"),
        ("currency", "Currency is required"),
        ("amount", "Amount must be greater than 0"),
        ("paymentMethod", "PaymentMethod is required"),
        ("items", "Items are required"),
    ],
)
def test_null_fields_are_reported_as_400(client, repo, field, reason):
    res = client.post("/api/payments", json=_body(**{field: None}))

    assert res.status_code == 400
    assert res.json()["detail"] == reason
    assert repo.records == []


def test_amount_beyond_storage_precision_is_400(client, repo):
    res = client.post("/api/payments", json=_body(amount="1.0000000000000000000000000000000000001"))

    assert res.status_code == 400
    assert res.json()["detail"] == "Amount has too many digits"
    assert repo.records == []


def test_nested_metadata_is_rejected(client, repo):
    res = client.post("/api/payments", json=_body(metadata={"address": {"city": "Oslo"}}))

    assert res.status_code == 422
    assert repo.records == []


def test_storage_failure_returns_generic_500():
    svc = AsyncMock()
    svc.create_payment.side_effect = StorageError("E11000 duplicate key on payments._id")
    app.dependency_overrides[payment_service_dep] = lambda: svc
    try:
        res = TestClient(app).post("/api/payments", json=_body())
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    assert "E11000" not in res.text
    assert res.json()["detail"] == "Internal server error occurred while processing payment"


def test_list_pages_and_counts(client):
    for _ in range(12):
        client.post("/api/payments", json=_body())

    first = client.get("/api/payments", params={"page": 1, "pageSize": 10}).json()
    second = client.get("/api/payments", params={"page": 2, "pageSize": 10}).json()

    assert len(first["items"]) == 10
    assert len(second["items"]) == 2
    assert first["totalCount"] == second["totalCount"] == 12


def test_list_clamps_out_of_range_paging(client):
    for _ in range(12):
        client.post("/api/payments", json=_body())

    res = client.get("/api/payments", params={"page": -3, "pageSize": 1000}).json()

    assert len(res["items"]) == 10
    assert res["totalCount"] == 12


def test_list_filters_by_status(client):
    client.post("/api/payments", json=_body())

    assert client.get("/api/payments", params={"status": "Success"}).json()["totalCount"] == 1
    assert client.get("/api/payments", params={"status": "Failed"}).json()["totalCount"] == 0


def test_get_payment_with_malformed_id_is_400(client):
    res = client.get("/api/payments/not-a-uuid")

    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid payment ID format"


def test_get_unknown_payment_is_404(client):
    assert client.get(f"/api/payments/{uuid4()}").status_code == 404
