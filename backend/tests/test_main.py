"""Smoke tests for the application object."""

from fastapi.testclient import TestClient

from stockview.main import app


def test_health_check():
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_routes_are_mounted_under_api_prefix():
    paths = {route.path for route in app.routes}
    assert "/api/v1/stock/levels" in paths
    assert "/api/v1/stock/alert-rules/{rule_id}/test" in paths
    assert "/api/v1/stock/transfers/{transfer_id}" in paths
    assert "/api/v1/warehousing/{warehouse_id}/inventory" in paths
    assert "/api/v1/warehousing/inventory/{item_id}" in paths
    assert "/api/v1/warehousing" in paths
    assert "/api/v1/warehousing/{warehouse_id}/locations" in paths


def test_invalid_adjustment_body_is_rejected():
    with TestClient(app) as client:
        response = client.post(
            "/api/v1/stock/00000000-0000-0000-0000-000000000001/adjust",
            json={"quantity_delta": 5, "reason": "gift"},
        )
    assert response.status_code == 422


def test_null_rule_flag_is_rejected():
    with TestClient(app) as client:
        response = client.patch(
            "/api/v1/stock/alert-rules/00000000-0000-0000-0000-000000000001",
            json={"is_active": None},
        )
    assert response.status_code == 422
