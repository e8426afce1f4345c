import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.mark.parametrize("path", ["/nope", "/api/refunds", "/api/create-order/extra"])
def test_unknown_route_is_404_with_path(client, path):
    res = client.get(path)

    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "error": "Endpoint not found",
        "message": f"Route {path} not found",
    }


def test_404_echoes_query_string(client):
    res = client.post("/api/orders?id=7", json={})

    assert res.status_code == 404
    assert res.json()["message"] == "Route /api/orders?id=7 not found"


def test_wrong_method_on_known_path_is_404(client):
    res = client.get("/api/create-order")

    assert res.status_code == 404
    assert res.json()["error"] == "Endpoint not found"


@pytest.mark.parametrize("path", ["/api/create-order", "/api/verify-payment"])
@pytest.mark.parametrize("raw", [b"{", b'{"amount": 10,}', b"amount=10", b"\xff\xfe"])
def test_malformed_json_is_400(client, gateway, path, raw):
    res = client.post(path, content=raw, headers={"content-type": "application/json"})

    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "error": "Invalid JSON format",
        "message": "Request body contains malformed JSON",
    }
    assert gateway.calls == []


def test_unhandled_exception_is_flat_500(settings, gateway):
    app = create_app(settings, gateway=gateway)

    @app.get("/boom")
    def boom():
        raise ValueError("kaput")

    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/boom")

    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Internal server error", "message": "kaput"}


def test_cors_allows_listed_origin_with_credentials(client):
    res = client.options(
        "/api/create-order",
        headers={"Origin": "https://www.slumberpanda.com", "Access-Control-Request-Method": "POST"},
    )

    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "https://www.slumberpanda.com"
    assert res.headers["access-control-allow-credentials"] == "true"


def test_cors_refuses_other_origins(client):
    res = client.get("/", headers={"Origin": "https://evil.example"})

    assert res.status_code == 200
    assert "access-control-allow-origin" not in res.headers


@pytest.mark.parametrize("path", ["/api/create-orders", "/nope"])
def test_malformed_json_on_unknown_path_is_400(client, path):
    res = client.post(path, content=b"{", headers={"content-type": "application/json"})

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid JSON format"


def test_malformed_vendor_json_is_400(client):
    res = client.post(
        "/api/verify-payment", content=b"{", headers={"content-type": "application/vnd.api+json"}
    )

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid JSON format"


def test_malformed_json_response_keeps_cors_headers(client):
    res = client.post(
        "/api/create-order",
        content=b"{",
        headers={"content-type": "application/json", "Origin": "http://localhost:5173"},
    )

    assert res.status_code == 400
    assert res.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_openapi_documents_json_and_form_bodies(client):
    paths = client.get("/openapi.json").json()["paths"]

    for path, field in (("/api/create-order", "amount"), ("/api/verify-payment", "razorpay_signature")):
        content = paths[path]["post"]["requestBody"]["content"]
        assert set(content) == {"application/json", "application/x-www-form-urlencoded"}
        assert field in content["application/json"]["schema"]["properties"]
