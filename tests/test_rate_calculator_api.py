import threading

import pytest
from fastapi.testclient import TestClient

from context_manager.services import get_rate_card_store, get_serviceability_service
from main import app
from modules.rate_card.rate_card_store import InMemoryRateCardStore
from modules.serviceability.pincode_directory import InMemoryPincodeDirectory
from modules.serviceability.serviceability_service import ServiceabilityService
from tests.factories import LOCALITY_PINCODES, PINCODES, make_entry


REQUEST_BODY = {
    "pickup_pincode": "110001",
    "delivery_pincode": "400001",
    "actualWeight": 1.0,
    "length": 30,
    "breadth": 20,
    "height": 10,
    "paymentType": "prepaid",
    "shipment_value": 2000,
}


@pytest.fixture
def client():
    store = InMemoryRateCardStore(
        [
            make_entry("Acme"),
            make_entry("Zeta", "Air"),
            make_entry("Zeta", "Surface", "Within City"),
        ]
    )
    serviceability = ServiceabilityService(
        InMemoryPincodeDirectory({**PINCODES, **LOCALITY_PINCODES})
    )

    app.dependency_overrides[get_rate_card_store] = lambda: store
    app.dependency_overrides[get_serviceability_service] = lambda: serviceability
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_calculate_rates(client):
    response = client.post(
        "/api/v1/ratecalculator", json=REQUEST_BODY, headers={"X-Client-Id": "1"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] is True
    data = body["data"]
    assert data["zone"] == "Rest of India"
    assert data["billedWeight"] == 1.2
    assert data["totalOptions"] == 2
    assert data["cheapestOption"]["courier"] == "Acme"
    # includeRTO defaults to true for prepaid
    assert data["cheapestOption"]["rtoCharges"] == 25.0
    assert data["cheapestOption"]["total"] == 123.9
    assert data["expressCount"] == 1


def test_cod_request_has_no_rto(client):
    response = client.post(
        "/api/v1/ratecalculator",
        json={**REQUEST_BODY, "paymentType": "COD"},
        headers={"X-Client-Id": "1"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["cheapestOption"]["rtoCharges"] == 0.0


def test_requires_client_header(client):
    response = client.post("/api/v1/ratecalculator", json=REQUEST_BODY)
    assert response.status_code == 401


def test_invalid_pincode_is_bad_request(client):
    response = client.post(
        "/api/v1/ratecalculator",
        json={**REQUEST_BODY, "pickup_pincode": "11001"},
        headers={"X-Client-Id": "1"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["status"] is False
    assert body["data"]["code"] == "INVALID_PINCODE"
    assert body["data"]["field"] == "origin_pincode"


def test_invalid_dimensions_is_bad_request(client):
    response = client.post(
        "/api/v1/ratecalculator",
        json={**REQUEST_BODY, "height": 0},
        headers={"X-Client-Id": "1"},
    )
    assert response.status_code == 400
    assert response.json()["data"]["code"] == "INVALID_DIMENSIONS"


def test_no_rates_is_not_found(client):
    response = client.post(
        "/api/v1/ratecalculator",
        json={**REQUEST_BODY, "delivery_pincode": "781001"},
        headers={"X-Client-Id": "1"},
    )
    assert response.status_code == 404
    assert response.json()["data"]["code"] == "NO_RATES_AVAILABLE"


def test_missing_field_is_validation_error(client):
    body = dict(REQUEST_BODY)
    body.pop("actualWeight")
    response = client.post(
        "/api/v1/ratecalculator", json=body, headers={"X-Client-Id": "1"}
    )
    assert response.status_code == 422
    assert "actualWeight" in response.json()["data"]["fields"]


def test_rate_card(client):
    response = client.get("/api/v1/rate-card", headers={"X-Client-Id": "1"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["rate_band"]["is_default"] is True
    assert [c["courier_name"] for c in data["couriers"]] == ["Acme", "Zeta", "Zeta"]


def test_pincode_details(client):
    response = client.get("/api/v1/pincode/details", params={"pincode": "781001"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["state"] == "assam"
    assert data["is_special_zone"] is True


def test_pincode_zone(client):
    response = client.get(
        "/api/v1/pincode/zone", params={"origin": "110002", "destination": "110085"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["zone"] == "Within State"
    assert response.json()["data"]["zone_code"] == "B"


def test_pincode_zone_invalid(client):
    response = client.get(
        "/api/v1/pincode/zone", params={"origin": "11", "destination": "110085"}
    )
    assert response.status_code == 400


def test_status(client):
    assert client.get("/status").json() == {"status": "OK"}


def test_rate_limit_key_prefers_client_header():
    from starlette.requests import Request

    from limiter import seller_or_remote_address

    def request(headers):
        return Request(
            {
                "type": "http",
                "headers": [(k.encode(), v.encode()) for k, v in headers.items()],
                "client": ("10.0.0.1", 1234),
            }
        )

    assert seller_or_remote_address(request({"x-client-id": "7"})) == "client:7"
    assert seller_or_remote_address(request({})) == "10.0.0.1"


class GatedStore(InMemoryRateCardStore):
    """Holds every courier lookup until released."""

    def __init__(self, entries):
        super().__init__(entries)
        self.started = threading.Event()
        self.release = threading.Event()

    def lookup(self, seller_id, zone=None, courier=None, mode=None):
        if courier is not None:
            self.started.set()
            self.release.wait(timeout=3)
        return super().lookup(seller_id, zone=zone, courier=courier, mode=mode)


def test_slow_rate_lookup_does_not_block_other_requests():
    store = GatedStore([make_entry("Acme")])
    serviceability = ServiceabilityService(
        InMemoryPincodeDirectory({**PINCODES, **LOCALITY_PINCODES})
    )
    app.dependency_overrides[get_rate_card_store] = lambda: store
    app.dependency_overrides[get_serviceability_service] = lambda: serviceability

    responses = {}

    try:
        with TestClient(app) as client:

            def calculate():
                responses["rate"] = client.post(
                    "/api/v1/ratecalculator",
                    json=REQUEST_BODY,
                    headers={"X-Client-Id": "1"},
                )

            worker = threading.Thread(target=calculate)
            worker.start()
            assert store.started.wait(timeout=3)

            status = client.get("/status")
            still_pricing = worker.is_alive()

            store.release.set()
            worker.join(timeout=5)
    finally:
        store.release.set()
        app.dependency_overrides.clear()

    assert status.status_code == 200
    assert still_pricing
    assert responses["rate"].status_code == 200
    assert responses["rate"].json()["data"]["cheapestOption"]["courier"] == "Acme"


def test_request_context_opens_no_session():
    import inspect

    from context_manager.context import build_request_context

    assert len(inspect.signature(build_request_context).parameters) == 0
