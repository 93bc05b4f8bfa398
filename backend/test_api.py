"""HTTP layer: status codes, error mapping and the end-to-end donation/request flow."""


def _register_donor(client, **overrides):
    body = {
        "name": "Rahul Sharma",
        "age": 28,
        "gender": "Male",
        "blood_group": "O+",
        "contact": "9876543210",
        "address": "Delhi",
        "last_donation_date": "2025-07-20",
    }
    body.update(overrides)
    return client.post("/donors", json=body)


def _register_recipient(client, **overrides):
    body = {
        "name": "Amit Verma",
        "age": 40,
        "gender": "Male",
        "blood_group_required": "O+",
        "contact": "9876554321",
        "address": "Delhi",
    }
    body.update(overrides)
    return client.post("/recipients", json=body)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_end_to_end_fulfillment(client):
    donor = _register_donor(client).json()
    recipient = _register_recipient(client).json()

    assert client.put("/stock/O+", json={"units": 3}).json() == {"blood_group": "O+", "units": 3}

    resp = client.post(
        "/donations",
        json={"donor_id": donor["id"], "blood_group": "O+", "units": 2, "donation_date": "2025-07-20"},
    )
    assert resp.status_code == 201
    assert resp.json()["units_donated"] == 2
    assert client.get("/stock").json() == [{"blood_group": "O+", "units": 5}]

    resp = client.post(
        "/requests",
        json={"recipient_id": recipient["id"], "blood_group": "O+", "units": 2, "request_date": "2025-08-10"},
    )
    assert resp.status_code == 201
    request_id = resp.json()["id"]
    assert resp.json()["status"] == "Pending"

    pending = client.get("/requests/pending").json()
    assert pending == [
        {
            "request_id": request_id,
            "recipient_name": "Amit Verma",
            "blood_group": "O+",
            "units": 2,
            "request_date": "2025-08-10",
        }
    ]

    resp = client.post(f"/requests/{request_id}/process")
    assert resp.status_code == 200
    assert resp.json() == {"request_id": request_id, "status": "Completed"}
    assert client.get("/stock/O+").json() == {"blood_group": "O+", "units": 3}
    assert client.get("/requests/pending").json() == []

    # Second call returns the final status and leaves stock alone
    resp = client.post(f"/requests/{request_id}/process")
    assert resp.json()["status"] == "Completed"
    assert client.get("/stock/O+").json()["units"] == 3

    detail = client.get(f"/requests/{request_id}").json()
    assert detail["status"] == "Completed"
    assert detail["processed_at"] is not None


def test_rejected_request(client):
    recipient = _register_recipient(client, blood_group_required="B+").json()
    client.put("/stock/B+", json={"units": 1})
    request_id = client.post(
        "/requests",
        json={"recipient_id": recipient["id"], "blood_group": "B+", "units": 3, "request_date": "2025-08-09"},
    ).json()["id"]

    resp = client.post(f"/requests/{request_id}/process")

    assert resp.json()["status"] == "Rejected"
    assert client.get("/stock/B+").json()["units"] == 1


def test_validation_error_names_field(client):
    resp = _register_donor(client, age=16)

    assert resp.status_code == 400
    assert resp.json()["detail"]["field"] == "age"


def test_duplicate_contact(client):
    assert _register_donor(client).status_code == 201
    resp = _register_donor(client, name="Other Person")

    assert resp.status_code == 400
    assert resp.json()["detail"]["field"] == "contact"


def test_negative_stock_rejected(client):
    resp = client.put("/stock/A-", json={"units": -2})

    assert resp.status_code == 400
    assert resp.json()["detail"]["field"] == "units_available"


def test_not_found(client):
    assert client.get("/donors/42").status_code == 404
    assert client.get("/recipients/42").status_code == 404
    assert client.get("/requests/42").status_code == 404
    resp = client.post("/requests/42/process")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Request not found"


def test_donation_for_unknown_donor(client):
    resp = client.post("/donations", json={"donor_id": 5, "blood_group": "O+", "units": 1})
    assert resp.status_code == 404


def test_malformed_body_is_422(client):
    resp = client.post("/donations", json={"donor_id": "abc", "blood_group": "O+", "units": 1})
    assert resp.status_code == 422


def test_reports(client):
    donor = _register_donor(client, last_donation_date="2024-01-01").json()
    client.put("/stock/O+", json={"units": 1})
    client.put("/stock/A-", json={"units": 9})
    client.post(
        "/donations",
        json={"donor_id": donor["id"], "blood_group": "O+", "units": 1, "donation_date": "2024-06-01"},
    )

    inactive = client.get("/reports/inactive-donors", params={"months": 6}).json()
    assert [row["donor_id"] for row in inactive] == [donor["id"]]

    low = client.get("/reports/low-stock", params={"threshold": 5}).json()
    assert low == [{"blood_group": "O+", "units": 2}]

    totals = client.get("/reports/donation-totals").json()
    assert totals == [{"blood_group": "O+", "total_units": 1}]

    assert client.get("/reports/total-units").json() == {"total_units": 11}


def test_oversized_units_are_a_validation_error(client):
    donor = _register_donor(client).json()

    resp = client.post(
        "/donations",
        json={"donor_id": donor["id"], "blood_group": "O+", "units": 2**63, "donation_date": "2025-07-20"},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["field"] == "units"
    assert client.get("/stock").json() == []


def test_unexpected_error_is_a_generic_500(client, monkeypatch):
    from fastapi.testclient import TestClient

    from bloodbank.main import app
    from bloodbank.services import stock_service

    def broken(db):
        raise RuntimeError("disk I/O error at /var/lib/bloodbank.db")

    monkeypatch.setattr(stock_service, "available_stock", broken)
    resp = TestClient(app, raise_server_exceptions=False).get("/stock")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "An internal error occurred. Please try again later."}
    assert "disk" not in resp.text
