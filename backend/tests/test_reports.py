import pytest
from fastapi.testclient import TestClient

from storefront.db import init_db
from storefront.main import app

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def setup_db():
    init_db(reset=True)
    client.cookies.clear()
    yield
    client.cookies.clear()


def login(username, password):
    client.cookies.clear()
    res = client.post("/api/auth/login", json={"username": username, "password": password})
    assert res.status_code == 200


def test_reports_need_login():
    assert client.get("/api/admin/reports/receivables").status_code == 401
    res = client.post("/api/auth/login", json={"username": "admin", "password": "salah"})
    assert res.status_code == 401


def test_range_report():
    login("manager", "manager")
    res = client.get(
        "/api/admin/reports/period",
        params={"mode": "range", "start": "2024-05-01", "end": "2024-05-03"},
    )
    assert res.status_code == 200
    body = res.json()
    assert [t["id"] for t in body["transactions"]] == ["TRX-003", "TRX-004", "TRX-002", "TRX-001"]
    # TRX-003 is pending and earns nothing
    assert body["revenue"] == 500000 + 175000 + 2500000
    assert body["transaction_count"] == 4


def test_daily_and_monthly_reports():
    login("manager", "manager")
    daily = client.get("/api/admin/reports/period", params={"mode": "daily", "date": "2024-05-05"}).json()
    assert [t["id"] for t in daily["transactions"]] == ["TRX-006"]
    assert daily["revenue"] == 1000000

    monthly = client.get(
        "/api/admin/reports/period", params={"mode": "monthly", "month": 6, "year": 2024}
    ).json()
    assert [t["id"] for t in monthly["transactions"]] == ["TRX-007"]
    assert monthly["revenue"] == 750000


def test_period_report_bad_input():
    login("manager", "manager")
    res = client.get("/api/admin/reports/period", params={"mode": "daily", "date": "5 Mei 2024"})
    assert res.status_code == 400
    res = client.get("/api/admin/reports/period", params={"mode": "annual"})
    assert res.status_code == 400


def test_annual_report():
    login("manager", "manager")
    body = client.get("/api/admin/reports/annual", params={"year": 2024}).json()
    assert len(body["months"]) == 12
    may = body["months"][4]
    assert may["month"] == 5
    # TRX-001, 002, 004, 005 settled, TRX-006 down payment
    assert may["transaction_count"] == 5
    assert may["revenue"] == 500000 + 175000 + 2500000 + 600000 + 1000000
    june = body["months"][5]
    assert (june["transaction_count"], june["revenue"]) == (1, 750000)
    assert body["transaction_count"] == 6
    assert body["revenue"] == sum(m["revenue"] for m in body["months"])

    via_period = client.get("/api/admin/reports/period", params={"mode": "annual", "year": 2024}).json()
    assert via_period == body


def test_receivables_report():
    login("manager", "manager")
    body = client.get("/api/admin/reports/receivables").json()
    rows = {r["id"]: r["remaining"] for r in body["items"]}
    assert rows == {"TRX-006": 2000000, "TRX-007": 750000}
    assert body["total_receivable"] == 2750000


def test_stock_report():
    login("manager", "manager")
    body = client.get("/api/admin/reports/stock").json()
    rows = {r["id"]: r for r in body["items"]}
    hardcover = rows["1"]
    assert (hardcover["stock"], hardcover["sold"], hardcover["total_stock"]) == (1500, 100, 1600)
    assert hardcover["label"] == "safe"
    # pending TRX-003 still counts as sold
    assert rows["4"]["sold"] == 10
    assert rows["4"]["label"] == "low"
    assert rows["3"]["label"] == "low"
    assert rows["5"]["sold"] == 0

    filtered = client.get("/api/admin/reports/stock", params={"q": "buku"}).json()["items"]
    assert [r["id"] for r in filtered] == ["6"]


def test_manager_cannot_edit_transactions():
    login("manager", "manager")
    res = client.patch("/api/admin/transactions/TRX-003", json={"total_amount": 850000, "paid_amount": 850000})
    assert res.status_code == 403
    assert client.get("/api/admin/transactions/TRX-003").json()["status"] == "Pending"


def test_admin_edits_transaction_and_reports_follow():
    login("admin", "admin")
    res = client.patch("/api/admin/transactions/TRX-006", json={"total_amount": 3000000, "paid_amount": 3000000})
    assert res.status_code == 200
    assert res.json()["status"] == "Lunas"
    assert res.json()["remaining"] == 0

    body = client.get("/api/admin/reports/receivables").json()
    assert [r["id"] for r in body["items"]] == ["TRX-007"]
    assert body["total_receivable"] == 750000

    res = client.patch("/api/admin/transactions/TRX-007", json={"total_amount": 1500000, "paid_amount": 2000000})
    assert res.json()["status"] == "Lunas"
    assert res.json()["overpayment"] == 500000

    assert client.patch(
        "/api/admin/transactions/TRX-404", json={"total_amount": 1, "paid_amount": 1}
    ).status_code == 404


def test_admin_records_transaction():
    login("admin", "admin")
    res = client.post(
        "/api/admin/transactions",
        json={
            "id": "TRX-MANUAL-1",
            "date": "2024-08-17",
            "customer_name": "Panitia 17an",
            "total_amount": 450000,
            "paid_amount": 200000,
            "items": [{"name": "X-Banner Standing", "quantity": 5, "price": 90000}],
        },
    )
    assert res.status_code == 200
    assert res.json()["status"] == "DP"
    listed = client.get("/api/admin/transactions").json()["items"]
    assert listed[0]["id"] == "TRX-MANUAL-1"

    invoice = client.get("/api/admin/transactions/TRX-MANUAL-1/invoice").json()
    assert invoice["remaining"] == 250000
    assert invoice["labels"]["total"] == "Rp 450.000"


def test_logout_closes_admin():
    login("admin", "admin")
    client.post("/api/auth/logout")
    assert client.get("/api/admin/transactions").status_code == 401
