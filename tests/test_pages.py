import os
import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")

from asset_dashboard.db.session import Base, get_db
from asset_dashboard.main import app
from asset_dashboard.models.device import Device, Job
from asset_dashboard.models.software import SoftwareDetail, SoftwareType


@pytest.fixture()
def db_session():
    # StaticPool keeps one connection so the threadpool sees the same in-memory DB.
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def seeded(db_session):
    os_type = SoftwareType(software_type="Operating System")
    db_session.add(os_type)
    db_session.flush()
    db_session.add(SoftwareDetail(id=1, software_detail="Windows 11", software_type_id=os_type.id))
    laptop = Device(
        device_id="NB-001",
        serial_no="SN-AAA-1",
        device_name="Alice ThinkPad",
        device_brand="Lenovo",
        device_model="T14",
        device_status="enable",
        device_price=32900,
        date_use=date(2023, 3, 1),
        software="1",
        software_sn='[{"1": "WIN-KEY-1"}]',
    )
    desktop = Device(
        device_id="PC-002",
        serial_no="SN-BBB-2",
        device_name="Finance Desktop",
        device_brand="Dell",
        device_status="disable",
    )
    db_session.add_all([laptop, desktop])
    db_session.flush()
    db_session.add(Job(device_id=desktop.id, job_status="repairing", job_detail="PSU replacement"))
    db_session.commit()
    return {"laptop": laptop, "desktop": desktop}


def test_dashboard_lists_devices_and_stats(client, seeded):
    response = client.get("/")
    assert response.status_code == 200
    assert "Alice ThinkPad" in response.text
    assert "Finance Desktop" in response.text
    assert "Deprecated" in response.text
    assert response.headers["X-Request-ID"]


def test_dashboard_quick_search_and_blank_filters(client, seeded):
    response = client.get("/", params={"query": "dell", "device_type_id": "", "cpu": ""})
    assert response.status_code == 200
    assert "Finance Desktop" in response.text
    assert "Alice ThinkPad" not in response.text


def test_device_detail_page(client, seeded):
    response = client.get(f"/devices/{seeded['laptop'].id}")
    assert response.status_code == 200
    assert "Windows 11" in response.text
    assert "WIN-KEY-1" in response.text
    assert "฿32,900.00" in response.text
    assert "year(s)" in response.text


@pytest.mark.parametrize("identifier", ["9999", "abc", "\u00b2", "9" * 30, "1" * 5000])
def test_device_detail_not_found(client, seeded, identifier):
    response = client.get(f"/devices/{identifier}")
    assert response.status_code == 404
    assert "Device not found" in response.text

    api = client.get(f"/api/v1/devices/{identifier}")
    assert api.status_code == 404
    assert api.json()["code"] == "not_found"


def test_software_page(client, seeded):
    response = client.get("/software")
    assert response.status_code == 200
    assert "Operating System" in response.text
    assert "Windows 11" in response.text


def test_api_search_devices(client, seeded):
    response = client.get("/api/v1/devices", params={"device_brand": "LEN"})
    assert response.status_code == 200
    body = response.json()
    assert [row["device_id"] for row in body] == ["NB-001"]
    assert body[0]["status_label"] == "Normal"

    all_rows = client.get("/api/v1/devices").json()
    assert [row["device_id"] for row in all_rows] == ["PC-002", "NB-001"]


def test_api_search_rejects_non_numeric_ids(client, seeded):
    response = client.get("/api/v1/devices", params={"department_id": "finance"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


@pytest.mark.parametrize("field", ["department_id", "device_type_id"])
def test_out_of_range_filter_ids_give_empty_results(client, seeded, field):
    huge = str(10**30)
    response = client.get("/api/v1/devices", params={field: huge})
    assert response.status_code == 200
    assert response.json() == []

    page = client.get("/", params={field: huge})
    assert page.status_code == 200
    assert "Alice ThinkPad" not in page.text


def test_api_device_detail_and_missing(client, seeded):
    response = client.get(f"/api/v1/devices/{seeded['laptop'].id}")
    assert response.status_code == 200
    body = response.json()
    assert body["installed_software"] == [
        {"id": 1, "software_name": "Windows 11", "software_type": "Operating System", "serial": "WIN-KEY-1"}
    ]

    missing = client.get("/api/v1/devices/abc")
    assert missing.status_code == 404
    assert missing.json() == {"code": "not_found", "message": "Device not found"}


def test_api_stats_and_software_totals(client, seeded):
    assert client.get("/api/v1/devices/stats").json() == {"enable": 1, "disable": 1, "repair": 1, "total": 2}
    assert client.get("/api/v1/software/totals").json() == {
        "Operating System": [{"id": 1, "software_name": "Windows 11", "total_install": 1, "total_sn": 1}]
    }


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
