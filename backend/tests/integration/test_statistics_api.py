"""
Integration tests for the statistics endpoints.

Covers:
- /api/statistics (dashboard)
- /api/statistics/<period>
- /api/statistics/weekdays
"""

import pytest

from tests.factories.repository_factories import appointment_payload

pytestmark = [pytest.mark.api, pytest.mark.statistics]


def book(client, complete=False, **overrides):
    created = client.post("/api/appointments", json=appointment_payload(**overrides))
    assert created.status_code == 201
    data = created.get_json()["data"]
    if complete:
        client.patch(f"/api/appointments/{data['id']}/complete")
    return data


SEED = [
    # (date, time, service, client, amount, completed)
    ("2024-03-13", "09:00", "Corte", "Ana", "35", True),
    ("2024-03-13", "10:00", "Barba", "Bruno", "20", True),
    ("2024-03-13", "11:00", "Barba", "Bruno", "20", False),
    ("2024-03-11", "09:00", "Barba", "Ana", "20", True),
    ("2024-03-02", "09:00", "Corte", "Carlos", "35", True),
    ("2023-12-30", "09:00", "Corte", "Carlos", "35", True),
]


@pytest.fixture
def seeded(client):
    # 2024-03-13 is a Wednesday; its week runs 2024-03-11 .. 2024-03-17
    for day, at, service, client_name, amount, complete in SEED:
        book(
            client,
            complete=complete,
            date=day,
            time=at,
            service=service,
            client_name=client_name,
            amount=amount,
        )
    return client


def test_day_summary(seeded):
    response = seeded.get("/api/statistics/DAY?date=2024-03-13")

    assert response.status_code == 200
    assert response.get_json()["data"] == {
        "period": "day",
        "count": 3,
        "completed_count": 2,
        "revenue": "55.00",
        "top_service": "Corte",
        "top_client": "Ana",
    }


def test_week_summary(seeded):
    data = seeded.get("/api/statistics/week?date=2024-03-13").get_json()["data"]

    assert data["count"] == 4
    assert data["revenue"] == "75.00"
    assert data["top_service"] == "Barba"
    assert data["top_client"] == "Ana"


def test_month_summary(seeded):
    data = seeded.get("/api/statistics/MONTH?date=2024-03-13").get_json()["data"]

    assert data["count"] == 5
    assert data["revenue"] == "110.00"
    assert data["top_service"] == "Corte"


def test_all_summary(seeded):
    data = seeded.get("/api/statistics/ALL").get_json()["data"]

    assert data["count"] == 6
    assert data["completed_count"] == 5
    assert data["revenue"] == "145.00"
    assert data["top_client"] == "Carlos"  # tied with Ana, seen first


def test_dashboard_returns_every_period(seeded):
    data = seeded.get("/api/statistics?date=2024-03-13").get_json()["data"]

    assert list(data) == ["day", "week", "month", "all"]
    assert data["day"]["count"] == 3
    assert data["all"]["count"] == 6


def test_empty_store_reports_sentinels(client):
    data = client.get("/api/statistics/DAY?date=2024-03-13").get_json()["data"]

    assert data["count"] == 0
    assert data["revenue"] == "0.00"
    assert data["top_service"] == "-"
    assert data["top_client"] == "-"


def test_week_does_not_cross_new_year(client):
    book(client, complete=True, date="2024-12-30", amount="50")

    data = client.get("/api/statistics/WEEK?date=2025-01-02").get_json()["data"]

    assert data["count"] == 0
    assert data["revenue"] == "0.00"


def test_unknown_period_returns_400(client):
    response = client.get("/api/statistics/YEAR")

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert body["details"]["allowed"] == ["DAY", "WEEK", "MONTH", "ALL"]


def test_invalid_reference_date_returns_400(client):
    response = client.get("/api/statistics/DAY?date=13/03/2024")

    assert response.status_code == 400


def test_weekday_histogram(seeded):
    data = seeded.get("/api/statistics/weekdays").get_json()["data"]

    assert data["total"] == 6
    counts = {day["label"]: day["count"] for day in data["days"]}
    # 2024-03-13 Wed x3, 2024-03-11 Mon, 2024-03-02 Sat, 2023-12-30 Sat
    assert [counts[label] for label in ("Dom", "Seg", "Qua", "Sáb")] == [0, 1, 3, 2]
