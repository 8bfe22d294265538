"""
Integration tests for the HTTP API (FastAPI TestClient, real SQLite storage).
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from namaaz_tracker.api import create_app

PREFIX = "/api/components/prayer_log"


@pytest.fixture
def client(tracker_app):
    return TestClient(create_app(tracker_app))


class TestComponents:

    def test_lists_views(self, client):
        response = client.get("/api/components")
        assert response.status_code == 200
        by_name = {c["name"]: c["enabled"] for c in response.json()}
        assert by_name == {"Daily": True, "Monthly": False, "Yearly": False}


class TestDays:

    def test_get_day_materializes(self, client, tracker_app):
        response = client.get(f"{PREFIX}/days/2024-03-01")
        assert response.status_code == 200
        body = response.json()
        assert body["readable_date"] == "Friday, March 1, 2024"
        assert body["is_friday"] is True
        assert body["completed_count"] == 0
        assert list(body["prayers"]) == ["Fajr", "Dhuhr", "Asr", "Maghrib", "Isha"]
        assert "2024-03-01" in tracker_app.state.store

    def test_put_prayer(self, client):
        response = client.put(f"{PREFIX}/days/2024-03-04/Fajr", json={"status": "jamaat"})
        assert response.status_code == 200
        body = response.json()
        assert body["persisted"] is True
        assert body["prayers"]["Fajr"] == {"status": "jamaat", "points": 5}
        assert body["completed_count"] == 1

    def test_put_friday_dhuhr(self, client):
        response = client.put(f"{PREFIX}/days/2024-03-01/Dhuhr", json={"status": "qaza"})
        assert response.json()["prayers"]["Dhuhr"]["points"] == 10

    def test_unknown_prayer(self, client):
        response = client.put(f"{PREFIX}/days/2024-03-04/Witr", json={"status": "jamaat"})
        assert response.status_code == 404

    def test_invalid_status(self, client):
        response = client.put(f"{PREFIX}/days/2024-03-04/Fajr", json={"status": "late"})
        assert response.status_code == 422

    def test_invalid_date(self, client):
        assert client.get(f"{PREFIX}/days/2024-02-30").status_code == 422
        assert client.put(f"{PREFIX}/days/soon/Fajr", json={"status": "jamaat"}).status_code == 422


class TestStats:

    def test_stats_follow_writes(self, client):
        assert client.get(f"{PREFIX}/stats").json() == {"total_points": 0, "current_streak": 0}

        today = date.today().isoformat()
        for prayer in ("Fajr", "Dhuhr", "Asr", "Maghrib", "Isha"):
            client.put(f"{PREFIX}/days/{today}/{prayer}", json={"status": "individual"})

        stats = client.get(f"{PREFIX}/stats").json()
        assert stats["current_streak"] == 1
        expected = 22 if date.today().weekday() == 4 else 15
        assert stats["total_points"] == expected


class TestCalendars:

    def test_month(self, client, tracker_app):
        client.put(f"{PREFIX}/days/2023-11-02/Fajr", json={"status": "jamaat"})
        response = client.get(f"{PREFIX}/months/2023/11")
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "November"
        assert sum(1 for c in body["cells"] if c["is_empty"]) == 3
        assert len(body["cells"]) == 33
        assert body["trailing_padding"] == 2
        day_two = next(c for c in body["cells"] if c["date_key"] == "2023-11-02")
        assert day_two["completed_count"] == 1
        assert day_two["percentage"] == 20
        # Browsing did not add days
        assert tracker_app.state.store.date_keys() == ["2023-11-02"]

    def test_invalid_month(self, client):
        assert client.get(f"{PREFIX}/months/2023/13").status_code == 422

    def test_year(self, client, tracker_app):
        response = client.get(f"{PREFIX}/years/2023")
        assert response.status_code == 200
        grids = response.json()
        assert [g["month"] for g in grids] == list(range(1, 13))
        assert grids[0]["title"] == "January"
        assert len(tracker_app.state.store) == 0
