"""Tests for the HTTP layer: auth, record endpoints and analytics endpoints."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, patch

import jwt
import pytest
from fastapi.testclient import TestClient

from lunara.tests.conftest import TEST_JWT_SECRET, TEST_USER_ID, mood_row, period_row


# ---------------------------------------------------------------------------
# Auth / system
# ---------------------------------------------------------------------------


class TestAuth:
    def test_health_is_public(self, client: TestClient) -> None:
        with patch("lunara.routers.health.get_pool", side_effect=RuntimeError("no pool")):
            response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"] == "unreachable"

    def test_missing_token_rejected(self, client: TestClient) -> None:
        response = client.get("/api/v1/periods")
        assert response.status_code == 401

    def test_bad_signature_rejected(self, client: TestClient) -> None:
        forged = jwt.encode(
            {"user": {"id": str(TEST_USER_ID)}},
            "some-other-secret-0123456789abcdef",
            algorithm="HS256",
        )
        response = client.get(
            "/api/v1/periods", headers={"Authorization": f"Bearer {forged}"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token_rejected(self, client: TestClient) -> None:
        expired = jwt.encode(
            {"sub": str(TEST_USER_ID), "exp": datetime.now(timezone.utc) - timedelta(hours=1)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        response = client.get("/api/v1/periods", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token expired"

    def test_token_without_user_id_rejected(self, client: TestClient) -> None:
        anonymous = jwt.encode({"email": "a@example.com"}, TEST_JWT_SECRET, algorithm="HS256")
        response = client.get("/api/v1/periods", headers={"x-auth-token": anonymous})
        assert response.status_code == 401

    def test_x_auth_token_header_accepted(self, client: TestClient, token: str) -> None:
        with patch("lunara.routers.periods.fetch", new=AsyncMock(return_value=[])) as fetch:
            response = client.get("/api/v1/periods", headers={"x-auth-token": token})
        assert response.status_code == 200
        assert response.json() == []
        assert fetch.await_args.args[1] == TEST_USER_ID


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------


class TestPeriodEndpoints:
    def test_cycle_stats(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        regular_period_rows: list[dict[str, Any]],
    ) -> None:
        with patch(
            "lunara.routers.periods.fetch", new=AsyncMock(return_value=regular_period_rows)
        ):
            response = client.get("/api/v1/periods/stats/cycle", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {
            "cycles": [28, 28],
            "period_lengths": [5, 5, 6],
            "avg_cycle_length": 28,
            "avg_period_length": 5,
            "next_period": {
                "predicted_start_date": "2024-03-25",
                "predicted_end_date": "2024-03-29",
            },
        }

    def test_cycle_stats_not_enough_data(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        rows = [period_row(date(2024, 1, 1), date(2024, 1, 5))]
        with patch("lunara.routers.periods.fetch", new=AsyncMock(return_value=rows)):
            response = client.get("/api/v1/periods/stats/cycle", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Not enough period data to calculate stats"

    def test_status_today_fertile(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        regular_period_rows: list[dict[str, Any]],
    ) -> None:
        with patch(
            "lunara.routers.periods.fetch", new=AsyncMock(return_value=regular_period_rows)
        ):
            response = client.get(
                "/api/v1/periods/status/today",
                params={"today": "2024-03-10"},
                headers=auth_headers,
            )
        assert response.status_code == 200
        assert response.json() == {
            "day_in_cycle": 14,
            "status": "Fertile",
            "message": "Higher chance to get pregnant",
        }

    def test_status_today_without_history_is_null(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        with patch("lunara.routers.periods.fetch", new=AsyncMock(return_value=[])):
            response = client.get("/api/v1/periods/status/today", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() is None

    def test_create_period(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        stored = period_row(date(2024, 4, 1), date(2024, 4, 5), symptoms=["cramps"])
        with patch(
            "lunara.routers.periods.fetchrow", new=AsyncMock(return_value=stored)
        ) as fetchrow:
            response = client.post(
                "/api/v1/periods",
                json={"start_date": "2024-04-01", "end_date": "2024-04-05", "symptoms": ["cramps"]},
                headers=auth_headers,
            )
        assert response.status_code == 201
        assert response.json()["symptoms"] == ["cramps"]
        assert fetchrow.await_args.args[1:4] == (TEST_USER_ID, date(2024, 4, 1), date(2024, 4, 5))

    def test_create_period_end_before_start(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/periods",
            json={"start_date": "2024-04-05", "end_date": "2024-04-01"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_get_missing_period(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        with patch("lunara.routers.periods.fetchrow", new=AsyncMock(return_value=None)):
            response = client.get(f"/api/v1/periods/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_update_without_fields(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.patch(f"/api/v1/periods/{uuid.uuid4()}", json={}, headers=auth_headers)
        assert response.status_code == 400

    def test_update_period(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        stored = period_row(date(2024, 4, 1), date(2024, 4, 6))
        with patch(
            "lunara.routers.periods.fetchrow", new=AsyncMock(return_value=stored)
        ) as fetchrow:
            response = client.patch(
                f"/api/v1/periods/{stored['period_id']}",
                json={"end_date": "2024-04-06"},
                headers=auth_headers,
            )
        assert response.status_code == 200
        assert response.json()["end_date"] == "2024-04-06"
        assert "end_date = $3" in fetchrow.await_args.args[0]

    @pytest.mark.parametrize("field", ["start_date", "symptoms"])
    def test_update_null_required_field_rejected(
        self, client: TestClient, auth_headers: dict[str, str], field: str
    ) -> None:
        with patch("lunara.routers.periods.fetchrow", new=AsyncMock()) as fetchrow:
            response = client.patch(
                f"/api/v1/periods/{uuid.uuid4()}", json={field: None}, headers=auth_headers
            )
        assert response.status_code == 422
        fetchrow.assert_not_awaited()

    def test_update_null_optional_field_allowed(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        stored = period_row(date(2024, 4, 1))
        with patch(
            "lunara.routers.periods.fetchrow", new=AsyncMock(return_value=stored)
        ) as fetchrow:
            response = client.patch(
                f"/api/v1/periods/{stored['period_id']}",
                json={"end_date": None},
                headers=auth_headers,
            )
        assert response.status_code == 200
        assert fetchrow.await_args.args[3] is None

    def test_delete_missing_period(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        with patch("lunara.routers.periods.execute", new=AsyncMock(return_value="DELETE 0")):
            response = client.delete(f"/api/v1/periods/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_delete_period(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        with patch("lunara.routers.periods.execute", new=AsyncMock(return_value="DELETE 1")):
            response = client.delete(f"/api/v1/periods/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 204


# ---------------------------------------------------------------------------
# Moods
# ---------------------------------------------------------------------------


class TestMoodEndpoints:
    def test_monthly_stats(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        rows = [
            mood_row(date(2024, 1, 3), "happy", 5),
            mood_row(date(2024, 1, 9), "happy", 6),
            mood_row(date(2024, 1, 15), "happy", 7),
            mood_row(date(2024, 1, 28), "sad", 4),
            mood_row(date(2024, 2, 2), "tired"),
        ]
        with patch("lunara.routers.moods.fetch", new=AsyncMock(return_value=rows)):
            response = client.get("/api/v1/moods/stats/monthly", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["2024-01", "2024-02"]
        assert body["2024-01"] == {
            "mood_counts": {"happy": 3, "sad": 1},
            "total_entries": 4,
            "avg_intensity": 5.5,
        }
        assert body["2024-02"]["avg_intensity"] == 0.0

    def test_create_mood(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        stored = mood_row(date(2024, 5, 1), "calm", 3)
        with patch(
            "lunara.routers.moods.fetchrow", new=AsyncMock(return_value=stored)
        ) as fetchrow:
            response = client.post(
                "/api/v1/moods",
                json={"mood_date": "2024-05-01", "mood": "calm", "intensity": 3},
                headers=auth_headers,
            )
        assert response.status_code == 201
        assert response.json()["mood"] == "calm"
        assert fetchrow.await_args.args[3] == "calm"

    def test_create_mood_unknown_value(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/moods", json={"mood": "ecstatic"}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_create_mood_intensity_out_of_range(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/moods", json={"mood": "sad", "intensity": 11}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_update_mood_stores_enum_value(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        stored = mood_row(date(2024, 5, 1), "irritable", 6)
        with patch(
            "lunara.routers.moods.fetchrow", new=AsyncMock(return_value=stored)
        ) as fetchrow:
            response = client.patch(
                f"/api/v1/moods/{stored['mood_id']}",
                json={"mood": "irritable"},
                headers=auth_headers,
            )
        assert response.status_code == 200
        assert fetchrow.await_args.args[3] == "irritable"

    @pytest.mark.parametrize("field", ["mood", "mood_date"])
    def test_update_null_required_field_rejected(
        self, client: TestClient, auth_headers: dict[str, str], field: str
    ) -> None:
        with patch("lunara.routers.moods.fetchrow", new=AsyncMock()) as fetchrow:
            response = client.patch(
                f"/api/v1/moods/{uuid.uuid4()}", json={field: None}, headers=auth_headers
            )
        assert response.status_code == 422
        fetchrow.assert_not_awaited()

    def test_get_missing_mood(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        with patch("lunara.routers.moods.fetchrow", new=AsyncMock(return_value=None)):
            response = client.get(f"/api/v1/moods/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404
