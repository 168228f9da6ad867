# File: tests/test_sessions.py

from datetime import datetime, timedelta

import pytest

from app.core.errors import ValidationFailed
from app.core.security import VerifiedIdentity
from app.models.session import MassageSession
from app.schemas.session import SessionCreate
from app.services import auth_service, session_service
from helpers import auth_headers, count_rows, session_payload


def test_create_session(client):
    started = datetime(2026, 3, 1, 20, 0)
    resp = client.post(
        "/api/sessions",
        headers=auth_headers(),
        json=session_payload(started, minutes=20, heatEnabled=True, notes="neck"),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    session = body["session"]
    assert isinstance(session["session_id"], int)
    assert session["duration"] == 20
    assert session["heatEnabled"] is True
    assert session["rotateEnabled"] is True
    assert session["notes"] == "neck"
    assert session["startedAt"].startswith("2026-03-01T20:00")


def test_create_session_converts_timezone_to_utc(client):
    resp = client.post(
        "/api/sessions",
        headers=auth_headers(),
        json=session_payload(datetime(2026, 3, 1, 10, 0), startedAt="2026-03-01T17:00:00+07:00",
                             endedAt="2026-03-01T17:15:00+07:00"),
    )
    assert resp.status_code == 200
    assert resp.json()["session"]["startedAt"].startswith("2026-03-01T10:00")


def test_session_end_must_follow_start(client, database):
    started = datetime(2026, 3, 1, 20, 0)
    payload = session_payload(started, endedAt=started.isoformat())
    resp = client.post("/api/sessions", headers=auth_headers(), json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert count_rows(database, MassageSession) == 0


@pytest.mark.parametrize(
    "overrides",
    [{"level": 0}, {"level": 11}, {"duration": 0}, {"caloriesBurned": -1}],
)
def test_session_constraints(client, database, overrides):
    payload = session_payload(datetime(2026, 3, 1, 20, 0), **overrides)
    resp = client.post("/api/sessions", headers=auth_headers(), json=payload)
    assert resp.status_code == 400
    assert count_rows(database, MassageSession) == 0


def test_create_session_store_rejects_inverted_times(db_session):
    user, _ = auth_service.get_or_create_user(db_session, VerifiedIdentity("uid_1", "a@x.com"))
    started = datetime(2026, 3, 1, 20, 0)
    payload = SessionCreate(
        level=3,
        duration=10,
        started_at=started,
        ended_at=started - timedelta(minutes=10),
    )
    with pytest.raises(ValidationFailed):
        session_service.create_session(db_session, user.user_id, payload)


def test_list_sessions_paginated_newest_first(client):
    base = datetime(2026, 2, 1, 9, 0)
    for i in range(5):
        client.post(
            "/api/sessions",
            headers=auth_headers(),
            json=session_payload(base + timedelta(days=i), level=i + 1),
        )

    resp = client.get("/api/sessions", headers=auth_headers(), params={"limit": 2, "offset": 0})
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    levels = [s["level"] for s in body["sessions"]]
    assert levels == [5, 4]

    resp = client.get("/api/sessions", headers=auth_headers(), params={"limit": 2, "offset": 4})
    assert [s["level"] for s in resp.json()["sessions"]] == [1]


def test_list_sessions_defaults(client):
    resp = client.get("/api/sessions", headers=auth_headers())
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "count": 0, "sessions": []}


def test_list_sessions_rejects_bad_limit(client):
    resp = client.get("/api/sessions", headers=auth_headers(), params={"limit": 0})
    assert resp.status_code == 400


def test_sessions_are_scoped_to_caller(client):
    client.post(
        "/api/sessions",
        headers=auth_headers("token-a"),
        json=session_payload(datetime(2026, 2, 1, 9, 0)),
    )
    resp = client.get("/api/sessions", headers=auth_headers("token-b"))
    assert resp.json()["count"] == 0

    stats = client.get("/api/sessions/statistics", headers=auth_headers("token-b"))
    assert stats.json()["statistics"]["totalSessions"] == 0


def test_statistics_window(client):
    now = session_service.utcnow()
    recent = [
        session_payload(now - timedelta(days=1), minutes=10, level=2, heatEnabled=True, caloriesBurned=50),
        session_payload(now - timedelta(days=2), minutes=20, level=4, heatEnabled=False, caloriesBurned=70),
    ]
    old = session_payload(now - timedelta(days=60), minutes=30, level=9, heatEnabled=True)
    for payload in recent + [old]:
        resp = client.post("/api/sessions", headers=auth_headers(), json=payload)
        assert resp.status_code == 200

    resp = client.get("/api/sessions/statistics", headers=auth_headers())
    assert resp.status_code == 200
    stats = resp.json()["statistics"]
    assert stats == {
        "totalSessions": 2,
        "totalMinutes": 30,
        "totalCalories": 120,
        "avgLevel": 3.0,
        "heatUsagePercent": 50,
        "dateRange": 30,
    }

    wide = client.get("/api/sessions/statistics", headers=auth_headers(), params={"days": 90})
    assert wide.json()["statistics"]["totalSessions"] == 3
    assert wide.json()["statistics"]["dateRange"] == 90


def test_statistics_without_sessions(client):
    resp = client.get("/api/sessions/statistics", headers=auth_headers())
    stats = resp.json()["statistics"]
    assert stats["totalSessions"] == 0
    assert stats["avgLevel"] == 0
    assert stats["heatUsagePercent"] == 0
