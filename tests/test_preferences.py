# File: tests/test_preferences.py

import pytest

from app.core.errors import ValidationFailed
from app.core.security import VerifiedIdentity
from app.models.preference import Preference
from app.schemas.preference import PreferenceUpdate
from app.services import auth_service, preference_service
from helpers import auth_headers, count_rows

DEFAULTS = {
    "favoriteLevel": 3,
    "defaultDuration": 15,
    "enableHeatByDefault": False,
    "enableNotifications": True,
    "notificationTime": "20:00",
    "theme": "light",
    "language": "vi",
}


def test_first_read_creates_defaults(client, database):
    resp = client.get("/api/preferences", headers=auth_headers())
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["preferences"] == DEFAULTS
    assert count_rows(database, Preference) == 1


def test_repeated_reads_do_not_add_rows(client, database):
    for _ in range(3):
        client.get("/api/preferences", headers=auth_headers())
    client.get("/api/preferences", headers=auth_headers("token-b"))
    assert count_rows(database, Preference) == 2


def test_partial_update_only_touches_given_fields(client):
    client.put("/api/preferences", headers=auth_headers(), json={"favoriteLevel": 7, "language": "en"})

    resp = client.put("/api/preferences", headers=auth_headers(), json={"theme": "dark"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Preferences updated successfully"

    prefs = client.get("/api/preferences", headers=auth_headers()).json()["preferences"]
    assert prefs == {**DEFAULTS, "favoriteLevel": 7, "language": "en", "theme": "dark"}


def test_update_before_first_read(client, database):
    resp = client.put("/api/preferences", headers=auth_headers(), json={"enableNotifications": False})
    assert resp.status_code == 200
    assert resp.json()["preferences"] == {**DEFAULTS, "enableNotifications": False}
    assert count_rows(database, Preference) == 1


def test_null_field_is_ignored(client):
    resp = client.put("/api/preferences", headers=auth_headers(), json={"theme": None, "defaultDuration": 30})
    assert resp.status_code == 200
    assert resp.json()["preferences"]["theme"] == "light"
    assert resp.json()["preferences"]["defaultDuration"] == 30


@pytest.mark.parametrize(
    "payload",
    [
        {"theme": "neon"},
        {"language": "fr"},
        {"favoriteLevel": 11},
        {"defaultDuration": 0},
        {"notificationTime": "25:00"},
    ],
)
def test_invalid_values_are_rejected(client, payload):
    resp = client.put("/api/preferences", headers=auth_headers(), json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()

    prefs = client.get("/api/preferences", headers=auth_headers()).json()["preferences"]
    assert prefs == DEFAULTS


def test_update_changes_are_typed_fields_only():
    update = PreferenceUpdate(theme="dark")
    assert update.changes() == {"theme": "dark"}
    assert PreferenceUpdate.model_validate({"favoriteLevel": 4}).changes() == {"favorite_level": 4}


def test_service_rejects_bad_enum(db_session):
    user, _ = auth_service.get_or_create_user(db_session, VerifiedIdentity("uid_1", "a@x.com"))
    with pytest.raises(ValidationFailed):
        preference_service.update_preferences(
            db_session, user.user_id, PreferenceUpdate(theme="sepia")
        )
    prefs = preference_service.get_or_create_preferences(db_session, user.user_id)
    assert prefs.theme == "light"


def test_concurrent_first_read_reuses_row(db_session, database, monkeypatch):
    user, _ = auth_service.get_or_create_user(db_session, VerifiedIdentity("uid_1", "a@x.com"))
    with database.session() as other:
        other.add(Preference(user_id=user.user_id, theme="dark"))
        other.commit()

    real_find = preference_service.find_preferences
    calls = []

    def stale_then_real(db, user_id):
        calls.append(user_id)
        return None if len(calls) == 1 else real_find(db, user_id)

    monkeypatch.setattr(preference_service, "find_preferences", stale_then_real)
    prefs = preference_service.get_or_create_preferences(db_session, user.user_id)
    assert prefs.theme == "dark"
    assert count_rows(database, Preference) == 1
