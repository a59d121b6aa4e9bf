from datetime import datetime, timedelta, timezone

import pytest


def ids(response):
    return [announcement["id"] for announcement in response.json()]


def test_list_sample_announcements(client, login_as):
    response = client.get("/announcements/", headers=login_as("guest"))
    assert response.status_code == 200
    assert ids(response) == ["1", "2"]
    assert response.json()[1]["type"] == "scheduled"


@pytest.mark.parametrize("tab, expected", [
    ("all", ["1", "2"]),
    ("scheduled", ["2"]),
    ("drafts", []),
    ("polls", []),
])
def test_tabs(client, login_as, tab, expected):
    response = client.get("/announcements/", params={"tab": tab}, headers=login_as("staff"))
    assert ids(response) == expected


def test_inactive_announcement_becomes_draft(client, login_as):
    headers = login_as("manager")
    response = client.post("/announcements/", headers=headers, json={
        "title": "Holiday hours", "content": "Closed Monday", "isActive": False, "type": "basic",
    })
    assert response.status_code == 201
    created = response.json()
    assert created["type"] == "draft"

    response = client.get("/announcements/", params={"tab": "drafts"}, headers=headers)
    assert ids(response) == [created["id"]]


def test_scheduled_date_marks_announcement_scheduled(client, login_as):
    later = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
    response = client.post("/announcements/", headers=login_as("owner"), json={
        "title": "Town hall", "content": "Friday at noon", "scheduledFor": later,
    })
    assert response.json()["type"] == "scheduled"


def test_polls_keep_their_type_when_scheduled(client, login_as):
    headers = login_as("owner")
    later = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
    response = client.post("/announcements/", headers=headers, json={
        "title": "Lunch vote", "content": "Pizza or tacos?", "type": "poll", "scheduledFor": later,
    })
    poll = response.json()
    assert poll["type"] == "poll"

    response = client.get("/announcements/", params={"tab": "polls"}, headers=headers)
    assert ids(response) == [poll["id"]]


def test_update_rederives_type(client, login_as):
    headers = login_as("manager")
    response = client.patch("/announcements/1", headers=headers, json={"isActive": False})
    assert response.status_code == 200
    assert response.json()["type"] == "draft"
    assert client.get("/announcements/1", headers=headers).json()["type"] == "draft"


@pytest.mark.parametrize("field", ["title", "isActive", "type"])
def test_update_with_null_leaves_field_unchanged(client, login_as, field):
    headers = login_as("manager")
    response = client.patch("/announcements/1", headers=headers, json={field: None})
    assert response.status_code == 200
    assert response.json()["title"] == "Welcome to our platform"
    assert response.json()["type"] == "basic"
    assert client.get("/announcements/1", headers=headers).json()["title"] == "Welcome to our platform"


def test_update_with_null_schedule_clears_it(client, login_as):
    headers = login_as("manager")
    response = client.patch("/announcements/2", headers=headers, json={"scheduledFor": None})
    assert response.status_code == 200
    assert response.json()["scheduledFor"] is None
    assert client.get("/announcements/2", headers=headers).json()["scheduledFor"] is None


def test_staff_cannot_create(client, login_as):
    response = client.post("/announcements/", headers=login_as("staff"), json={
        "title": "Hi", "content": "There",
    })
    assert response.status_code == 403


def test_manager_cannot_delete_but_admin_can(client, login_as):
    assert client.delete("/announcements/1", headers=login_as("manager")).status_code == 403
    headers = login_as("admin")
    assert client.delete("/announcements/1", headers=headers).status_code == 204
    assert client.get("/announcements/1", headers=headers).status_code == 404


def test_attachments(client, login_as):
    response = client.post("/announcements/", headers=login_as("owner"), json={
        "title": "Handbook", "content": "See attached",
        "attachments": [{"name": "handbook.pdf", "url": "https://files.example.com/h.pdf",
                         "type": "application/pdf", "size": 1024}],
    })
    assert response.status_code == 201
    assert response.json()["attachments"][0]["name"] == "handbook.pdf"
