def test_list_sample_notifications(client, login_as):
    response = client.get("/notifications/", headers=login_as("guest"))
    assert response.status_code == 200
    body = response.json()
    assert len(body["notifications"]) == 5
    assert body["unreadCount"] == 2


def test_mark_one_read(client, login_as):
    response = client.post("/notifications/read", json={"id": "1"}, headers=login_as("staff"))
    assert response.status_code == 200
    assert response.json()["unreadCount"] == 1


def test_mark_all_read(client, login_as):
    headers = login_as("staff")
    response = client.post("/notifications/read", json={"markAll": True}, headers=headers)
    assert response.json()["unreadCount"] == 0
    assert all(item["isRead"] for item in client.get("/notifications/", headers=headers).json()["notifications"])


def test_mark_unknown_read(client, login_as):
    response = client.post("/notifications/read", json={"id": "missing"}, headers=login_as("staff"))
    assert response.status_code == 404


def test_mark_read_needs_a_target(client, login_as):
    response = client.post("/notifications/read", json={}, headers=login_as("staff"))
    assert response.status_code == 400
