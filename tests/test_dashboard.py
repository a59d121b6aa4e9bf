def test_dashboard_for_owner(client, login_as):
    response = client.get("/dashboard/", headers=login_as("owner"))
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "owner"
    assert len(body["permissions"]) == 15
    assert set(body["sections"]) == {"announcements", "units", "members", "settings", "billing"}
    assert body["actions"]["org"] == ["create", "edit", "delete"]
    assert body["adminPanel"] == "/dashboard/admin"
    assert "passwordHash" not in body["profile"]


def test_dashboard_for_manager(client, login_as):
    body = client.get("/dashboard/", headers=login_as("manager")).json()
    assert set(body["sections"]) == {"announcements", "units", "members", "settings"}
    assert body["actions"] == {
        "announcement": ["create", "edit"],
        "org": [],
        "member": ["create", "edit"],
    }
    assert body["adminPanel"] is None


def test_dashboard_for_guest(client, login_as):
    body = client.get("/dashboard/", headers=login_as("guest")).json()
    assert set(body["sections"]) == {"announcements", "units"}
    assert body["actions"] == {"announcement": [], "org": [], "member": []}


def test_admin_page(client, login_as):
    response = client.get("/dashboard/admin", headers=login_as("admin"))
    assert response.status_code == 200
    assert response.json()["page"] == "admin"


def test_admin_page_redirects_manager(client, login_as):
    response = client.get("/dashboard/admin", headers=login_as("manager"), follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


def test_announcement_management_page(client, login_as):
    assert client.get("/dashboard/announcements/manage", headers=login_as("manager")).status_code == 200
    response = client.get("/dashboard/announcements/manage", headers=login_as("staff"), follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"
