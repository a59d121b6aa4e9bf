def test_list_sample_units(client, login_as):
    response = client.get("/organizations/", headers=login_as("guest"))
    assert response.status_code == 200
    units = response.json()
    assert [unit["name"] for unit in units] == [
        "Operations Team", "North Location", "Sales Department", "Supervisor",
    ]
    assert units[1]["capacity"] == 50


def test_filter_units(client, login_as):
    headers = login_as("staff")
    response = client.get("/organizations/", params={"type": "location"}, headers=headers)
    assert [unit["id"] for unit in response.json()] == ["2"]

    response = client.get("/organizations/", params={"q": "SALES"}, headers=headers)
    assert [unit["id"] for unit in response.json()] == ["3"]

    response = client.get("/organizations/", params={"q": "supervisors"}, headers=headers)
    assert [unit["id"] for unit in response.json()] == ["4"]


def test_owner_manages_units(client, login_as):
    headers = login_as("owner")
    response = client.post("/organizations/", headers=headers, json={
        "name": "Night Shift", "type": "team", "description": "After hours",
    })
    assert response.status_code == 201
    unit = response.json()
    assert unit["members"] == 0
    assert unit["id"]

    response = client.patch(f"/organizations/{unit['id']}", headers=headers, json={"name": "Late Shift"})
    assert response.status_code == 200
    assert response.json()["name"] == "Late Shift"
    assert client.get(f"/organizations/{unit['id']}", headers=headers).json()["name"] == "Late Shift"

    assert client.delete(f"/organizations/{unit['id']}", headers=headers).status_code == 204
    assert client.get(f"/organizations/{unit['id']}", headers=headers).status_code == 404


def test_admin_edits_but_cannot_create_or_delete(client, login_as):
    headers = login_as("admin")
    assert client.patch("/organizations/1", headers=headers, json={"description": "Ops"}).status_code == 200
    assert client.post("/organizations/", headers=headers, json={"name": "X", "type": "team"}).status_code == 403
    assert client.delete("/organizations/1", headers=headers).status_code == 403


def test_staff_cannot_edit_units(client, login_as):
    response = client.patch("/organizations/1", headers=login_as("staff"), json={"name": "Mine"})
    assert response.status_code == 403
    assert response.json()["detail"] == "Permission denied: requires org:edit"


def test_unknown_unit(client, login_as):
    headers = login_as("owner")
    assert client.get("/organizations/missing", headers=headers).status_code == 404
    assert client.delete("/organizations/missing", headers=headers).status_code == 404


def test_invalid_unit_type(client, login_as):
    response = client.post("/organizations/", headers=login_as("owner"), json={"name": "Odd", "type": "guild"})
    assert response.status_code == 400
    assert "type" in response.json()
