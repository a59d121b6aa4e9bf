def unit_counts(client, headers):
    return {unit["id"]: unit["members"] for unit in client.get("/organizations/", headers=headers).json()}


def test_list_sample_members(client, login_as):
    response = client.get("/members/", headers=login_as("staff"))
    assert response.status_code == 200
    members = response.json()
    assert [member["name"] for member in members] == ["John Admin", "Sarah Manager"]
    assert members[0]["units"] == ["1", "2"]
    assert members[0]["roles"] == ["Administrator"]


def test_guest_cannot_list_members(client, login_as):
    assert client.get("/members/", headers=login_as("guest")).status_code == 403


def test_filter_members(client, login_as):
    headers = login_as("staff")
    response = client.get("/members/", params={"unit": "2"}, headers=headers)
    assert [member["id"] for member in response.json()] == ["1"]
    response = client.get("/members/", params={"q": "sarah@"}, headers=headers)
    assert [member["id"] for member in response.json()] == ["2"]


def test_recalculate_unit_counts(client, login_as):
    headers = login_as("manager")
    response = client.post("/members/recalculate-unit-counts", headers=headers)
    assert response.status_code == 200
    assert response.json()["counts"] == {"1": 2, "2": 1, "3": 0, "4": 0}
    assert unit_counts(client, headers) == {"1": 2, "2": 1, "3": 0, "4": 0}


def test_member_writes_update_unit_counts(client, login_as):
    headers = login_as("owner")
    response = client.post("/members/", headers=headers, json={
        "name": "Nina New", "email": "nina@example.com", "roles": ["Staff"], "units": ["3", "1"],
    })
    assert response.status_code == 201
    member = response.json()
    assert member["status"] == "active"
    assert unit_counts(client, headers) == {"1": 3, "2": 1, "3": 1, "4": 0}

    response = client.patch(f"/members/{member['id']}", headers=headers, json={"units": ["4"]})
    assert response.status_code == 200
    assert response.json()["units"] == ["4"]
    assert unit_counts(client, headers) == {"1": 2, "2": 1, "3": 0, "4": 1}

    assert client.delete(f"/members/{member['id']}", headers=headers).status_code == 204
    assert unit_counts(client, headers) == {"1": 2, "2": 1, "3": 0, "4": 0}
    assert client.get(f"/members/{member['id']}", headers=headers).status_code == 404


def test_manager_cannot_delete_members(client, login_as):
    assert client.delete("/members/1", headers=login_as("manager")).status_code == 403


def test_staff_cannot_add_members(client, login_as):
    response = client.post("/members/", headers=login_as("staff"), json={
        "name": "Sneaky", "email": "sneaky@example.com",
    })
    assert response.status_code == 403


def test_invalid_member_role(client, login_as):
    response = client.post("/members/", headers=login_as("owner"), json={
        "name": "Odd", "email": "odd@example.com", "roles": ["Emperor"],
    })
    assert response.status_code == 400
