from dashboard.core.sheets.codec import decode_row
from dashboard.features.members.schemas import MemberResponse, legacy_unit


def test_legacy_single_unit_row():
    member = MemberResponse.model_validate(decode_row({
        "id": "7", "name": "Old Row", "email": "old@example.com", "roles": '["Staff"]', "unit": "3",
    }, 6))
    assert member.units == ["3"]


def test_units_list_wins_over_legacy_unit():
    member = MemberResponse.model_validate(decode_row({
        "id": "7", "name": "Row", "email": "row@example.com", "units": '["1","2"]', "unit": "1",
    }, 6))
    assert member.units == ["1", "2"]


def test_unparseable_roles_read_as_empty():
    member = MemberResponse.model_validate(decode_row({
        "id": "7", "name": "Row", "email": "row@example.com", "roles": "[Administrator",
    }, 6))
    assert member.roles == []


def test_blank_cells_use_defaults():
    member = MemberResponse.model_validate({
        "id": "7", "name": "Row", "email": "row@example.com", "roles": "", "units": "", "status": "",
    })
    assert member.roles == []
    assert member.units == []
    assert member.status.value == "active"


def test_legacy_unit_column():
    assert legacy_unit(["4", "1"]) == "4"
    assert legacy_unit([]) == ""
    assert legacy_unit(None) == ""
