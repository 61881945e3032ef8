import pytest

from factories import damage_report, missing_person, sos_alert, supply_request
from rahat.utils.errors import AlreadyTerminal, InvalidReportKind, PermissionDenied
from rahat.utils.lifecycle import can_transition, is_open, open_records, transition


def test_is_open_follows_initial_status():
    assert is_open(missing_person("missing"))
    assert not is_open(missing_person("found"))
    assert is_open(supply_request("pending"))
    assert not is_open(supply_request("fulfilled"))
    assert is_open(sos_alert("active"))
    assert not is_open(sos_alert("resolved"))


def test_damage_reports_always_count_as_open():
    assert is_open(damage_report())


def test_open_records_filters_closed_ones():
    records = [supply_request("pending"), supply_request("fulfilled"), supply_request("pending")]
    assert len(open_records(records)) == 2


@pytest.mark.parametrize(
    "role, kind, expected",
    [
        ("ngo", "SupplyRequest", True),
        ("ngo", "supply", True),
        ("ngo", "MissingPerson", False),
        ("ngo", "SOSAlert", False),
        ("sar", "MissingPerson", True),
        ("sar", "SOSAlert", True),
        ("sar", "SupplyRequest", False),
        ("citizen", "SupplyRequest", False),
    ],
)
def test_can_transition_matrix(role, kind, expected):
    assert can_transition(role, kind) is expected


@pytest.mark.parametrize("role", ["ngo", "sar", "citizen", None, ""])
def test_nobody_can_transition_damage_reports(role):
    assert can_transition(role, "DamageReport") is False


@pytest.mark.parametrize("role", [None, "", "admin"])
def test_unknown_role_has_no_permissions(role):
    for kind in ("missing", "damage", "supply", "sos"):
        assert can_transition(role, kind) is False


def test_unknown_kind_is_rejected():
    with pytest.raises(InvalidReportKind):
        can_transition("ngo", "Earthquake")

    with pytest.raises(InvalidReportKind):
        is_open(object())


def test_transition_sets_terminal_status_only():
    request = supply_request("pending", description="Rice bags")
    created_at = request.created_at
    record_id = request.id

    result = transition(request, "ngo")

    assert result is request
    assert request.status == "fulfilled"
    assert request.created_at == created_at
    assert request.id == record_id
    assert request.description == "Rice bags"
    assert request.quantity == 20


def test_second_transition_fails_and_leaves_record_unchanged():
    person = missing_person("missing")
    transition(person, "sar")

    with pytest.raises(AlreadyTerminal):
        transition(person, "sar")

    assert person.status == "found"


def test_transition_requires_matching_role():
    alert = sos_alert("active")

    with pytest.raises(PermissionDenied):
        transition(alert, "ngo")

    assert alert.status == "active"


def test_damage_report_cannot_be_transitioned():
    with pytest.raises(PermissionDenied):
        transition(damage_report(), "sar")


def test_permission_checked_before_terminal_state():
    with pytest.raises(PermissionDenied):
        transition(supply_request("fulfilled"), None)
