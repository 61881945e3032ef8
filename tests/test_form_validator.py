import pytest

from rahat.utils.errors import ReportValidationError
from rahat.utils.form_validator import build_record, validate_report_form
from rahat.utils.report_kinds import DAMAGE, MISSING, SUPPLY


def _fields(exc_info):
    return {err["field"] for err in exc_info.value.errors}


def test_valid_supply_form_builds_pending_record(supply_payload):
    form = validate_report_form(SUPPLY, supply_payload)
    record = build_record(SUPPLY, form)

    assert record.status == "pending"
    assert record.quantity == 5
    assert (record.lat, record.lng) == (19.076, 72.8777)


def test_damage_record_has_no_status(damage_payload):
    record = build_record(DAMAGE, validate_report_form(DAMAGE, damage_payload))

    assert not hasattr(record, "status")


@pytest.mark.parametrize("quantity", [0, -3, "lots"])
def test_quantity_must_be_positive_integer(supply_payload, quantity):
    supply_payload["quantity"] = quantity

    with pytest.raises(ReportValidationError) as exc_info:
        validate_report_form(SUPPLY, supply_payload)

    assert _fields(exc_info) == {"quantity"}


def test_blank_strings_count_as_missing(missing_payload):
    missing_payload["name"] = "   "
    missing_payload["contact_info"] = ""

    with pytest.raises(ReportValidationError) as exc_info:
        validate_report_form(MISSING, missing_payload)

    assert _fields(exc_info) == {"name", "contact_info"}


@pytest.mark.parametrize(
    "location, field",
    [
        ({"lat": 91, "lng": 0}, "location.lat"),
        ({"lat": 0, "lng": -181}, "location.lng"),
        (None, "location"),
    ],
)
def test_location_bounds(damage_payload, location, field):
    damage_payload["location"] = location

    with pytest.raises(ReportValidationError) as exc_info:
        validate_report_form(DAMAGE, damage_payload)

    assert field in _fields(exc_info)


def test_server_assigned_fields_are_ignored(supply_payload):
    supply_payload.update(id="client-id", created_at="2020-01-01", status="fulfilled")

    record = build_record(SUPPLY, validate_report_form(SUPPLY, supply_payload))

    assert record.status == "pending"
    assert str(record.id) != "client-id"


def test_unknown_severity_rejected(damage_payload):
    damage_payload["severity"] = "catastrophic"

    with pytest.raises(ReportValidationError):
        validate_report_form(DAMAGE, damage_payload)


def test_non_object_payload_rejected():
    with pytest.raises(ReportValidationError):
        validate_report_form(SUPPLY, ["not", "a", "form"])
