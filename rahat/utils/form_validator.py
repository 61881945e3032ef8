from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rahat.utils.errors import ReportValidationError


class LocationForm(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ReportForm(BaseModel):
    # Fields the server assigns (id, created_at, status) are silently dropped
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    location: LocationForm


class MissingPersonForm(ReportForm):
    name: str = Field(min_length=1, max_length=100)
    age: int = Field(gt=0, le=150)
    gender: Literal["male", "female", "other"]
    last_seen: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    contact_info: str = Field(min_length=1, max_length=200)


class DamageReportForm(ReportForm):
    type: Literal["building", "road", "bridge", "power", "water", "other"]
    severity: Literal["low", "medium", "high"] = "medium"
    description: str = Field(min_length=1, max_length=1000)


class SupplyRequestForm(ReportForm):
    type: Literal["food", "water", "medicine", "clothing", "shelter", "other"]
    quantity: int = Field(gt=0)
    urgency: Literal["low", "medium", "high"] = "medium"
    description: str = Field(default="", max_length=1000)
    contact_info: str = Field(min_length=1, max_length=200)


class SOSAlertForm(ReportForm):
    name: str = Field(min_length=1, max_length=100)
    contact_info: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)


def _field_errors(e: ValidationError):
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
        }
        for err in e.errors()
    ]


def validate_report_form(kind, payload) -> ReportForm:
    if not isinstance(payload, dict):
        raise ReportValidationError(
            [{"field": "", "message": "Submission must be a JSON object"}]
        )

    try:
        return kind.form.model_validate(payload)
    except ValidationError as e:
        raise ReportValidationError(_field_errors(e))


def build_record(kind, form: ReportForm):
    data = form.model_dump(exclude={"location"})
    data["lat"] = form.location.lat
    data["lng"] = form.location.lng

    if kind.initial_status is not None:
        data["status"] = kind.initial_status

    return kind.model(**data)
