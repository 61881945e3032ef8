"""
Registry of the four report kinds.

Each kind is an independent record collection; this table is the one place that
knows how a kind is stored, validated, and which role may close it.
"""

from dataclasses import dataclass
from typing import Optional, Type

from pydantic import BaseModel
from sqlmodel import SQLModel

from rahat.models.damage_report import DamageReport
from rahat.models.missing_person import MissingPerson
from rahat.models.sos_alert import SOSAlert
from rahat.models.supply_request import SupplyRequest
from rahat.utils.errors import InvalidReportKind
from rahat.utils.form_validator import (
    DamageReportForm,
    MissingPersonForm,
    SOSAlertForm,
    SupplyRequestForm,
)

ROLE_NGO = "ngo"
ROLE_SAR = "sar"


@dataclass(frozen=True)
class ReportKind:
    tag: str
    name: str
    label: str
    model: Type[SQLModel]
    form: Type[BaseModel]
    initial_status: Optional[str] = None
    terminal_status: Optional[str] = None
    transition_role: Optional[str] = None

    @property
    def has_lifecycle(self) -> bool:
        return self.terminal_status is not None


MISSING = ReportKind(
    tag="missing",
    name="MissingPerson",
    label="Missing Person",
    model=MissingPerson,
    form=MissingPersonForm,
    initial_status="missing",
    terminal_status="found",
    transition_role=ROLE_SAR,
)

DAMAGE = ReportKind(
    tag="damage",
    name="DamageReport",
    label="Damage Report",
    model=DamageReport,
    form=DamageReportForm,
)

SUPPLY = ReportKind(
    tag="supply",
    name="SupplyRequest",
    label="Supply Request",
    model=SupplyRequest,
    form=SupplyRequestForm,
    initial_status="pending",
    terminal_status="fulfilled",
    transition_role=ROLE_NGO,
)

SOS = ReportKind(
    tag="sos",
    name="SOSAlert",
    label="SOS Alert",
    model=SOSAlert,
    form=SOSAlertForm,
    initial_status="active",
    terminal_status="resolved",
    transition_role=ROLE_SAR,
)

REPORT_KINDS = (MISSING, DAMAGE, SUPPLY, SOS)

_BY_KEY = {}
for _kind in REPORT_KINDS:
    _BY_KEY[_kind.tag] = _kind
    _BY_KEY[_kind.name] = _kind


def get_report_kind(kind) -> ReportKind:
    """Resolve a kind given as a ReportKind, a tag ("supply") or a name ("SupplyRequest")."""
    if isinstance(kind, ReportKind):
        return kind

    if isinstance(kind, str) and kind in _BY_KEY:
        return _BY_KEY[kind]

    raise InvalidReportKind(f"Unknown report kind: {kind!r}")


def kind_of(record) -> ReportKind:
    for kind in REPORT_KINDS:
        if isinstance(record, kind.model):
            return kind

    raise InvalidReportKind(f"Unknown report kind: {type(record).__name__}")
