from typing import Dict, List
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from rahat.utils.auth_helper import get_responder_required
from rahat.utils.lifecycle import can_transition, open_records
from rahat.utils.markers import Marker, aggregate_markers
from rahat.utils.report_kinds import REPORT_KINDS
from rahat.utils.report_store import ReportStore, get_report_store, serialize_record
from rahat.utils.session_provider import Actor

router = APIRouter()


# Response Models
class DashboardCounts(BaseModel):
    missing: int  # still missing
    damage: int  # all damage reports
    supply: int  # pending
    sos: int  # active


class DashboardResponse(BaseModel):
    actor: Actor
    counts: DashboardCounts
    reports: Dict[str, List[dict]]
    can_transition: Dict[str, bool]
    markers: List[Marker]
    errors: Dict[str, str]


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    store: ReportStore = Depends(get_report_store),
    actor: Actor = Depends(get_responder_required),
):
    """Open reports, counts and map markers for the signed-in responder"""
    snapshot = await store.snapshot()

    # open_records keeps every damage report
    reports = {kind.tag: open_records(snapshot[kind.tag]) for kind in REPORT_KINDS}

    return DashboardResponse(
        actor=actor,
        counts=DashboardCounts(**{tag: len(records) for tag, records in reports.items()}),
        reports={
            tag: [serialize_record(record) for record in records]
            for tag, records in reports.items()
        },
        can_transition={kind.tag: can_transition(actor.role, kind) for kind in REPORT_KINDS},
        markers=aggregate_markers(
            missing=snapshot["missing"],
            damage=snapshot["damage"],
            supply=snapshot["supply"],
            sos=snapshot["sos"],
        ),
        errors=snapshot.errors,
    )
