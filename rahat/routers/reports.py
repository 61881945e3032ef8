from fastapi import APIRouter, Body, Depends

from rahat.utils.auth_helper import get_current_actor_required, get_responder_required, get_session_context
from rahat.utils.report_kinds import SOS, get_report_kind
from rahat.utils.report_store import ReportStore, get_report_store, serialize_record
from rahat.utils.lifecycle import open_records
from rahat.utils.session_provider import Actor, SessionContext


router = APIRouter()

QUICK_SOS_DEFAULTS = {
    "name": "Emergency SOS",
    "contact_info": "Emergency Contact",
    "description": "Emergency SOS signal sent from mobile device",
}


@router.post("/sos/quick", status_code=201)
async def send_quick_sos(
    location: dict = Body(...),
    store: ReportStore = Depends(get_report_store),
):
    """
    One-tap SOS from a device's live location.
    """
    payload = dict(QUICK_SOS_DEFAULTS, location=location)
    alert = await store.create(SOS, payload)

    return serialize_record(alert)


@router.post("/{kind}", status_code=201)
async def submit_report(
    kind: str,
    payload: dict = Body(...),
    store: ReportStore = Depends(get_report_store),
):
    """
    Public submission endpoint shared by all report kinds.
    """
    record = await store.create(kind, payload)

    return serialize_record(record)


@router.get("/{kind}")
async def list_reports(
    kind: str,
    open_only: bool = False,
    store: ReportStore = Depends(get_report_store),
    actor: Actor = Depends(get_responder_required),
):
    report_kind = get_report_kind(kind)
    records, error = await store.try_list_all(report_kind)

    if open_only:
        records = open_records(records)

    return {
        "kind": report_kind.tag,
        "records": [serialize_record(record) for record in records],
        "error": error,
    }


@router.get("/{kind}/{record_id}")
async def get_report(
    kind: str,
    record_id: str,
    store: ReportStore = Depends(get_report_store),
    actor: Actor = Depends(get_responder_required),
):
    record = await store.get(kind, record_id)

    return serialize_record(record)


@router.post("/{kind}/{record_id}/transition")
async def transition_report(
    kind: str,
    record_id: str,
    store: ReportStore = Depends(get_report_store),
    context: SessionContext = Depends(get_session_context),
    actor: Actor = Depends(get_current_actor_required),
):
    # only act on the authoritative role, never the token's cached one
    actor = context.require_resolved()

    record = await store.update_status(kind, record_id, actor.role)

    return {
        "ok": True,
        "record": serialize_record(record),
    }
