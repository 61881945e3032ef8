from fastapi import APIRouter, Depends

from rahat.utils.markers import MarkerFilter, aggregate_markers
from rahat.utils.report_kinds import REPORT_KINDS
from rahat.utils.report_store import ReportStore, get_report_store

router = APIRouter()


@router.get("/markers")
async def get_markers(
    missing: bool = True,
    damage: bool = True,
    supply: bool = True,
    sos: bool = True,
    store: ReportStore = Depends(get_report_store),
):
    filters = MarkerFilter(missing=missing, damage=damage, supply=supply, sos=sos)

    # skip fetching categories that are filtered out
    kinds = [kind for kind in REPORT_KINDS if getattr(filters, kind.tag)]
    snapshot = await store.snapshot(kinds)

    markers = aggregate_markers(
        missing=snapshot["missing"],
        damage=snapshot["damage"],
        supply=snapshot["supply"],
        sos=snapshot["sos"],
        filters=filters,
    )

    return {
        "markers": markers,
        "errors": snapshot.errors,
    }
