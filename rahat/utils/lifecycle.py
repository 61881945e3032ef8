import logging
from typing import Iterable, List, Optional

from rahat.utils.errors import AlreadyTerminal, PermissionDenied
from rahat.utils.report_kinds import get_report_kind, kind_of

logger = logging.getLogger(__name__)


def is_open(record) -> bool:
    """
    Whether a record still needs attention.

    Damage reports have no status and always count as open.
    """
    kind = kind_of(record)

    if not kind.has_lifecycle:
        return True

    return record.status == kind.initial_status


def open_records(records: Iterable) -> List:
    return [record for record in records if is_open(record)]


def can_transition(actor_role: Optional[str], report_kind) -> bool:
    kind = get_report_kind(report_kind)

    if not actor_role or not kind.has_lifecycle:
        return False

    return actor_role == kind.transition_role


def transition(record, actor_role: Optional[str]):
    kind = kind_of(record)

    if not can_transition(actor_role, kind):
        logger.warning(
            "Role %r tried to close %s %s", actor_role, kind.name, record.id
        )
        raise PermissionDenied(f"Role {actor_role!r} cannot update {kind.label} reports")

    if record.status == kind.terminal_status:
        raise AlreadyTerminal(f"{kind.label} is already marked {kind.terminal_status}")

    record.status = kind.terminal_status

    return record
