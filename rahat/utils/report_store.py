import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from rahat.db.db import get_engine
from rahat.utils import lifecycle
from rahat.utils.errors import RecordNotFound, StoreUnavailable
from rahat.utils.form_validator import build_record, validate_report_form
from rahat.utils.report_kinds import REPORT_KINDS, get_report_kind, kind_of

logger = logging.getLogger(__name__)


@dataclass
class ReportSnapshot:
    records: Dict[str, List] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def __getitem__(self, tag: str) -> List:
        return self.records.get(tag, [])


class ReportStore:
    """
    Typed access to the four report collections.

    Every call opens its own Session and runs the blocking query in the threadpool,
    so several listings can be awaited together.
    """

    def __init__(self, engine):
        self.engine = engine

    # Reads

    def _list_sync(self, kind) -> List:
        with Session(self.engine) as session:
            return list(
                session.exec(select(kind.model).order_by(kind.model.created_at.desc())).all()
            )

    async def try_list_all(self, kind) -> Tuple[List, Optional[str]]:
        kind = get_report_kind(kind)

        try:
            return await run_in_threadpool(self._list_sync, kind), None
        except SQLAlchemyError as e:
            logger.error("Failed to list %s records: %s", kind.name, e, exc_info=True)
            return [], f"Could not load {kind.label.lower()}s"

    async def list_all(self, kind) -> List:
        records, _ = await self.try_list_all(kind)
        return records

    async def snapshot(self, kinds=REPORT_KINDS) -> ReportSnapshot:
        kinds = [get_report_kind(kind) for kind in kinds]
        results = await asyncio.gather(*(self.try_list_all(kind) for kind in kinds))

        snapshot = ReportSnapshot()
        for kind, (records, error) in zip(kinds, results):
            snapshot.records[kind.tag] = records
            if error:
                snapshot.errors[kind.tag] = error

        return snapshot

    def _get_sync(self, kind, record_id: uuid.UUID):
        with Session(self.engine) as session:
            record = session.get(kind.model, record_id)

        if not record:
            raise RecordNotFound(f"{kind.label} not found")

        return record

    async def get(self, kind, record_id):
        kind = get_report_kind(kind)
        record_id = _parse_id(kind, record_id)

        try:
            return await run_in_threadpool(self._get_sync, kind, record_id)
        except SQLAlchemyError as e:
            logger.error("Failed to load %s %s: %s", kind.name, record_id, e, exc_info=True)
            raise StoreUnavailable()

    # Writes

    def _create_sync(self, record):
        with Session(self.engine) as session:
            try:
                session.add(record)
                session.commit()
                session.refresh(record)
            except SQLAlchemyError:
                session.rollback()
                raise

        return record

    async def create(self, kind, payload: dict):
        kind = get_report_kind(kind)

        # validation errors never reach the store
        form = validate_report_form(kind, payload)
        record = build_record(kind, form)

        try:
            record = await run_in_threadpool(self._create_sync, record)
        except SQLAlchemyError as e:
            logger.error("Failed to create %s: %s", kind.name, e, exc_info=True)
            raise StoreUnavailable()

        logger.info("Created %s %s", kind.name, record.id)
        return record

    def _update_status_sync(self, kind, record_id: uuid.UUID, actor_role: Optional[str]):
        with Session(self.engine) as session:
            record = session.get(kind.model, record_id)
            if not record:
                raise RecordNotFound(f"{kind.label} not found")

            lifecycle.transition(record, actor_role)

            try:
                session.add(record)
                session.commit()
                session.refresh(record)
            except SQLAlchemyError:
                session.rollback()
                raise

        return record

    async def update_status(self, kind, record_id, actor_role: Optional[str]):
        """Move a record to its kind's terminal status on behalf of a role."""
        kind = get_report_kind(kind)
        record_id = _parse_id(kind, record_id)

        try:
            record = await run_in_threadpool(self._update_status_sync, kind, record_id, actor_role)
        except SQLAlchemyError as e:
            logger.error("Failed to update %s %s: %s", kind.name, record_id, e, exc_info=True)
            raise StoreUnavailable()

        logger.info("%s %s marked %s by %s", kind.name, record.id, record.status, actor_role)
        return record


def _parse_id(kind, record_id) -> uuid.UUID:
    if isinstance(record_id, uuid.UUID):
        return record_id

    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        raise RecordNotFound(f"{kind.label} not found")


def serialize_record(record) -> dict:
    kind = kind_of(record)

    data = record.model_dump(exclude={"lat", "lng"})
    data["kind"] = kind.tag
    data["location"] = {"lat": record.lat, "lng": record.lng}

    return data


def get_report_store(db_engine=Depends(get_engine)) -> ReportStore:
    return ReportStore(db_engine)
