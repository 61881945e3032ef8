import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class DamageReport(SQLModel, table=True):
    __tablename__ = "damage_reports"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Damage fields
    type: str  # building/road/bridge/power/water/other
    severity: str = Field(index=True)  # low/medium/high
    description: str

    lat: float
    lng: float
