import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class SOSAlert(SQLModel, table=True):
    __tablename__ = "sos_alerts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    name: str
    contact_info: str
    description: str

    # Usually taken from the device's live geolocation
    lat: float
    lng: float

    status: str = Field(default="active", index=True)  # "active", "resolved"
