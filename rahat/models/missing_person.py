import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class MissingPerson(SQLModel, table=True):
    __tablename__ = "missing_persons"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Person fields
    name: str
    age: int
    gender: str  # male/female/other
    last_seen: str
    description: str = Field(default="")
    contact_info: str

    # Last known location
    lat: float
    lng: float

    status: str = Field(default="missing", index=True)  # "missing", "found"
