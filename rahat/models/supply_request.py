import uuid
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class SupplyRequest(SQLModel, table=True):
    __tablename__ = "supply_requests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Request fields
    type: str  # food/water/medicine/clothing/shelter/other
    quantity: int
    urgency: str = Field(index=True)  # low/medium/high
    description: str = Field(default="")
    contact_info: str

    # Delivery location
    lat: float
    lng: float

    status: str = Field(default="pending", index=True)  # "pending", "fulfilled"
