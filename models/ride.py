from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional

from models.fleet import FleetMember

class Coordinates(BaseModel):
    Latitude: float = Field(ge=-90, le=90, strict=True)
    Longitude: float = Field(ge=-180, le=180, strict=True)

class RideRequest(BaseModel):
    PickupLocation: Coordinates

class RideRecord(BaseModel):
    RideId: str
    User: str
    Unicorn: FleetMember
    RequestTime: datetime

    model_config = ConfigDict(frozen=True)

    def to_document(self) -> dict:
        """Mongo layout: RideId doubles as _id so inserts are insert-if-absent."""
        return {
            "_id": self.RideId,
            "RideId": self.RideId,
            "User": self.User,
            "Unicorn": self.Unicorn.model_dump(mode="json"),
            "RequestTime": self.RequestTime.isoformat(),
        }

class RideResponse(BaseModel):
    RideId: str
    Unicorn: FleetMember
    Eta: str = "30 seconds"
    Rider: str

class ErrorResponse(BaseModel):
    Error: str
    Reference: Optional[str] = None
