from enum import Enum
from pydantic import BaseModel, ConfigDict

class UnicornGender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

class FleetMember(BaseModel):
    Name: str
    Color: str
    Gender: UnicornGender

    model_config = ConfigDict(frozen=True)
