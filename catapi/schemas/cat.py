from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class Location(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def check_lng_lat_range(cls, value: List[float]) -> List[float]:
        lng, lat = value
        if not -180 <= lng <= 180 or not -90 <= lat <= 90:
            raise ValueError("coordinates must be [lng, lat] within range")
        return value

    @property
    def lng(self) -> float:
        return self.coordinates[0]

    @property
    def lat(self) -> float:
        return self.coordinates[1]


class CatCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    cat_name: str = Field(min_length=1)
    weight: float = Field(gt=0)
    birthdate: date
    filename: str = ""
    location: Optional[Location] = None


class CatModify(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    cat_name: Optional[str] = Field(default=None, min_length=1)
    weight: Optional[float] = Field(default=None, gt=0)
    birthdate: Optional[date] = None
    location: Optional[Location] = None


class CatAdminModify(CatModify):
    owner: Optional[str] = Field(default=None, min_length=1)
