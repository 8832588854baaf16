# courtbook/schemas/courts.py

from typing import Optional
from pydantic import BaseModel, Field

from .sport_types import SportTypeRead


class CourtCreate(BaseModel):
    name: str = Field(min_length=1)
    sport_type_id: int
    price_per_hour: float = Field(gt=0)
    max_people: int = Field(gt=0)
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class CourtUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    sport_type_id: Optional[int] = None
    price_per_hour: Optional[float] = Field(None, gt=0)
    max_people: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class CourtRead(BaseModel):
    id: int
    name: str
    sport_type_id: int
    price_per_hour: float
    max_people: int
    image_url: Optional[str] = None
    active: bool
    sport_type: Optional[SportTypeRead] = None

    model_config = {"from_attributes": True}


class SportCourtsGroup(BaseModel):
    """Active courts of one sport type (booking page)."""
    sport_type: SportTypeRead
    courts: list[CourtRead]
