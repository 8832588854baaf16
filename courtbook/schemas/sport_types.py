# courtbook/schemas/sport_types.py

from typing import Optional
from pydantic import BaseModel, Field


class SportTypeCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    max_people: int = Field(gt=0)

    model_config = {"from_attributes": True}


class SportTypeRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    max_people: int

    model_config = {"from_attributes": True}
