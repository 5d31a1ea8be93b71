from pydantic import BaseModel, Field, model_validator
from uuid import UUID
from typing import Optional

from raumbuchung.schemas.common import DisplayTime


class SpaceCreate(BaseModel):
    name: str
    min_capacity: int = Field(ge=0)
    max_capacity: int = Field(ge=0)

    @model_validator(mode="after")
    def min_not_above_max(self):
        if self.min_capacity > self.max_capacity:
            raise ValueError('min_capacity darf nicht größer als max_capacity sein')
        return self


class SpaceResponse(BaseModel):
    id: UUID
    name: str
    min_capacity: int
    max_capacity: int

    model_config = {"from_attributes": True}


class RestaurantCreate(BaseModel):
    name: str
    address: Optional[str] = None
    cuisine_type: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    start_time: DisplayTime
    end_time: DisplayTime
    spaces: list[SpaceCreate] = []


class RestaurantUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    cuisine_type: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    start_time: Optional[DisplayTime] = None
    end_time: Optional[DisplayTime] = None


class RestaurantResponse(BaseModel):
    id: UUID
    name: str
    address: Optional[str]
    cuisine_type: Optional[str]
    capacity: Optional[int]
    start_time: DisplayTime
    end_time: DisplayTime
    spaces: list[SpaceResponse]

    model_config = {"from_attributes": True}
