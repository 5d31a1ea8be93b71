from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID
from typing import Optional

from pydantic import BaseModel, field_serializer

from raumbuchung.schemas.common import DisplayDateTime


class OccupancyPointResponse(BaseModel):
    slot_start: DisplayDateTime
    slot_end: DisplayDateTime
    capacity: int
    occupancy: int
    occupancy_rate: float

    model_config = {"from_attributes": True}

    @field_serializer("occupancy_rate")
    def two_decimals(self, value: float) -> float:
        # kaufmännisch runden: 0.175 -> 0.18
        return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class OccupancyDataResponse(BaseModel):
    id: str
    name: str
    points: list[OccupancyPointResponse]

    model_config = {"from_attributes": True}


class OccupancyReportResponse(BaseModel):
    restaurant_id: UUID
    space_id: Optional[UUID]
    start: DisplayDateTime
    end: DisplayDateTime
    granularity: int
    restaurant_data: Optional[OccupancyDataResponse] = None
    space_data: list[OccupancyDataResponse]

    model_config = {"from_attributes": True}
