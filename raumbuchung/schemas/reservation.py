from uuid import UUID
from typing import Optional

from pydantic import BaseModel

from raumbuchung.models.reservation import ReservationStatus
from raumbuchung.schemas.common import DisplayDateTime


class ReservationCreate(BaseModel):
    """
    Felder sind optional, damit fehlende Angaben von der Reservierungsprüfung
    als ungültige Reservierung (400) gemeldet werden.
    """
    restaurant_id: Optional[UUID] = None
    space_id: Optional[UUID] = None
    customer_email: Optional[str] = None
    start_time: Optional[DisplayDateTime] = None
    end_time: Optional[DisplayDateTime] = None
    party_size: Optional[int] = None
    status: Optional[ReservationStatus] = ReservationStatus.CONFIRMED


class ReservationResponse(BaseModel):
    id: UUID
    restaurant_id: UUID
    space_id: UUID
    customer_email: str
    start_time: DisplayDateTime
    end_time: DisplayDateTime
    party_size: int
    status: ReservationStatus
    version: int

    model_config = {"from_attributes": True}
