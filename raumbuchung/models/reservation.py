import uuid
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String, Uuid, Index

from raumbuchung.database import Base


class ReservationStatus(enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Reservation(Base):
    """
    Buchung eines Raums. Start/Ende sind lokale Wandzeit ohne Zeitzone.
    `version` wird von SQLAlchemy bei jedem Update hochgezählt (optimistic locking).
    """
    __tablename__ = "reservations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Keine ForeignKeys: Reservierungen referenzieren nur, Räume sind in Restaurants eingebettet
    restaurant_id = Column(Uuid, nullable=False)
    space_id = Column(Uuid, nullable=False)
    customer_email = Column(String(320), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(Enum(ReservationStatus), nullable=False, default=ReservationStatus.CONFIRMED)
    created_on = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("ix_reservations_space_overlap", "restaurant_id", "space_id", "start_time", "end_time"),
    )
