import logging
from datetime import datetime
from uuid import UUID
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from raumbuchung.core.errors import VersionConflict
from raumbuchung.models import Reservation, ReservationStatus

logger = logging.getLogger("raumbuchung.repositories.reservation_store")


class ReservationStore:
    """Zugriff auf Reservierungen. Überschneidung: start < bis UND ende > von."""

    def __init__(self, db: Session):
        self.db = db

    def find_overlapping(
        self,
        restaurant_id: UUID,
        start: datetime,
        end: datetime,
        space_id: Optional[UUID] = None,
    ) -> list[Reservation]:
        query = self.db.query(Reservation).filter(
            Reservation.restaurant_id == restaurant_id,
            Reservation.start_time < end,
            Reservation.end_time > start,
            Reservation.status != ReservationStatus.CANCELLED,
        )
        if space_id is not None:
            query = query.filter(Reservation.space_id == space_id)
        return query.order_by(Reservation.start_time, Reservation.id).all()

    def save(self, reservation: Reservation) -> Reservation:
        self.db.add(reservation)
        try:
            self.db.commit()
        except (StaleDataError, IntegrityError) as e:
            self.db.rollback()
            logger.warning(f"Versionskonflikt beim Speichern von Reservierung {reservation.id}: {e}")
            raise VersionConflict(str(e)) from e
        self.db.refresh(reservation)
        return reservation

    def find_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        return self.db.query(Reservation).filter(Reservation.id == reservation_id).first()

    def delete_by_id(self, reservation_id: UUID) -> None:
        self.db.query(Reservation).filter(Reservation.id == reservation_id).delete()
        self.db.commit()

    def find_all(self) -> list[Reservation]:
        return self.db.query(Reservation).order_by(Reservation.start_time).all()

    def find_by_restaurant(self, restaurant_id: UUID) -> list[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.restaurant_id == restaurant_id
        ).order_by(Reservation.start_time).all()

    def find_by_space(self, restaurant_id: UUID, space_id: UUID) -> list[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.restaurant_id == restaurant_id,
            Reservation.space_id == space_id
        ).order_by(Reservation.start_time).all()
