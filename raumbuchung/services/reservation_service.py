import logging
import threading
import time
from uuid import UUID
from typing import Optional

from sqlalchemy.orm import Session

from raumbuchung.config import settings
from raumbuchung.core.errors import RetryAborted, VersionConflict
from raumbuchung.models import Reservation
from raumbuchung.repositories.reservation_store import ReservationStore
from raumbuchung.repositories.restaurant_store import RestaurantStore
from raumbuchung.schemas.reservation import ReservationCreate
from raumbuchung.services import capacity_validator
from raumbuchung.services.space_gate import SpaceGate, space_gate

logger = logging.getLogger("raumbuchung.services.reservation_service")


def _backoff(delay_seconds: float, cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is None:
        time.sleep(delay_seconds)
        return
    if cancel_event.wait(delay_seconds):
        raise RetryAborted("Reservierung während der Wartezeit zwischen zwei Versuchen abgebrochen")


def create_reservation(
    db: Session,
    data: ReservationCreate,
    cancel_event: Optional[threading.Event] = None,
    gate: SpaceGate = space_gate,
) -> Reservation:
    """
    Prüft und speichert eine neue Reservierung.

    - Pflichtfelder werden vor jedem DB-Zugriff geprüft
    - Pro Raum läuft nur ein Prüfen-und-Speichern gleichzeitig
    - Bei Versionskonflikt: neu laden, neu prüfen, neu speichern
      (max. `settings.max_retry_attempts` Versuche, Wartezeit 0 / 50 ms)
    """
    candidate = Reservation(**data.model_dump())
    capacity_validator.check_required_fields(candidate)

    restaurant_store = RestaurantStore(db)
    reservation_store = ReservationStore(db)
    max_attempts = settings.max_retry_attempts

    with gate.hold(candidate.space_id):
        for attempt in range(max_attempts):
            if cancel_event is not None and cancel_event.is_set():
                raise RetryAborted("Reservierung vor dem nächsten Versuch abgebrochen")

            # Immer den aktuellen Stand aus der DB prüfen
            db.expire_all()
            capacity_validator.validate(candidate, restaurant_store, reservation_store)

            try:
                saved = reservation_store.save(candidate)
            except VersionConflict:
                if attempt == max_attempts - 1:
                    logger.error(
                        f"Reservierung für Raum {candidate.space_id} nach {max_attempts} Versuchen "
                        f"nicht gespeichert (Versionskonflikt)"
                    )
                    raise
                delay_ms = settings.retry_base_delay_ms * attempt
                logger.warning(
                    f"Versionskonflikt (Versuch {attempt + 1}/{max_attempts}) für Raum "
                    f"{candidate.space_id}. Warte {delay_ms} ms..."
                )
                _backoff(delay_ms / 1000, cancel_event)
                continue

            logger.info(
                f"Reservierung {saved.id} angelegt: Raum {saved.space_id}, "
                f"{saved.start_time} - {saved.end_time}, {saved.party_size} Gäste"
            )
            return saved

    # max_retry_attempts < 1
    raise VersionConflict("Reservierung konnte nicht gespeichert werden")


def list_reservations(db: Session) -> list[Reservation]:
    return ReservationStore(db).find_all()


def get_reservation(db: Session, reservation_id: UUID) -> Optional[Reservation]:
    return ReservationStore(db).find_by_id(reservation_id)


def cancel_reservation(db: Session, reservation_id: UUID) -> bool:
    store = ReservationStore(db)
    if not store.find_by_id(reservation_id):
        return False
    store.delete_by_id(reservation_id)
    logger.info(f"Reservierung {reservation_id} storniert")
    return True


def list_by_restaurant(db: Session, restaurant_id: UUID) -> list[Reservation]:
    return ReservationStore(db).find_by_restaurant(restaurant_id)


def list_by_space(db: Session, restaurant_id: UUID, space_id: UUID) -> list[Reservation]:
    return ReservationStore(db).find_by_space(restaurant_id, space_id)
