"""
Zulassungsprüfung für neue Reservierungen.

Reihenfolge der Prüfungen:
1. Pflichtfelder
2. Start liegt in der Zukunft (abschaltbar über Settings)
3. Dauer > 0 und höchstens 24 Stunden
4. Start/Ende auf 30-Minuten-Raster
5. Restaurant und Raum existieren
6. Reservierung liegt innerhalb der Öffnungszeiten
7. Kapazität in jedem 30-Minuten-Block zwischen min und max
"""
import logging
from datetime import datetime, time, timedelta
from typing import Optional

from raumbuchung.config import settings
from raumbuchung.core import errors
from raumbuchung.core.time_blocks import BLOCK_INTERVAL, is_block_aligned, iter_blocks, overlaps
from raumbuchung.models import Reservation, Restaurant, Space
from raumbuchung.repositories.reservation_store import ReservationStore
from raumbuchung.repositories.restaurant_store import RestaurantStore

logger = logging.getLogger("raumbuchung.services.capacity_validator")

MAX_DURATION = timedelta(hours=24)

REQUIRED_FIELDS = (
    "restaurant_id",
    "space_id",
    "start_time",
    "end_time",
    "party_size",
    "status",
    "customer_email",
)


def check_required_fields(candidate: Reservation) -> None:
    missing = [field for field in REQUIRED_FIELDS if getattr(candidate, field, None) is None]
    if missing:
        raise errors.invalid_reservation(
            f"Pflichtfelder fehlen: {', '.join(missing)}",
            missing=", ".join(missing),
        )


def _check_time_span(candidate: Reservation, now: datetime, enforce_future_start: bool) -> None:
    start, end = candidate.start_time, candidate.end_time

    if enforce_future_start and not start > now:
        raise errors.invalid_reservation(
            "Reservierung muss in der Zukunft beginnen",
            start=start,
            now=now,
        )

    duration = end - start
    if duration <= timedelta(0) or duration > MAX_DURATION:
        raise errors.invalid_reservation(
            "Dauer der Reservierung muss positiv sein und darf 24 Stunden nicht überschreiten",
            start=start,
            end=end,
        )

    if not is_block_aligned(start) or not is_block_aligned(end):
        raise errors.invalid_reservation(
            f"Reservierungszeiten müssen auf {BLOCK_INTERVAL}-Minuten-Blöcke fallen",
            start=start,
            end=end,
        )


def is_within_operating_hours(start: datetime, end: datetime, opens: time, closes: time) -> bool:
    # Öffnungszeiten am selben Tag (z.B. 09:00 - 17:00)
    if opens <= closes:
        return (
            start.date() == end.date()
            and start.time() >= opens
            and end.time() <= closes
        )

    # Über Mitternacht (z.B. 18:00 - 02:00)
    if start.time() >= opens:
        # Restaurant öffnet am Tag des Reservierungsbeginns
        window_start = datetime.combine(start.date(), opens)
        window_end = datetime.combine(start.date() + timedelta(days=1), closes)
    else:
        # Restaurant hat am Vortag geöffnet
        window_start = datetime.combine(start.date() - timedelta(days=1), opens)
        window_end = datetime.combine(start.date(), closes)
    return start >= window_start and end <= window_end


def _resolve_space(candidate: Reservation, restaurant_store: RestaurantStore) -> tuple[Restaurant, Space]:
    restaurant = restaurant_store.find_by_id(candidate.restaurant_id)
    if not restaurant:
        raise errors.restaurant_not_found(candidate.restaurant_id)

    space = next((s for s in restaurant.spaces if s.id == candidate.space_id), None)
    if not space:
        raise errors.space_not_found(candidate.restaurant_id, candidate.space_id)
    return restaurant, space


def check_capacity(
    candidate: Reservation,
    space: Space,
    existing: list[Reservation],
) -> None:
    """
    Prüft jeden 30-Minuten-Block der Reservierung:
    Summe der überlappenden Gruppen + neue Gruppe muss in [min, max] liegen.
    """
    start, end = candidate.start_time, candidate.end_time
    party_size = candidate.party_size
    min_capacity, max_capacity = space.min_capacity, space.max_capacity

    def conflict(proposed: int, block_start: datetime):
        return errors.reservation_conflict(
            candidate.restaurant_id,
            candidate.space_id,
            start,
            end,
            min_capacity,
            max_capacity,
            party_size,
            proposed,
            block_start,
        )

    if not existing:
        if party_size < min_capacity or party_size > max_capacity:
            raise conflict(party_size, start)
        return

    for block_start, block_end in iter_blocks(start, end):
        occupied = sum(
            r.party_size for r in existing
            if overlaps(r.start_time, r.end_time, block_start, block_end)
        )
        proposed = occupied + party_size
        if proposed < min_capacity or proposed > max_capacity:
            raise conflict(proposed, block_start)


def validate(
    candidate: Reservation,
    restaurant_store: RestaurantStore,
    reservation_store: ReservationStore,
    now: Optional[datetime] = None,
    enforce_future_start: Optional[bool] = None,
) -> Space:
    """
    Führt alle Prüfungen gegen den aktuellen Stand der Datenbank aus.
    Gibt den gebuchten Raum zurück, wirft ServiceError bei Verstoß.
    """
    check_required_fields(candidate)

    if enforce_future_start is None:
        enforce_future_start = settings.enforce_future_start
    _check_time_span(candidate, now or datetime.now(), enforce_future_start)

    restaurant, space = _resolve_space(candidate, restaurant_store)

    if not is_within_operating_hours(
        candidate.start_time, candidate.end_time, restaurant.start_time, restaurant.end_time
    ):
        raise errors.invalid_reservation(
            (
                f"Reservierung {candidate.start_time} - {candidate.end_time} liegt außerhalb "
                f"der Öffnungszeiten {restaurant.start_time} - {restaurant.end_time}"
            ),
            restaurant_start=restaurant.start_time,
            restaurant_end=restaurant.end_time,
            start=candidate.start_time,
            end=candidate.end_time,
        )

    existing = reservation_store.find_overlapping(
        candidate.restaurant_id,
        candidate.start_time,
        candidate.end_time,
        space_id=candidate.space_id,
    )
    existing = [r for r in existing if r.id != candidate.id]
    check_capacity(candidate, space, existing)

    logger.debug(
        f"Reservierung für Raum {space.id} geprüft: {candidate.party_size} Gäste, "
        f"{len(existing)} überlappende Reservierungen"
    )
    return space
