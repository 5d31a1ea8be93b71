"""
Auslastungsberichte pro Raum und pro Restaurant.

Der Zeitraum [start, end) wird in Slots der Länge `granularity` geteilt.
Pro Slot wird die Summe der Gruppengrößen aller überlappenden Reservierungen
gebildet. Die Restaurant-Werte entstehen ausschließlich aus den bereits
berechneten Raum-Werten, damit beide Sichten immer zusammenpassen.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional
from uuid import UUID

from raumbuchung.core import errors
from raumbuchung.core.time_blocks import (
    BLOCK_INTERVAL,
    MAX_SLOT_COUNT,
    is_block_aligned,
    iter_blocks,
    overlaps,
    slot_count,
)
from raumbuchung.models import Reservation, Restaurant, Space
from raumbuchung.repositories.reservation_store import ReservationStore
from raumbuchung.repositories.restaurant_store import RestaurantStore

logger = logging.getLogger("raumbuchung.services.occupancy_service")


@dataclass(frozen=True)
class OccupancyRequest:
    restaurant_id: Optional[UUID]
    start: Optional[datetime]
    end: Optional[datetime]
    granularity: Optional[int] = None
    space_id: Optional[UUID] = None


@dataclass(frozen=True)
class OccupancyPoint:
    slot_start: datetime
    slot_end: datetime
    capacity: int
    occupancy: int
    occupancy_rate: float


@dataclass(frozen=True)
class OccupancyData:
    id: str
    name: str
    points: tuple[OccupancyPoint, ...]


@dataclass(frozen=True)
class OccupancyReport:
    restaurant_id: UUID
    space_id: Optional[UUID]
    start: datetime
    end: datetime
    granularity: int
    restaurant_data: Optional[OccupancyData]
    space_data: tuple[OccupancyData, ...]


def _rate(occupancy: int, capacity: int) -> float:
    return 0.0 if capacity == 0 else occupancy / capacity


def validate_request(request: OccupancyRequest) -> int:
    """Prüft die Parameter und gibt die Anzahl der Slots zurück."""
    if (
        request.restaurant_id is None
        or request.start is None
        or request.end is None
        or request.granularity is None
    ):
        raise errors.invalid_reporting("Parameter dürfen nicht leer sein")

    if not request.start < request.end:
        raise errors.invalid_reporting(
            "Startzeit muss vor der Endzeit liegen",
            start=request.start,
            end=request.end,
        )

    if not is_block_aligned(request.start) or not is_block_aligned(request.end):
        raise errors.invalid_reporting(
            "Start und Ende müssen auf volle oder halbe Stunden fallen",
            start=request.start,
            end=request.end,
        )

    if request.granularity <= 0 or request.granularity % BLOCK_INTERVAL != 0:
        raise errors.invalid_reporting(
            f"Granularität muss positiv und durch {BLOCK_INTERVAL} teilbar sein",
            granularity=request.granularity,
        )

    count = slot_count(request.start, request.end, request.granularity)
    if count > MAX_SLOT_COUNT:
        raise errors.invalid_reporting(
            "Zeitraum ist zu groß",
            start=request.start,
            end=request.end,
            granularity=request.granularity,
            slot_count=count,
        )

    try:
        request.start + timedelta(minutes=count * request.granularity)
    except OverflowError:
        # letzter Slot endet nach dem 31.12.9999
        raise errors.invalid_reporting(
            "Zeitraum ist zu groß",
            start=request.start,
            end=request.end,
            granularity=request.granularity,
        )
    return count


def _resolve(request: OccupancyRequest, restaurant_store: RestaurantStore) -> tuple[Restaurant, Optional[Space]]:
    restaurant = restaurant_store.find_by_id(request.restaurant_id)
    if not restaurant:
        raise errors.restaurant_not_found(request.restaurant_id)

    if request.space_id is None:
        return restaurant, None

    space = next((s for s in restaurant.spaces if s.id == request.space_id), None)
    if not space:
        raise errors.space_not_found(request.restaurant_id, request.space_id)
    return restaurant, space


def _windows(request: OccupancyRequest) -> Iterator[tuple[datetime, datetime]]:
    # letzter Slot darf über das Ende hinausreichen
    return iter_blocks(request.start, request.end, request.granularity)


def space_occupancy(
    space: Space,
    reservations: list[Reservation],
    windows: Iterable[tuple[datetime, datetime]],
) -> OccupancyData:
    points = []
    for slot_start, slot_end in windows:
        occupancy = sum(
            r.party_size for r in reservations
            if overlaps(r.start_time, r.end_time, slot_start, slot_end)
        )
        points.append(OccupancyPoint(
            slot_start=slot_start,
            slot_end=slot_end,
            capacity=space.max_capacity,
            occupancy=occupancy,
            occupancy_rate=_rate(occupancy, space.max_capacity),
        ))
    return OccupancyData(id=str(space.id), name=space.name, points=tuple(points))


def restaurant_occupancy(
    restaurant: Restaurant,
    space_data: tuple[OccupancyData, ...],
    windows: Iterable[tuple[datetime, datetime]],
) -> OccupancyData:
    """Faltet die Raum-Werte zu Restaurant-Werten zusammen."""
    total_capacity = sum(s.max_capacity for s in restaurant.spaces)
    points = []
    for i, (slot_start, slot_end) in enumerate(windows):
        occupancy = sum(data.points[i].occupancy for data in space_data)
        points.append(OccupancyPoint(
            slot_start=slot_start,
            slot_end=slot_end,
            capacity=total_capacity,
            occupancy=occupancy,
            occupancy_rate=_rate(occupancy, total_capacity),
        ))
    return OccupancyData(id=str(restaurant.id), name=restaurant.name, points=tuple(points))


def build_report(
    request: OccupancyRequest,
    restaurant_store: RestaurantStore,
    reservation_store: ReservationStore,
) -> OccupancyReport:
    count = validate_request(request)
    restaurant, space = _resolve(request, restaurant_store)

    if space is None:
        # Ganzes Restaurant: jeder Raum einzeln, dann Summe
        reservations = reservation_store.find_overlapping(request.restaurant_id, request.start, request.end)
        space_data = tuple(
            space_occupancy(s, [r for r in reservations if r.space_id == s.id], _windows(request))
            for s in restaurant.spaces
        )
        restaurant_data = restaurant_occupancy(restaurant, space_data, _windows(request))
    else:
        reservations = reservation_store.find_overlapping(
            request.restaurant_id, request.start, request.end, space_id=space.id
        )
        space_data = (space_occupancy(space, reservations, _windows(request)),)
        restaurant_data = None

    logger.info(
        f"Auslastungsbericht für Restaurant {request.restaurant_id}"
        f"{f' / Raum {request.space_id}' if request.space_id else ''}: "
        f"{count} Slots à {request.granularity} Min, {len(reservations)} Reservierungen"
    )

    return OccupancyReport(
        restaurant_id=request.restaurant_id,
        space_id=request.space_id,
        start=request.start,
        end=request.end,
        granularity=request.granularity,
        restaurant_data=restaurant_data,
        space_data=space_data,
    )
