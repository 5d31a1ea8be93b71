import re
from datetime import MAXYEAR, datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from raumbuchung.core import errors
from raumbuchung.core.time_blocks import DATETIME_FORMAT
from raumbuchung.database import get_db
from raumbuchung.repositories.reservation_store import ReservationStore
from raumbuchung.repositories.restaurant_store import RestaurantStore
from raumbuchung.schemas.reporting import OccupancyReportResponse
from raumbuchung.services.occupancy_service import OccupancyRequest, build_report

router = APIRouter(prefix="/reporting", tags=["reporting"])

_DISPLAY_DATE = re.compile(r"^\d{2}-\d{2}-(?P<year>\d+) \d{2}:\d{2}$")


def _parse_report_time(name: str, value: Optional[str]) -> Optional[datetime]:
    """
    Zeitpunkt aus der Query. Fehlende Werte meldet die Berichtsprüfung,
    Jahre nach 9999 gelten als zu großer Zeitraum.
    """
    if value is None:
        return None
    try:
        return datetime.strptime(value, DATETIME_FORMAT)
    except ValueError:
        match = _DISPLAY_DATE.match(value)
        if match and int(match.group("year")) > MAXYEAR:
            raise errors.invalid_reporting("Zeitraum ist zu groß", **{name: value})
        raise errors.invalid_reporting(
            f"{name} muss im Format TT-MM-JJJJ HH:MM sein",
            **{name: value},
        )


@router.get("/occupancy", response_model=OccupancyReportResponse)
def get_occupancy_report(
    restaurant_id: Optional[UUID] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    granularity: Optional[int] = None,
    space_id: Optional[UUID] = None,
    db: Session = Depends(get_db)
):
    """
    Auslastung eines Restaurants (mit Aufschlüsselung pro Raum)
    oder eines einzelnen Raums im Zeitraum [start, end).
    Zeiten im Format TT-MM-JJJJ HH:MM, Granularität in Minuten.
    """
    request = OccupancyRequest(
        restaurant_id=restaurant_id,
        space_id=space_id,
        start=_parse_report_time("start", start),
        end=_parse_report_time("end", end),
        granularity=granularity,
    )
    return build_report(request, RestaurantStore(db), ReservationStore(db))
