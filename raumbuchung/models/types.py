from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from raumbuchung.config import settings
from raumbuchung.core.time_blocks import TIME_FORMAT


def _local_tz() -> ZoneInfo:
    return ZoneInfo(settings.local_timezone)


class UtcTimeOfDay(TypeDecorator):
    """
    Uhrzeit ohne Datum (z.B. Öffnungszeiten).
    Gespeichert wird "HH:MM:SS" in UTC, gelesen wird lokale Zeit.
    Für die Umrechnung gilt der Offset des heutigen Tages.
    """
    impl = String(8)
    cache_ok = True

    def process_bind_param(self, value: time | None, dialect):
        if value is None:
            return None
        tz = _local_tz()
        local_dt = datetime.combine(datetime.now(tz).date(), value, tzinfo=tz)
        return local_dt.astimezone(timezone.utc).strftime(TIME_FORMAT)

    def process_result_value(self, value: str | None, dialect):
        if value is None:
            return None
        utc_time = datetime.strptime(value, TIME_FORMAT).time()
        utc_dt = datetime.combine(datetime.now(timezone.utc).date(), utc_time, tzinfo=timezone.utc)
        return utc_dt.astimezone(_local_tz()).time().replace(tzinfo=None)
