from datetime import datetime, time
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from raumbuchung.core.time_blocks import DATETIME_FORMAT, TIME_FORMAT


def _parse_datetime(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DATETIME_FORMAT)
        except ValueError:
            raise ValueError(f"Datum/Uhrzeit muss im Format TT-MM-JJJJ HH:MM sein: {value}")
    return value


def _parse_time(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.strptime(value, TIME_FORMAT).time()
        except ValueError:
            raise ValueError(f"Uhrzeit muss im Format HH:MM:SS sein: {value}")
    return value


# "15-01-2026 19:30" nur im JSON, model_dump() liefert weiter datetime/time
DisplayDateTime = Annotated[
    datetime,
    BeforeValidator(_parse_datetime),
    PlainSerializer(lambda v: v.strftime(DATETIME_FORMAT), return_type=str, when_used="json"),
]

DisplayTime = Annotated[
    time,
    BeforeValidator(_parse_time),
    PlainSerializer(lambda v: v.strftime(TIME_FORMAT), return_type=str, when_used="json"),
]
