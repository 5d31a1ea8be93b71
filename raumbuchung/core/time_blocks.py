"""
Zeitblock-Raster für Reservierungen und Auslastungsberichte.

Kapazität wird in festen 30-Minuten-Blöcken gerechnet. Alle Reservierungs-
und Berichtsgrenzen müssen auf volle oder halbe Stunden fallen.
"""
from datetime import datetime, timedelta
from typing import Iterator

BLOCK_INTERVAL = 30  # Minuten

# Anzahl Slots eines Berichts muss in einen 32-Bit-Zähler passen
MAX_SLOT_COUNT = 2**31 - 1

# Anzeigeformat an der API-Grenze (z.B. "15-01-2026 19:30")
DATETIME_FORMAT = "%d-%m-%Y %H:%M"
TIME_FORMAT = "%H:%M:%S"


def is_block_aligned(value: datetime) -> bool:
    return value.minute % BLOCK_INTERVAL == 0


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Halboffene Intervalle [a_start, a_end) und [b_start, b_end) überschneiden sich."""
    return a_start < b_end and b_start < a_end


def duration_minutes(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def slot_count(start: datetime, end: datetime, granularity: int) -> int:
    minutes = duration_minutes(start, end)
    return (minutes + granularity - 1) // granularity


def iter_blocks(start: datetime, end: datetime, step: int = BLOCK_INTERVAL) -> Iterator[tuple[datetime, datetime]]:
    """Liefert aufeinanderfolgende Fenster [slot_start, slot_end) ab start."""
    slot_start = start
    while slot_start < end:
        slot_end = slot_start + timedelta(minutes=step)
        yield slot_start, slot_end
        slot_start = slot_end
