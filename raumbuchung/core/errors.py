"""
Fehler der Reservierungs- und Berichtslogik.

Statt einer Exception-Hierarchie gibt es eine einzige Klasse mit einem
`kind` und strukturiertem Kontext (IDs, Zeiten, Kapazitäten). Die HTTP-Schicht
übersetzt `kind` in den Statuscode.
"""
import enum
from typing import Any


class ErrorKind(enum.Enum):
    INVALID_RESERVATION = "INVALID_RESERVATION"
    RESERVATION_CONFLICT = "RESERVATION_CONFLICT"
    RESTAURANT_NOT_FOUND = "RESTAURANT_NOT_FOUND"
    SPACE_NOT_FOUND = "SPACE_NOT_FOUND"
    INVALID_REPORTING = "INVALID_REPORTING"


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str, **context: Any):
        self.kind = kind
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "detail": self.message,
            "context": {key: _plain(value) for key, value in self.context.items()},
        }


class VersionConflict(Exception):
    """Store meldet, dass der Datensatz zwischenzeitlich geändert wurde."""


class RetryAborted(RuntimeError):
    """Retry-Schleife wurde während des Backoffs abgebrochen."""


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (int, float, str, bool)):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def invalid_reservation(message: str, **context: Any) -> ServiceError:
    return ServiceError(ErrorKind.INVALID_RESERVATION, message, **context)


def invalid_reporting(message: str, **context: Any) -> ServiceError:
    return ServiceError(ErrorKind.INVALID_REPORTING, message, **context)


def restaurant_not_found(restaurant_id) -> ServiceError:
    return ServiceError(
        ErrorKind.RESTAURANT_NOT_FOUND,
        f"Restaurant nicht gefunden: {restaurant_id}",
        restaurant_id=restaurant_id,
    )


def space_not_found(restaurant_id, space_id) -> ServiceError:
    return ServiceError(
        ErrorKind.SPACE_NOT_FOUND,
        f"Raum {space_id} nicht gefunden in Restaurant {restaurant_id}",
        restaurant_id=restaurant_id,
        space_id=space_id,
    )


def reservation_conflict(
    restaurant_id,
    space_id,
    start,
    end,
    min_capacity: int,
    max_capacity: int,
    party_size: int,
    proposed_capacity: int,
    block_start,
) -> ServiceError:
    return ServiceError(
        ErrorKind.RESERVATION_CONFLICT,
        (
            f"Kapazitätskonflikt im Block ab {block_start}: {proposed_capacity} Gäste "
            f"(angefragt {party_size}) außerhalb von [{min_capacity}, {max_capacity}] "
            f"für Raum {space_id} in Restaurant {restaurant_id} ({start} - {end})"
        ),
        restaurant_id=restaurant_id,
        space_id=space_id,
        start=start,
        end=end,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        party_size=party_size,
        proposed_capacity=proposed_capacity,
        block_start=block_start,
    )
