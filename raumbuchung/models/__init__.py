from raumbuchung.models.restaurant import Restaurant, Space
from raumbuchung.models.reservation import Reservation, ReservationStatus
