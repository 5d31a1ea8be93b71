import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from raumbuchung.database import get_db
from raumbuchung.schemas.reservation import ReservationCreate, ReservationResponse
from raumbuchung.services import reservation_service

logger = logging.getLogger("raumbuchung.routers.reservations")

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("/", response_model=list[ReservationResponse])
def get_all_reservations(db: Session = Depends(get_db)):
    return reservation_service.list_reservations(db)


@router.get("/restaurant/{restaurant_id}", response_model=list[ReservationResponse])
def get_reservations_by_restaurant(restaurant_id: UUID, db: Session = Depends(get_db)):
    return reservation_service.list_by_restaurant(db, restaurant_id)


@router.get("/restaurant/{restaurant_id}/space/{space_id}", response_model=list[ReservationResponse])
def get_reservations_by_space(restaurant_id: UUID, space_id: UUID, db: Session = Depends(get_db)):
    return reservation_service.list_by_space(db, restaurant_id, space_id)


@router.get("/{id}", response_model=ReservationResponse)
def get_reservation(id: UUID, db: Session = Depends(get_db)):
    reservation = reservation_service.get_reservation(db, id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservierung nicht gefunden")
    return reservation


@router.post("/", response_model=ReservationResponse, status_code=201)
def create_reservation(reservation: ReservationCreate, db: Session = Depends(get_db)):
    """
    Legt eine Reservierung an.
    400 = ungültige Angaben, 404 = Restaurant/Raum fehlt, 409 = Kapazitätskonflikt
    """
    return reservation_service.create_reservation(db, reservation)


@router.delete("/{id}")
def cancel_reservation(id: UUID, db: Session = Depends(get_db)):
    if not reservation_service.cancel_reservation(db, id):
        raise HTTPException(status_code=404, detail="Reservierung nicht gefunden")
    return {"message": "Reservierung storniert"}
