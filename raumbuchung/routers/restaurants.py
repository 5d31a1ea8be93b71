from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from uuid import UUID

from raumbuchung.database import get_db
from raumbuchung.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
    SpaceCreate,
    SpaceResponse,
)
from raumbuchung.services import restaurant_service

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/", response_model=list[RestaurantResponse])
def get_all_restaurants(db: Session = Depends(get_db)):
    return restaurant_service.list_restaurants(db)


@router.get("/{id}", response_model=RestaurantResponse)
def get_restaurant(id: UUID, db: Session = Depends(get_db)):
    restaurant = restaurant_service.get_restaurant(db, id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return restaurant


@router.post("/", response_model=RestaurantResponse, status_code=201)
def create_restaurant(restaurant: RestaurantCreate, db: Session = Depends(get_db)):
    return restaurant_service.create_restaurant(db, restaurant)


@router.patch("/{id}", response_model=RestaurantResponse)
def update_restaurant(id: UUID, restaurant_update: RestaurantUpdate, db: Session = Depends(get_db)):
    restaurant = restaurant_service.update_restaurant(db, id, restaurant_update)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return restaurant


@router.delete("/{id}")
def delete_restaurant(id: UUID, db: Session = Depends(get_db)):
    if not restaurant_service.delete_restaurant(db, id):
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return {"message": "Restaurant gelöscht"}


@router.post("/{id}/spaces", response_model=RestaurantResponse, status_code=201)
def add_space(id: UUID, space: SpaceCreate, db: Session = Depends(get_db)):
    restaurant = restaurant_service.add_space(db, id, space)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return restaurant


@router.get("/{id}/spaces/{space_id}", response_model=SpaceResponse)
def get_space(id: UUID, space_id: UUID, db: Session = Depends(get_db)):
    space = restaurant_service.get_space(db, id, space_id)
    if not space:
        raise HTTPException(status_code=404, detail="Raum nicht gefunden")
    return space


@router.delete("/{id}/spaces/{space_id}", response_model=RestaurantResponse)
def remove_space(id: UUID, space_id: UUID, db: Session = Depends(get_db)):
    restaurant = restaurant_service.remove_space(db, id, space_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return restaurant
