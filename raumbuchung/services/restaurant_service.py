import logging
from uuid import UUID
from typing import Optional

from sqlalchemy.orm import Session

from raumbuchung.models import Restaurant, Space
from raumbuchung.repositories.restaurant_store import RestaurantStore
from raumbuchung.schemas.restaurant import RestaurantCreate, RestaurantUpdate, SpaceCreate

logger = logging.getLogger("raumbuchung.services.restaurant_service")


def list_restaurants(db: Session) -> list[Restaurant]:
    return RestaurantStore(db).find_all()


def get_restaurant(db: Session, restaurant_id: UUID) -> Optional[Restaurant]:
    return RestaurantStore(db).find_by_id(restaurant_id)


def create_restaurant(db: Session, data: RestaurantCreate) -> Restaurant:
    restaurant = Restaurant(**data.model_dump(exclude={"spaces"}))
    for space in data.spaces:
        restaurant.spaces.append(Space(**space.model_dump()))
    saved = RestaurantStore(db).save(restaurant)
    logger.info(f"Restaurant {saved.id} ({saved.name}) mit {len(saved.spaces)} Räumen angelegt")
    return saved


def update_restaurant(db: Session, restaurant_id: UUID, data: RestaurantUpdate) -> Optional[Restaurant]:
    store = RestaurantStore(db)
    restaurant = store.find_by_id(restaurant_id)
    if not restaurant:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(restaurant, field, value)
    return store.save(restaurant)


def delete_restaurant(db: Session, restaurant_id: UUID) -> bool:
    store = RestaurantStore(db)
    restaurant = store.find_by_id(restaurant_id)
    if not restaurant:
        return False
    store.delete(restaurant)
    logger.info(f"Restaurant {restaurant_id} gelöscht")
    return True


def add_space(db: Session, restaurant_id: UUID, data: SpaceCreate) -> Optional[Restaurant]:
    store = RestaurantStore(db)
    restaurant = store.find_by_id(restaurant_id)
    if not restaurant:
        return None
    restaurant.spaces.append(Space(**data.model_dump()))
    return store.save(restaurant)


def remove_space(db: Session, restaurant_id: UUID, space_id: UUID) -> Optional[Restaurant]:
    """
    Entfernt einen Raum. None wenn Restaurant fehlt,
    ein unbekannter Raum lässt das Restaurant unverändert.
    """
    store = RestaurantStore(db)
    restaurant = store.find_by_id(restaurant_id)
    if not restaurant:
        return None
    space = next((s for s in restaurant.spaces if s.id == space_id), None)
    if space:
        restaurant.spaces.remove(space)
        restaurant = store.save(restaurant)
    return restaurant


def get_space(db: Session, restaurant_id: UUID, space_id: UUID) -> Optional[Space]:
    return RestaurantStore(db).find_space(restaurant_id, space_id)
