from uuid import UUID
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from raumbuchung.models import Restaurant, Space


class RestaurantStore:

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        return self.db.query(Restaurant).options(
            selectinload(Restaurant.spaces)
        ).filter(Restaurant.id == restaurant_id).first()

    def find_space(self, restaurant_id: UUID, space_id: UUID) -> Optional[Space]:
        restaurant = self.find_by_id(restaurant_id)
        if not restaurant:
            return None
        return next((s for s in restaurant.spaces if s.id == space_id), None)

    def find_all(self) -> list[Restaurant]:
        return self.db.query(Restaurant).options(
            selectinload(Restaurant.spaces)
        ).order_by(Restaurant.name).all()

    def save(self, restaurant: Restaurant) -> Restaurant:
        self.db.add(restaurant)
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def delete(self, restaurant: Restaurant) -> None:
        self.db.delete(restaurant)
        self.db.commit()
