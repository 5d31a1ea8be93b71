import uuid

from sqlalchemy import Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from raumbuchung.database import Base
from raumbuchung.models.types import UtcTimeOfDay


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    address = Column(String(300), nullable=True)
    cuisine_type = Column(String(100), nullable=True)
    capacity = Column(Integer, nullable=True)
    # Öffnungszeiten, dürfen über Mitternacht gehen (z.B. 18:00 - 02:00)
    start_time = Column(UtcTimeOfDay, nullable=False)
    end_time = Column(UtcTimeOfDay, nullable=False)

    spaces = relationship(
        "Space",
        back_populates="restaurant",
        order_by="Space.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )


class Space(Base):
    __tablename__ = "spaces"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(200), nullable=False)
    min_capacity = Column(Integer, nullable=False)
    max_capacity = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    restaurant = relationship("Restaurant", back_populates="spaces")
